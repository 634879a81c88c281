"""
Serializer for INI documents.

Converts an IniDocument back to text lines in canonical layout::

    <section comments, verbatim>
    [Section]
    ; <key comment>
    key=value
    <blank line>

Key comments are always written with ``;`` whatever delimiter they
originally had.  Values are written as stored; quotes survive only if
they are part of the stored value.
"""
from __future__ import annotations

from core.document import Entry, IniDocument, Section


KEY_COMMENT_PREFIX = "; "


def format_entry(key: str, entry: Entry) -> list[str]:
    """Render one entry (and its comment, if any) as text lines."""
    lines: list[str] = []
    if entry.comment:
        lines.append(f"{KEY_COMMENT_PREFIX}{entry.comment}")
    lines.append(f"{key}={entry.value}")
    return lines


def serialize_section(section: Section, comments: tuple[str, ...] = ()) -> list[str]:
    """Render one section: its comments, header, entries, trailing blank."""
    lines = list(comments)
    lines.append(f"[{section.name}]")
    for key, entry in section.items():
        lines.extend(format_entry(key, entry))
    lines.append("")
    return lines


def serialize(doc: IniDocument) -> list[str]:
    """Serialize a whole document into text lines (no line terminators).

    Comment lists for names without a section are not rendered.
    """
    lines: list[str] = []
    for section in doc.sections:
        lines.extend(serialize_section(section, doc.section_comments(section.name)))
    return lines
