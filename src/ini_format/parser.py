"""
Parser for INI text.

Line formats::

    ; comment        (also '#' or anything starting with '/')
    [Section]
    key = value
    key = "quoted value"

Every line is classified into a :class:`ParsedLine` first; ``parse``
then folds those outcomes into an :class:`IniDocument`.  Malformed lines
are classified as ``IGNORED`` and skipped; they never raise.

Comment lines are buffered and attached to the section that is current
when the *next* header (or the end of input) is reached.  Comments read
before the first header have no section and are dropped.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional

from core.document import Entry, IniDocument
from core.line_kind import LineKind

logger = logging.getLogger(__name__)


COMMENT_INDICATORS = (";", "#", "/")
QUOTE = '"'


@dataclass(frozen=True, slots=True)
class ParsedLine:
    """Tagged outcome for a single raw line.

    Only the fields relevant to ``kind`` are set: ``text`` for comments,
    ``name`` for section headers, ``key`` / ``value`` for entries.
    """
    kind: LineKind
    text: str = ""
    name: Optional[str] = None
    key: Optional[str] = None
    value: Optional[str] = None


def is_comment(text: str) -> bool:
    return text.strip().startswith(COMMENT_INDICATORS)


def is_empty(text: str) -> bool:
    return not text.strip()


def is_section_header(text: str) -> bool:
    content = text.strip()
    return content.startswith("[") and content.endswith("]")


def unquote(value: str) -> str:
    """Strip exactly one layer of surrounding double quotes."""
    if len(value) >= 2 and value.startswith(QUOTE) and value.endswith(QUOTE):
        return value[1:-1]
    return value


def parse_line(text: str) -> ParsedLine:
    """Classify one raw line.  Never raises."""
    content = text.strip()

    if content.startswith(COMMENT_INDICATORS):
        return ParsedLine(LineKind.COMMENT, text=content)

    if not content:
        return ParsedLine(LineKind.EMPTY)

    if is_section_header(content):
        return ParsedLine(LineKind.SECTION, text=content, name=content[1:-1])

    key, sep, value = content.partition("=")
    if not sep:
        return ParsedLine(LineKind.IGNORED, text=content)

    return ParsedLine(
        LineKind.ENTRY,
        text=content,
        key=key.strip(),
        value=unquote(value.strip()),
    )


def parse_lines(lines: Iterable[str]) -> tuple[IniDocument, Counter[LineKind]]:
    """
    Build an :class:`IniDocument` from raw lines and report how many
    lines of each :class:`LineKind` were seen.

    Entry lines that appear before any section header have nowhere to be
    stored and are counted as ``IGNORED``.
    """
    doc = IniDocument()
    counts: Counter[LineKind] = Counter()
    current: str = ""
    pending: list[str] = []

    for raw in lines:
        parsed = parse_line(raw)
        kind = parsed.kind

        if kind is LineKind.COMMENT:
            pending.append(parsed.text)
        elif kind is LineKind.SECTION:
            if current:
                doc.set_section_comments(current, pending)
            # Comments seen before the first header are discarded here.
            pending.clear()
            current = parsed.name
            doc.ensure_section(current)
        elif kind is LineKind.ENTRY:
            if not doc.has_section(current):
                kind = LineKind.IGNORED
            else:
                doc.set_entry(current, parsed.key, Entry(parsed.value))

        counts[kind] += 1

    if current:
        doc.set_section_comments(current, pending)

    if counts[LineKind.IGNORED]:
        logger.debug("Ignored %d malformed line(s)", counts[LineKind.IGNORED])
    return doc, counts


def parse(lines: Iterable[str]) -> IniDocument:
    """Parse raw lines into an :class:`IniDocument`."""
    doc, _ = parse_lines(lines)
    return doc
