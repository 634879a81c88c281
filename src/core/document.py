"""
IniDocument — ordered in-memory model of one INI file.

The document is the **single in-memory representation** of a file.  It
is pure data: parsing lives in ``ini_format.parser``, rendering in
``ini_format.serializer`` and file access in ``infrastructure``.

Two parallel mappings are maintained:

- ``section name → Section`` (each Section maps ``key → Entry``)
- ``section name → [comment line, ...]`` rendered before the header

Both levels rely on ``dict`` insertion order, which is the order the
serializer writes.  Comment lists may exist for names that have no
section yet; they are simply not rendered until the section appears.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Entry:
    """One value with its optional comment (rendered as ``; comment``)."""
    value: str
    comment: Optional[str] = None


@dataclass(slots=True)
class Section:
    """
    A named, insertion-ordered group of entries.

    Attributes:
        name:    Text between the brackets, case-sensitive.
        entries: ``key → Entry``; keys are unique, last write wins.
    """
    name: str
    entries: dict[str, Entry] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def get(self, key: str) -> Optional[Entry]:
        return self.entries.get(key)

    def items(self):
        return self.entries.items()


class IniDocument:
    """
    Mutable ordered collection of :class:`Section` objects plus the
    comment lines attached to each section header.

    Internal invariant: removing a section through this class also
    removes its comment list, so no comments dangle for removed sections.
    """

    __slots__ = ("_sections", "_comments")

    def __init__(self) -> None:
        self._sections: dict[str, Section] = {}
        self._comments: dict[str, list[str]] = {}

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    @property
    def section_names(self) -> tuple[str, ...]:
        return tuple(self._sections)

    @property
    def sections(self) -> tuple[Section, ...]:
        """Sections in insertion order (read-only view)."""
        return tuple(self._sections.values())

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def has_section(self, name: str) -> bool:
        return name in self._sections

    def get_section(self, name: str) -> Optional[Section]:
        return self._sections.get(name)

    def ensure_section(self, name: str) -> Section:
        """Return the section called *name*, appending an empty one if new."""
        section = self._sections.get(name)
        if section is None:
            section = Section(name)
            self._sections[name] = section
            logger.debug("Created section [%s]", name)
        return section

    def remove_section(self, name: str) -> bool:
        """Remove a section and its comments.  ``False`` if absent."""
        if name not in self._sections:
            return False
        del self._sections[name]
        self._comments.pop(name, None)
        logger.debug("Removed section [%s]", name)
        return True

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def get_entry(self, section: str, key: str) -> Optional[Entry]:
        sect = self._sections.get(section)
        if sect is None:
            return None
        return sect.entries.get(key)

    def set_entry(self, section: str, key: str, entry: Entry) -> None:
        """Store *entry*, creating the section if needed and replacing any
        previous entry for *key*."""
        self.ensure_section(section).entries[key] = entry

    def remove_entry(
        self, section: str, key: str, remove_empty_section: bool = False,
    ) -> bool:
        """Remove one key.  ``False`` (and no change) if the section or key
        is absent.  With *remove_empty_section* a section left without keys
        is removed along with its comments."""
        sect = self._sections.get(section)
        if sect is None or key not in sect.entries:
            return False
        del sect.entries[key]
        if remove_empty_section and not sect.entries:
            self.remove_section(section)
        return True

    # ------------------------------------------------------------------
    # Section comments
    # ------------------------------------------------------------------

    @property
    def commented_names(self) -> tuple[str, ...]:
        """Every name that has a comment list, including dangling ones."""
        return tuple(self._comments)

    def section_comments(self, name: str) -> tuple[str, ...]:
        return tuple(self._comments.get(name, ()))

    def set_section_comments(self, name: str, lines: list[str]) -> None:
        """Replace the comment list of *name* with a copy of *lines*."""
        self._comments[name] = list(lines)

    def add_section_comment(self, name: str, line: str) -> None:
        self._comments.setdefault(name, []).append(line)

    def remove_section_comment(self, name: str, line: str) -> bool:
        """Remove the first exact occurrence of *line*.  ``False`` if none."""
        lines = self._comments.get(name)
        if not lines or line not in lines:
            return False
        lines.remove(line)
        return True

    def clear_section_comments(self) -> None:
        """Empty every comment list (the lists themselves are kept)."""
        for lines in self._comments.values():
            lines.clear()

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------

    def copy(self) -> IniDocument:
        dup = IniDocument()
        dup._sections = copy.deepcopy(self._sections)
        dup._comments = {name: list(lines) for name, lines in self._comments.items()}
        return dup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniDocument):
            return NotImplemented
        return (
            list(self._sections.items()) == list(other._sections.items())
            and self._comments == other._comments
        )

    def __repr__(self) -> str:
        return f"IniDocument(sections={list(self._sections)!r})"
