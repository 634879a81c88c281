"""
IniFile — the caller-facing handle for one INI document.

A handle owns one :class:`IniDocument`, the file path it is bound to and
the text encoding used for that file.  Mutations work purely in memory;
only :meth:`IniFile.load` and :meth:`IniFile.save` touch the disk, and
both run under the path's lock from the shared
:class:`FileLockRegistry`, so handles in different threads that target
the same file never interleave their reads and writes.

A handle is *not* safe for concurrent mutation from several threads;
callers sharing one handle must synchronise themselves.

Usage::

    with IniFile("settings.ini", encoding=UTF8) as ini:
        ini.set_value("Window", "Title", "My App", use_quotes=True)
        ini.add_key_comment("Window", "Title", "shown in the title bar")
        ini.save()
"""
from __future__ import annotations

import logging
import os
import weakref
from pathlib import Path
from typing import Optional

from core.document import Entry, IniDocument
from core.errors import ConfigurationError, NotFoundError
from infrastructure.document_io import (
    load_document,
    normalize_encoding,
    save_document,
)
from infrastructure.file_locks import FileLockRegistry, default_registry

logger = logging.getLogger(__name__)


class IniFile:
    """
    Load, mutate and save one INI file while keeping its comments.

    Args:
        file_path: File to bind to, stored as an absolute path.  When
                   given, the file is loaded immediately (a missing file
                   gives an empty document).
        encoding:  Any codec name Python knows.  Defaults to ``cp932``
                   (Shift-JIS); pass ``"utf-8"`` for UTF-8 files.
        registry:  Lock registry to coordinate with.  Defaults to the
                   process-wide one.

    Raises:
        ConfigurationError: if *encoding* is not a known codec.
        IniIOError: the initial load could not read or decode the file.
    """

    COMMENT_PREFIX = ";"

    def __init__(
        self,
        file_path: str | Path | None = None,
        encoding: Optional[str] = None,
        *,
        registry: Optional[FileLockRegistry] = None,
    ) -> None:
        self._encoding: str = normalize_encoding(encoding)
        self._registry: FileLockRegistry = registry if registry is not None else default_registry
        self._document: IniDocument = IniDocument()
        self._file_path: Optional[str] = None
        self._lock_key: Optional[str] = None
        self._finalizer: Optional[weakref.finalize] = None
        self._closed = False

        if file_path:
            self._bind(file_path)
            try:
                self.load()
            except Exception:
                self.close()
                raise

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def file_path(self) -> Optional[str]:
        return self._file_path

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def document(self) -> IniDocument:
        """The owned document.  In-memory state is never locked."""
        return self._document

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(
        self,
        file_path: str | Path | None = None,
        encoding: Optional[str] = None,
    ) -> None:
        """(Re)load the document from disk, replacing in-memory state.

        Passing *file_path* / *encoding* rebinds the handle first.

        Raises:
            ConfigurationError: no path is bound.
            IniIOError: the file could not be read or decoded.
        """
        self._check_open()
        if encoding:
            self._encoding = normalize_encoding(encoding)
        if file_path:
            self._bind(file_path)
        if not self._file_path:
            raise ConfigurationError("Cannot load data: INI file path is not specified.")

        with self._registry.locked(self._lock_key):
            self._document = load_document(self._file_path, self._encoding)
        logger.info(
            "Loaded %s (%s): %d section(s)",
            self._file_path, self._encoding, len(self._document),
        )

    def save(self, file_path: str | Path | None = None) -> None:
        """Write the document to disk, creating parent directories.

        Passing *file_path* rebinds the handle, so later saves go there too.

        Raises:
            ConfigurationError: no path is bound.
            IniIOError: the file could not be written.
        """
        self._check_open()
        if file_path:
            self._bind(file_path)
        if not self._file_path:
            raise ConfigurationError("Cannot save data: INI file path is not specified.")

        with self._registry.locked(self._lock_key):
            save_document(self._document, self._file_path, self._encoding)
        logger.info("Saved %s (%s)", self._file_path, self._encoding)

    def close(self) -> None:
        """Release this handle's reference on the path lock.  Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._unbind()
        logger.debug("Closed handle for %s", self._file_path)

    def __enter__(self) -> IniFile:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def get_value(self, section: str, key: str) -> Optional[str]:
        """Return the stored value, or ``None`` if the section or key is missing."""
        entry = self._document.get_entry(section, key)
        return entry.value if entry is not None else None

    def set_value(
        self, section: str, key: str, value: str, use_quotes: bool = False,
    ) -> None:
        """Store *value*, creating the section if needed.

        With *use_quotes* the value is wrapped in double quotes and the
        quotes become part of the stored value.  Any comment previously
        attached to the key is dropped.
        """
        if use_quotes:
            value = f'"{value}"'
        self._document.set_entry(section, key, Entry(value))

    def remove_key(
        self, section: str, key: str, remove_empty_section: bool = False,
    ) -> bool:
        """Remove a key.  Returns ``False`` if it did not exist."""
        return self._document.remove_entry(section, key, remove_empty_section)

    def remove_section(self, section: str) -> bool:
        """Remove a section and its comments.  Returns ``False`` if absent."""
        return self._document.remove_section(section)

    def sections(self) -> list[str]:
        return list(self._document.section_names)

    def keys(self, section: str) -> list[str]:
        sect = self._document.get_section(section)
        return list(sect) if sect is not None else []

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def add_key_comment(self, section: str, key: str, comment: str) -> None:
        """Attach *comment* to an existing key, replacing any previous one.

        Raises:
            NotFoundError: the section or key does not exist.
        """
        entry = self._document.get_entry(section, key)
        if entry is None:
            raise NotFoundError(
                f"The specified section '{section}' and key '{key}' does not exist."
            )
        entry.comment = comment

    def get_key_comment(self, section: str, key: str) -> Optional[str]:
        entry = self._document.get_entry(section, key)
        return entry.comment if entry is not None else None

    def set_comment(self, section: str, comment: str, prefix: str = COMMENT_PREFIX) -> None:
        """Append ``prefix + comment`` to the lines written above ``[section]``.

        The section does not have to exist yet; the comment is only
        written once it does.
        """
        if not self._document.has_section(section):
            logger.debug("Comment attached to section [%s] which does not exist yet", section)
        self._document.add_section_comment(section, prefix + comment)

    def remove_comment(self, section: str, comment: str) -> bool:
        """Remove the first section comment equal to ``";" + comment``.

        Only ``;``-prefixed comments can be removed this way.
        """
        return self._document.remove_section_comment(section, self.COMMENT_PREFIX + comment)

    def section_comments(self, section: str) -> list[str]:
        return list(self._document.section_comments(section))

    def clear_all_comments(self) -> None:
        """Empty every section's comment list.  Key comments are kept."""
        self._document.clear_section_comments()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _check_open(self) -> None:
        if self._closed:
            raise ConfigurationError("INI file handle is closed.")

    def _bind(self, file_path: str | Path) -> None:
        """Point the handle at *file_path*, moving its lock reference."""
        path = os.path.abspath(os.fspath(file_path))
        self._unbind()
        key = self._registry.register(path)
        self._file_path = path
        self._lock_key = key
        # Safety net: drop the reference if the handle is collected unclosed.
        self._finalizer = weakref.finalize(self, self._registry.release, key)

    def _unbind(self) -> None:
        if self._finalizer is not None:
            # Calling a finalize object runs it at most once.
            self._finalizer()
            self._finalizer = None

    def __repr__(self) -> str:
        return (
            f"IniFile(file_path={self._file_path!r}, encoding={self._encoding!r}, "
            f"sections={len(self._document)})"
        )
