"""
IniService — the bridge between the API layer and IniFile handles.

Manages:
- Open handles (keyed by a doc_id string)
- JSON-friendly views of a document (sections, entries, comments)
- Lifecycle: open → mutate → save → close

Sync FastAPI endpoints run in a thread pool, so every call goes through
one service-wide lock; a single IniFile is not safe for concurrent
mutation on its own.
"""
from __future__ import annotations

import logging
from threading import RLock
from typing import Optional

from core.errors import NotFoundError
from infrastructure.file_locks import FileLockRegistry
from services.ini_file import IniFile

logger = logging.getLogger(__name__)


class IniService:
    """
    Facade that the API layer calls. One instance per application.
    """

    def __init__(self, registry: Optional[FileLockRegistry] = None):
        self._registry = registry
        self._handles: dict[str, IniFile] = {}
        self._lock = RLock()

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def open(
        self,
        doc_id: str,
        file_path: Optional[str] = None,
        encoding: Optional[str] = None,
    ) -> dict:
        """Open (and load) a file under *doc_id*, replacing any handle
        already open under that id.  Returns a summary."""
        logger.info("Opening document %s from %s (encoding=%s)", doc_id, file_path, encoding)
        handle = IniFile(file_path, encoding, registry=self._registry)
        with self._lock:
            previous = self._handles.pop(doc_id, None)
            if previous is not None:
                previous.close()
            self._handles[doc_id] = handle
        return self._summary(doc_id, handle)

    def get_handle(self, doc_id: str) -> IniFile:
        with self._lock:
            try:
                return self._handles[doc_id]
            except KeyError:
                raise NotFoundError(f"Document not found: {doc_id}") from None

    def list_documents(self) -> list[dict]:
        with self._lock:
            return [self._summary(did, h) for did, h in self._handles.items()]

    def describe(self, doc_id: str) -> dict:
        """Full JSON view of a document."""
        with self._lock:
            handle = self.get_handle(doc_id)
            doc = handle.document
            return {
                **self._summary(doc_id, handle),
                "sections": [
                    {
                        "name": section.name,
                        "comments": list(doc.section_comments(section.name)),
                        "entries": [
                            {"key": key, "value": entry.value, "comment": entry.comment}
                            for key, entry in section.items()
                        ],
                    }
                    for section in doc.sections
                ],
            }

    def save(self, doc_id: str, file_path: Optional[str] = None) -> dict:
        """Write a document back to disk."""
        with self._lock:
            handle = self.get_handle(doc_id)
            handle.save(file_path)
        logger.info("Saved document %s to %s", doc_id, handle.file_path)
        return {"status": "saved", "file_path": handle.file_path}

    def close_document(self, doc_id: str) -> None:
        """Close a handle and forget it.  Unknown ids are ignored."""
        with self._lock:
            handle = self._handles.pop(doc_id, None)
        if handle is not None:
            handle.close()
            logger.info("Closed document %s", doc_id)

    def close_all(self) -> None:
        with self._lock:
            handles, self._handles = self._handles, {}
        for handle in handles.values():
            handle.close()

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def get_value(self, doc_id: str, section: str, key: str) -> dict:
        with self._lock:
            handle = self.get_handle(doc_id)
            value = handle.get_value(section, key)
            return {
                "section": section,
                "key": key,
                "value": value,
                "comment": handle.get_key_comment(section, key),
                "found": value is not None,
            }

    def set_value(
        self, doc_id: str, section: str, key: str, value: str, use_quotes: bool = False,
    ) -> dict:
        with self._lock:
            self.get_handle(doc_id).set_value(section, key, value, use_quotes)
            logger.debug("Set [%s] %s in doc=%s", section, key, doc_id)
            return self.get_value(doc_id, section, key)

    def remove_key(
        self, doc_id: str, section: str, key: str, remove_empty_section: bool = False,
    ) -> dict:
        with self._lock:
            removed = self.get_handle(doc_id).remove_key(section, key, remove_empty_section)
        return {"removed": removed}

    def remove_section(self, doc_id: str, section: str) -> dict:
        with self._lock:
            removed = self.get_handle(doc_id).remove_section(section)
        return {"removed": removed}

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def add_key_comment(self, doc_id: str, section: str, key: str, comment: str) -> dict:
        with self._lock:
            self.get_handle(doc_id).add_key_comment(section, key, comment)
            return self.get_value(doc_id, section, key)

    def set_comment(
        self, doc_id: str, section: str, comment: str, prefix: str = ";",
    ) -> dict:
        with self._lock:
            handle = self.get_handle(doc_id)
            handle.set_comment(section, comment, prefix)
            return {"section": section, "comments": handle.section_comments(section)}

    def remove_comment(self, doc_id: str, section: str, comment: str) -> dict:
        with self._lock:
            handle = self.get_handle(doc_id)
            removed = handle.remove_comment(section, comment)
            return {
                "removed": removed,
                "section": section,
                "comments": handle.section_comments(section),
            }

    def clear_all_comments(self, doc_id: str) -> dict:
        with self._lock:
            handle = self.get_handle(doc_id)
            handle.clear_all_comments()
            return self._summary(doc_id, handle)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _summary(doc_id: str, handle: IniFile) -> dict:
        doc = handle.document
        return {
            "doc_id": doc_id,
            "file_path": handle.file_path,
            "encoding": handle.encoding,
            "total_sections": len(doc),
            "total_keys": sum(len(section) for section in doc.sections),
        }
