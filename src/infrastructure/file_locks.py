"""
FileLockRegistry — process-local, reference-counted locks per file path.

Every ``IniFile`` bound to a path holds one reference on that path's
entry; load and save run inside :meth:`FileLockRegistry.locked`, so two
handles targeting the same file are strictly serialised while handles
on different files never block each other.

Entries are removed when the last reference is released, which keeps
the registry from growing with every path ever opened.  Nothing here
coordinates separate processes.
"""
from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock, RLock
from typing import Iterator

logger = logging.getLogger(__name__)


def normalize_path(path: str | Path) -> str:
    """Key used for a path: absolute, normalised, case-folded where the OS is."""
    return os.path.normcase(os.path.abspath(os.fspath(path)))


@dataclass(slots=True)
class _LockEntry:
    lock: RLock = field(default_factory=RLock)
    refs: int = 0


class FileLockRegistry:
    """Mapping of normalised path → shared lock, guarded by its own lock."""

    def __init__(self) -> None:
        self._guard = Lock()
        self._entries: dict[str, _LockEntry] = {}

    def register(self, path: str | Path) -> str:
        """Take a reference on *path*'s lock, creating it on first use.

        Returns the normalised key.
        """
        key = normalize_path(path)
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = _LockEntry()
                self._entries[key] = entry
                logger.debug("Registered lock for %s", key)
            entry.refs += 1
        return key

    def release(self, path: str | Path) -> None:
        """Drop one reference; the entry disappears at zero.

        Releasing a path that is not registered does nothing.
        """
        key = normalize_path(path)
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                return
            entry.refs -= 1
            if entry.refs <= 0:
                del self._entries[key]
                logger.debug("Released lock for %s", key)

    @contextmanager
    def locked(self, path: str | Path) -> Iterator[None]:
        """Hold *path*'s lock for the duration of the ``with`` block.

        A temporary reference is taken so the entry cannot be removed
        while the block runs, even if no handle has registered the path.
        """
        key = self.register(path)
        with self._guard:
            lock = self._entries[key].lock
        try:
            with lock:
                yield
        finally:
            self.release(key)

    def is_registered(self, path: str | Path) -> bool:
        with self._guard:
            return normalize_path(path) in self._entries

    def ref_count(self, path: str | Path) -> int:
        with self._guard:
            entry = self._entries.get(normalize_path(path))
            return entry.refs if entry is not None else 0

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


# Shared by every handle that is not given a registry explicitly.
default_registry = FileLockRegistry()
