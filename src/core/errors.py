"""
Error hierarchy for the INI document library.

All library errors inherit from ``IniError`` so callers can catch a
single base type.  Lookups that merely probe (``get_value``,
``remove_key``, ``remove_section``, ``remove_comment``) never raise;
they return ``None`` / ``False`` instead.
"""
from __future__ import annotations



class IniError(Exception):
    """Base class for all INI document errors."""


class ConfigurationError(IniError):
    """Raised when a handle is used without the configuration it needs
    (no file path bound on save, unknown text encoding)."""


class NotFoundError(IniError, KeyError):
    """Raised when an operation requires a section or key that does not exist."""

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class IniIOError(IniError, OSError):
    """Raised when a file cannot be written.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, file_path: str = "") -> None:
        super().__init__(message)
        self.file_path = file_path
