from core.line_kind import LineKind
from core.document import Entry, Section, IniDocument
from core.errors import IniError, ConfigurationError, NotFoundError, IniIOError

__all__ = [
    "LineKind",
    "Entry",
    "Section",
    "IniDocument",
    "IniError",
    "ConfigurationError",
    "NotFoundError",
    "IniIOError",
]
