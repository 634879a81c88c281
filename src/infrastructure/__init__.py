from infrastructure.document_io import (
    DEFAULT_ENCODING,
    UTF8,
    load_document,
    normalize_encoding,
    read_lines,
    save_document,
    write_lines,
)
from infrastructure.file_locks import FileLockRegistry, default_registry, normalize_path

__all__ = [
    "DEFAULT_ENCODING",
    "UTF8",
    "load_document",
    "normalize_encoding",
    "read_lines",
    "save_document",
    "write_lines",
    "FileLockRegistry",
    "default_registry",
    "normalize_path",
]
