"""
Document I/O — read an INI file into an IniDocument, write it back.

This is a functional module.  ``IniFile`` delegates here for the actual
file ↔ document conversion; locking is the caller's concern.

Load flow:
    file → decode(encoding) → drop leading BOM → splitlines
    → parser.parse → IniDocument
    missing file → empty IniDocument (not an error)

Save flow:
    IniDocument → serializer.serialize → join with newlines
    → create parent directories → encode(encoding) → write bytes
"""
from __future__ import annotations

import codecs
import gzip
import logging
from pathlib import Path

from core.document import IniDocument
from core.errors import ConfigurationError, IniIOError
from core.line_kind import LineKind
from ini_format import parser, serializer

logger = logging.getLogger(__name__)


# Shift-JIS as extended by Windows (code page 932).
DEFAULT_ENCODING = "cp932"
UTF8 = "utf-8"
BOM = "\ufeff"


def normalize_encoding(encoding: str | None) -> str:
    """Return the canonical codec name, or raise ConfigurationError."""
    name = encoding or DEFAULT_ENCODING
    try:
        return codecs.lookup(name).name
    except LookupError:
        raise ConfigurationError(f"Unknown text encoding: {name!r}") from None


# ------------------------------------------------------------------
# File helpers (plain text or gzip)
# ------------------------------------------------------------------

def _is_gz(path: Path) -> bool:
    return path.suffix == ".gz"


def _read_text(path: Path, encoding: str) -> str:
    if _is_gz(path):
        with gzip.open(path, "rt", encoding=encoding) as f:
            text = f.read()
    else:
        text = path.read_text(encoding=encoding)
    # A leading byte order mark is not part of the first line.
    if text.startswith(BOM):
        text = text[1:]
    return text


def _write_text(path: Path, content: str, encoding: str) -> None:
    # Encode before opening so an unencodable document leaves the file untouched.
    data = content.encode(encoding)
    if _is_gz(path):
        with gzip.open(path, "wb") as f:
            f.write(data)
    else:
        path.write_bytes(data)


def read_lines(file_path: str | Path, encoding: str = DEFAULT_ENCODING) -> list[str]:
    """Read all lines of a file.  A missing file yields an empty list."""
    path = Path(file_path)
    if not path.exists():
        logger.debug("File %s does not exist, treating as empty", path)
        return []
    return _read_text(path, encoding).splitlines()


def write_lines(
    file_path: str | Path,
    lines: list[str],
    encoding: str = DEFAULT_ENCODING,
) -> None:
    """Write *lines* (each terminated by a newline), creating parent
    directories as needed."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    _write_text(path, "".join(f"{line}\n" for line in lines), encoding)


# ------------------------------------------------------------------
# Load
# ------------------------------------------------------------------

def load_document(
    file_path: str | Path,
    encoding: str = DEFAULT_ENCODING,
) -> IniDocument:
    """
    Read an INI file and return the parsed IniDocument.

    A file that does not exist produces an empty document so that a
    "create on first save" workflow needs no special casing.  Any other
    failure to read or decode the file is raised as :class:`IniIOError`
    with the original exception chained.
    """
    try:
        raw_lines = read_lines(file_path, encoding)
    except (OSError, UnicodeError) as exc:
        raise IniIOError(
            f"Failed to load data from file '{file_path}': {exc}",
            file_path=str(file_path),
        ) from exc
    doc, counts = parser.parse_lines(raw_lines)
    logger.debug(
        "Parsed %s: %d line(s), %d section(s), %d ignored",
        file_path, len(raw_lines), len(doc), counts[LineKind.IGNORED],
    )
    return doc


# ------------------------------------------------------------------
# Save
# ------------------------------------------------------------------

def save_document(
    document: IniDocument,
    file_path: str | Path,
    encoding: str = DEFAULT_ENCODING,
) -> None:
    """
    Write an IniDocument to disk.

    Any failure to create the directory, encode or write the file is
    raised as :class:`IniIOError` with the original exception chained.
    """
    lines = serializer.serialize(document)
    try:
        write_lines(file_path, lines, encoding)
    except (OSError, UnicodeError) as exc:
        raise IniIOError(
            f"Failed to save data to file '{file_path}': {exc}",
            file_path=str(file_path),
        ) from exc
