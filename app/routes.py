"""
API routes for the INI editor.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional

from core.errors import ConfigurationError, IniIOError, NotFoundError
from services.ini_service import IniService


router = APIRouter(prefix="/api")

# Singleton service, created in main.py and attached here
_service: Optional[IniService] = None


def init_service(svc: IniService) -> None:
    global _service
    _service = svc


def svc() -> IniService:
    if _service is None:
        raise RuntimeError("IniService not initialized")
    return _service


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class OpenRequest(BaseModel):
    doc_id: str
    file_path: Optional[str] = None
    encoding: Optional[str] = None


class SetValueRequest(BaseModel):
    value: str
    use_quotes: bool = False


class KeyCommentRequest(BaseModel):
    comment: str


class SectionCommentRequest(BaseModel):
    comment: str
    prefix: str = ";"


class SaveRequest(BaseModel):
    file_path: Optional[str] = None


# ------------------------------------------------------------------
# Documents
# ------------------------------------------------------------------

@router.post("/documents/open")
def open_document(req: OpenRequest):
    """Open an INI file (a missing file gives an empty document)."""
    try:
        return svc().open(req.doc_id, req.file_path, req.encoding)
    except ConfigurationError as e:
        raise HTTPException(400, str(e))
    except IniIOError as e:
        raise HTTPException(500, str(e))


@router.get("/documents")
def list_documents():
    """List all open documents."""
    return svc().list_documents()


@router.get("/documents/{doc_id}")
def describe_document(doc_id: str):
    """Get sections, entries and comments of a document."""
    try:
        return svc().describe(doc_id)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


@router.post("/documents/{doc_id}/save")
def save_document(doc_id: str, req: SaveRequest):
    """Save a document to disk, optionally to a new path."""
    try:
        return svc().save(doc_id, req.file_path)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except ConfigurationError as e:
        raise HTTPException(400, str(e))
    except IniIOError as e:
        raise HTTPException(500, str(e))


@router.post("/documents/{doc_id}/close")
def close_document(doc_id: str):
    """Close a document and release its file lock."""
    svc().close_document(doc_id)
    return {"status": "closed", "doc_id": doc_id}


# ------------------------------------------------------------------
# Keys and sections
# ------------------------------------------------------------------

@router.get("/documents/{doc_id}/sections/{section}/keys/{key}")
def get_value(doc_id: str, section: str, key: str):
    """Get one value.  ``found`` is false when the key does not exist."""
    try:
        return svc().get_value(doc_id, section, key)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


@router.put("/documents/{doc_id}/sections/{section}/keys/{key}")
def set_value(doc_id: str, section: str, key: str, req: SetValueRequest):
    """Set a value, creating the section if needed."""
    try:
        return svc().set_value(doc_id, section, key, req.value, req.use_quotes)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


@router.delete("/documents/{doc_id}/sections/{section}/keys/{key}")
def remove_key(doc_id: str, section: str, key: str, remove_empty_section: bool = False):
    """Remove a key; optionally drop the section once it is empty."""
    try:
        return svc().remove_key(doc_id, section, key, remove_empty_section)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


@router.delete("/documents/{doc_id}/sections/{section}")
def remove_section(doc_id: str, section: str):
    """Remove a section and its comments."""
    try:
        return svc().remove_section(doc_id, section)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


# ------------------------------------------------------------------
# Comments
# ------------------------------------------------------------------

@router.put("/documents/{doc_id}/sections/{section}/keys/{key}/comment")
def add_key_comment(doc_id: str, section: str, key: str, req: KeyCommentRequest):
    """Attach a comment to an existing key."""
    try:
        return svc().add_key_comment(doc_id, section, key, req.comment)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


@router.post("/documents/{doc_id}/sections/{section}/comments")
def set_comment(doc_id: str, section: str, req: SectionCommentRequest):
    """Append a comment line above a section header."""
    try:
        return svc().set_comment(doc_id, section, req.comment, req.prefix)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


@router.delete("/documents/{doc_id}/sections/{section}/comments")
def remove_comment(doc_id: str, section: str, comment: str):
    """Remove a ``;``-prefixed section comment."""
    try:
        return svc().remove_comment(doc_id, section, comment)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


@router.delete("/documents/{doc_id}/comments")
def clear_all_comments(doc_id: str):
    """Empty every section's comment list."""
    try:
        return svc().clear_all_comments(doc_id)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
