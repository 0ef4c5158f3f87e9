"""
NoteKeep Backend — Notes Route Handlers
=========================================

What:  JSON CRUD over the in-memory notes.
How:   Extracts query/body values, delegates to NoteService, returns JSON.
Who:   Called by the notes page script in the browser.

Endpoints:
    GET    /api/notes?userId=<id>   → { wow, notes }
    POST   /api/notes               → stored Note
    PUT    /api/notes               → updated Note (replace by body id)
    PUT    /api/notes/{id}          → same; the body id decides what is replaced
    DELETE /api/notes   {id}        → { deletedId }
    DELETE /api/notes/{id}          → { deletedId }

Authorization:
    None. These endpoints do not look at the session. Any caller can read
    or change any id; the only "ownership" behaviour is the wow flag, which
    the Notes View interprets.

Caching:
    Every response is Cache-Control: no-store. The data changes under the
    client's feet and belongs to whoever is signed in.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response

from notekeep.models.note import Note
from notekeep.schemas.note import (
    DeleteNoteRequest,
    DeleteNoteResponse,
    ErrorResponse,
    NoteListResponse,
)
from notekeep.services.note_service import note_service
from notekeep.store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

_ERROR_RESPONSES = {
    400: {"description": "Malformed request body", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses=_ERROR_RESPONSES,
    summary="List notes, optionally for one id",
)
async def list_notes(
    response: Response,
    user_id: str | None = Query(
        default=None,
        alias="userId",
        description="Return only notes whose id equals this value",
    ),
    store: NoteStore = Depends(get_note_store),
) -> NoteListResponse:
    """
    List notes.

    `wow` is true for every userId except the reserved default id; it is
    also true when userId is omitted. Notes are returned either way.
    """
    response.headers["Cache-Control"] = "no-store"
    return await note_service.list_notes(store, user_id)


@router.post(
    "/notes",
    response_model=Note,
    responses=_ERROR_RESPONSES,
    summary="Create a note",
)
async def create_note(
    note: Note,
    store: NoteStore = Depends(get_note_store),
) -> Note:
    """Stores the note exactly as sent (client-chosen id) at the front of the list."""
    return await note_service.create_note(store, note)


@router.put(
    "/notes",
    response_model=Note,
    responses=_ERROR_RESPONSES,
    summary="Replace every note with the body's id",
)
async def update_note(
    note: Note,
    store: NoteStore = Depends(get_note_store),
) -> Note:
    """Unknown ids are a silent no-op; the body is echoed back either way."""
    return await note_service.update_note(store, note)


@router.put(
    "/notes/{note_id}",
    response_model=Note,
    responses=_ERROR_RESPONSES,
    summary="Replace every note with the body's id (path form)",
)
async def update_note_by_path(
    note_id: int,
    note: Note,
    store: NoteStore = Depends(get_note_store),
) -> Note:
    """
    Path form used by the browser client.

    The replacement is keyed by the body id, same as PUT /api/notes. A
    differing path id is only logged.
    """
    if note_id != note.id:
        logger.info("PUT path id %d differs from body id %d; using body id", note_id, note.id)
    return await note_service.update_note(store, note)


@router.delete(
    "/notes",
    response_model=DeleteNoteResponse,
    responses=_ERROR_RESPONSES,
    summary="Delete every note with the given id",
)
async def delete_note(
    payload: DeleteNoteRequest,
    store: NoteStore = Depends(get_note_store),
) -> DeleteNoteResponse:
    deleted_id = await note_service.delete_note(store, payload.id)
    return DeleteNoteResponse(deleted_id=deleted_id)


@router.delete(
    "/notes/{note_id}",
    response_model=DeleteNoteResponse,
    responses=_ERROR_RESPONSES,
    summary="Delete every note with the given id (path form)",
)
async def delete_note_by_path(
    note_id: int,
    store: NoteStore = Depends(get_note_store),
) -> DeleteNoteResponse:
    deleted_id = await note_service.delete_note(store, note_id)
    return DeleteNoteResponse(deleted_id=deleted_id)
