"""
NoteKeep Backend — In-Memory Note Store
=========================================

What:  The process-wide, ordered collection of every user's notes, and the
       FastAPI dependency that hands it to request handlers.
Why:   Notes live in memory only; a restart resets them to the seed data.
How:   A NoteStore is created once by the app factory and kept on
       app.state. Routes receive it through Depends(get_note_store) instead
       of touching a module-level list.
Who:   Used by NoteService and the Notes View; constructed by main.create_app().

Storage Model:
    A single Python list, newest first. Not partitioned by owner: every
    filter is an equality scan over note.id done by the caller's request.

Concurrency:
    No locks. Every method runs to completion without awaiting, so on a
    single event loop each call is atomic with respect to other requests,
    but nothing orders two requests racing on the same id. Multiple
    uvicorn workers (or instances) each hold their own independent copy;
    horizontal scaling needs an external shared store behind the same
    interface.
"""

import logging
from typing import Iterable, List, Optional

from starlette.requests import Request

from notekeep.models.note import Note

logger = logging.getLogger(__name__)


class NoteStore:
    """
    Ordered, unpartitioned in-memory note repository.

    Methods return plain lists (copies), so callers can filter or sort the
    result without mutating the store.
    """

    def __init__(self, seed: Optional[Iterable[Note]] = None):
        self._notes: List[Note] = list(seed or [])

    def __len__(self) -> int:
        return len(self._notes)

    def all(self) -> List[Note]:
        """Snapshot of every note in store order (front = most recently created)."""
        return list(self._notes)

    def filter_by_id(self, note_id: int) -> List[Note]:
        return [note for note in self._notes if note.id == note_id]

    def prepend(self, note: Note) -> Note:
        """Inserts a note at the front. Duplicate ids are allowed."""
        self._notes.insert(0, note)
        return note

    def replace(self, note: Note) -> int:
        """
        Replaces every note whose id equals note.id with `note`.

        Returns:
            Number of notes replaced. 0 means nothing matched and the store
            is unchanged; no record is inserted.
        """
        replaced = 0
        for index, existing in enumerate(self._notes):
            if existing.id == note.id:
                self._notes[index] = note
                replaced += 1
        return replaced

    def remove(self, note_id: int) -> int:
        """Drops every note with the given id. Returns how many were removed."""
        before = len(self._notes)
        self._notes = [note for note in self._notes if note.id != note_id]
        return before - len(self._notes)

    def reset(self, seed: Optional[Iterable[Note]] = None) -> None:
        self._notes = list(seed or [])
        logger.debug("Note store reset with %d notes", len(self._notes))


def get_note_store(request: Request) -> NoteStore:
    """
    FastAPI dependency returning the store owned by the running app.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(store: NoteStore = Depends(get_note_store)):
            ...
    """
    return request.app.state.note_store
