"""
NoteKeep Backend — Note Service (CRUD Business Logic)
=======================================================

What:  Create / list / update / delete over the NoteStore.
Why:   Keeps the rules (front insertion, id-equality filtering, the wow
       flag, silent no-ops) out of the route handlers.
How:   Each operation awaits a fixed simulated latency, then touches the
       store. The store is passed in per call, the same way a DB session
       would be.
Who:   Called by the notes routes and by the Notes View.

Latency Model:
    Every call sleeps settings.simulated_latency_ms before resolving. This
    stands in for a remote datastore and has no other effect. There is no
    cancellation: if the client disconnects mid-sleep the mutation still
    lands once the sleep completes.

Authorization:
    None here. Any id can be listed, replaced or deleted by anyone. The
    wow flag returned by list_notes() is computed from the raw filter
    string, not from the session, and the matching notes are returned
    regardless of its value.
"""

import asyncio
import logging
import re
from typing import List, Optional

from notekeep.config import settings
from notekeep.models.note import Note
from notekeep.schemas.note import NoteListResponse
from notekeep.store import NoteStore

logger = logging.getLogger(__name__)


_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_PREFIXED = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def parse_user_id_filter(raw: str) -> Optional[int]:
    """
    Converts the userId query value to the integer compared with note.id.

    Follows the browser's Number() grammar: ASCII decimal with optional
    fraction and exponent, or an unsigned 0x / 0o / 0b literal, surrounded
    by optional whitespace. A blank value is 0. Underscores, non-ASCII
    digits, "nan" and "inf" are rejected.

    Returns None when the value is not a whole number ("abc", "1.5"), in
    which case the filter matches no notes at all.
    """
    text = raw.strip()
    if not text:
        return 0
    if _PREFIXED.fullmatch(text):
        return int(text, 0)
    if not _DECIMAL.fullmatch(text):
        return None
    number = float(text)
    if number.is_integer():
        return int(number)
    return None


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  filtered listing plus the wow access flag
        - create_note(): front insertion of a client-identified note
        - update_note(): full replacement of every note sharing an id
        - delete_note(): removal of every note sharing an id

    Not-found is never an error: update and delete on an unknown id
    return their input and leave the store untouched.
    """

    async def _simulate_latency(self) -> None:
        delay = settings.simulated_latency_ms / 1000
        if delay > 0:
            await asyncio.sleep(delay)

    def access_flag(self, user_id: Optional[str]) -> bool:
        """
        Computes `wow`: True unless the raw filter string is exactly the
        reserved default id. A missing filter counts as "not equal".
        """
        return user_id != settings.reserved_user_id_literal

    async def list_notes(
        self,
        store: NoteStore,
        user_id: Optional[str] = None,
    ) -> NoteListResponse:
        """
        List notes, optionally filtered by id.

        Args:
            store: The process NoteStore
            user_id: Raw `userId` query value. None or "" means no filter.

        Returns:
            NoteListResponse with the wow flag and the matching notes, in
            store order.
        """
        await self._simulate_latency()

        notes: List[Note]
        if user_id:
            target = parse_user_id_filter(user_id)
            notes = store.filter_by_id(target) if target is not None else []
        else:
            notes = store.all()

        wow = self.access_flag(user_id)
        logger.info(
            "Listed %d notes (filter=%r, wow=%s)",
            len(notes),
            user_id,
            wow,
        )
        return NoteListResponse(wow=wow, notes=notes)

    async def create_note(self, store: NoteStore, note: Note) -> Note:
        """
        Store a new note at the front of the collection.

        The client-supplied id is kept as is; no server-side id is
        generated and duplicates are accepted.
        """
        await self._simulate_latency()
        saved = store.prepend(note)
        logger.info("Created note id=%d (owner=%s)", saved.id, saved.owner)
        return saved

    async def update_note(self, store: NoteStore, note: Note) -> Note:
        """
        Replace every note whose id equals note.id with `note`.

        Returns the given value whether or not anything matched.
        """
        await self._simulate_latency()
        replaced = store.replace(note)
        if replaced:
            logger.info("Updated %d note(s) with id=%d", replaced, note.id)
        else:
            logger.info("Update for id=%d matched no notes; store unchanged", note.id)
        return note

    async def delete_note(self, store: NoteStore, note_id: int) -> int:
        """Remove every note with the given id and echo the id back."""
        await self._simulate_latency()
        removed = store.remove(note_id)
        logger.info("Deleted %d note(s) with id=%d", removed, note_id)
        return note_id


# Singleton instance
note_service = NoteService()
