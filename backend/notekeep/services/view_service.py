"""
NoteKeep Backend — Notes View Selection
=========================================

What:  Decides whether a request to the notes page shows the editable
       notes UI or the access-denied screen.
Why:   The decision is the one piece of "ownership" logic in the app and
       deserves to be testable without rendering HTML.
How:   Fetch notes for the target id through NoteService, read the wow
       flag, and settle on one of two states.

State Machine:
    ┌────────────┐  wow == True   ┌──────────┐
    │   fetch    │───────────────▶│  DENIED  │  (notes discarded)
    │ (target id)│                └──────────┘
    │            │  wow == False  ┌────────────┐
    │            │───────────────▶│ AUTHORIZED │  (notes filtered by search)
    └────────────┘                └────────────┘

    Decided once per request. Changing the target id or the search text
    re-runs the whole thing; the search text never influences the flag.

Note that the data is fetched before the check runs. The denied screen
simply refuses to show it.
"""

import logging
import secrets
import zlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple

from notekeep.models.note import Note
from notekeep.schemas.auth import SessionIdentity
from notekeep.services.note_service import note_service
from notekeep.store import NoteStore

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    DENIED = "denied"
    AUTHORIZED = "authorized"


@dataclass(frozen=True)
class DeniedVariant:
    """Cosmetic copy for one flavour of the access-denied screen."""
    key: str
    headline: str
    subtitle: str
    body: str
    button_label: str
    footer: str
    stats: Tuple[Tuple[str, str], ...] = ()


DENIED_VARIANTS: List[DeniedVariant] = [
    DeniedVariant(
        key="boom",
        headline="BOOM!",
        subtitle="Unauthorized Access Detected",
        body=(
            "You attempted to access notes that don't belong to you! This incident "
            "has been logged and security protocols have been activated."
        ),
        button_label="Logout Immediately",
        footer="For your security, please logout and verify your credentials",
        stats=(("Severity Level", "HIGH"), ("Status", "BLOCKED"), ("Action Required", "LOGOUT")),
    ),
    DeniedVariant(
        key="terminal",
        headline="ACCESS DENIED",
        subtitle="[UNAUTHORIZED ACCESS DETECTED]",
        body="Security breach attempt logged. You cannot access these notes.",
        button_label=">> TERMINATE SESSION",
        footer="This incident has been reported to system administrators.",
    ),
]


def pick_denied_variant(target_user_id: Optional[str]) -> DeniedVariant:
    """
    Chooses a denied-screen variant from the target id.

    Deterministic (CRC32, not hash()) so the same URL renders the same
    screen across requests and processes.
    """
    key = (target_user_id or "").encode("utf-8")
    return DENIED_VARIANTS[zlib.crc32(key) % len(DENIED_VARIANTS)]


def matches_search(note: Note, search: str) -> bool:
    """Case-insensitive substring match on title or content. Empty search matches all."""
    needle = search.lower()
    return needle in note.title.lower() or needle in note.content.lower()


def new_incident_hash() -> str:
    """A random decoy "incident hash" for the denied screen. It identifies nothing."""
    return "SHA-256:" + secrets.token_hex(32)


@dataclass
class NotesViewState:
    """
    Everything the notes page template needs.

    Attributes:
        mode: DENIED or AUTHORIZED
        target_user_id: The userId the page was asked to show (raw string)
        search: Search text as typed
        notes: Visible notes; always empty when mode is DENIED
        session: The signed-in identity
        denied_variant: Which denied screen to render (DENIED only)
        incident_hash: Decoy hash shown on the denied screen, new every request
        log_id: Decoy log number for the screen corner (DENIED only)
        issued_at: ISO-8601 UTC timestamp of the decision
    """
    mode: ViewMode
    target_user_id: Optional[str]
    search: str
    session: SessionIdentity
    notes: List[Note] = field(default_factory=list)
    denied_variant: Optional[DeniedVariant] = None
    incident_hash: Optional[str] = None
    log_id: Optional[int] = None
    issued_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def is_denied(self) -> bool:
        return self.mode is ViewMode.DENIED


async def select_view(
    store: NoteStore,
    session: SessionIdentity,
    target_user_id: Optional[str],
    search: str = "",
) -> NotesViewState:
    """
    Fetch notes for `target_user_id` and decide which UI to show.

    Args:
        store: The process NoteStore
        session: Signed-in identity (used for display and the "new note" owner)
        target_user_id: Raw userId from the page URL; fully caller controlled
        search: Free-text filter applied to the visible notes only

    Returns:
        NotesViewState in DENIED or AUTHORIZED mode.
    """
    result = await note_service.list_notes(store, target_user_id)

    if result.wow:
        logger.warning(
            "Access denied view for %s (session user_id=%s, target=%r, %d notes withheld)",
            session.email,
            session.user_id,
            target_user_id,
            len(result.notes),
        )
        return NotesViewState(
            mode=ViewMode.DENIED,
            target_user_id=target_user_id,
            search=search,
            session=session,
            denied_variant=pick_denied_variant(target_user_id),
            incident_hash=new_incident_hash(),
            log_id=secrets.randbelow(999999),
        )

    visible = [note for note in result.notes if matches_search(note, search)]
    return NotesViewState(
        mode=ViewMode.AUTHORIZED,
        target_user_id=target_user_id,
        search=search,
        session=session,
        notes=visible,
    )
