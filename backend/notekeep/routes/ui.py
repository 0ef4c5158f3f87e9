"""
NoteKeep Backend — Server-Rendered Pages
==========================================

What:  The login page and the notes page.
How:   Jinja2 templates; the notes page asks view_service.select_view()
       which of two screens to render.

Pages:
    GET /             → 302 /ui/login
    GET /ui/login     → sign-in page, or 302 to the notes page when signed in
    GET /ui/notes     → notes editor (AUTHORIZED) or warning screen (DENIED)

The denied screen is a normal 200 page with a sign-out button. It is a UI
state, not an HTTP error.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from notekeep.schemas.auth import SessionIdentity
from notekeep.services.auth_service import get_session_identity
from notekeep.services.view_service import select_view
from notekeep.store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["UI"], include_in_schema=False)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/")
async def index() -> RedirectResponse:
    return RedirectResponse("/ui/login", status_code=302)


@router.get("/ui/login", response_class=HTMLResponse)
async def login_page(
    request: Request,
    identity: SessionIdentity | None = Depends(get_session_identity),
):
    if identity is not None:
        return RedirectResponse(f"/ui/notes?userId={identity.user_id}", status_code=302)
    return templates.TemplateResponse(request, "login.html", {})


@router.get("/ui/notes", response_class=HTMLResponse)
async def notes_page(
    request: Request,
    user_id: str | None = Query(default=None, alias="userId"),
    q: str = Query(default="", description="Search text"),
    identity: SessionIdentity | None = Depends(get_session_identity),
    store: NoteStore = Depends(get_note_store),
):
    """
    Render the notes page for `userId`.

    The target id comes straight from the URL and is entirely caller
    controlled; see select_view() for how the screen is chosen.
    """
    if identity is None:
        return RedirectResponse("/ui/login", status_code=302)

    state = await select_view(store, identity, user_id, q)
    template = "denied.html" if state.is_denied else "notes.html"
    return templates.TemplateResponse(request, template, {"view": state})
