"""
NoteKeep Backend — Auth Route Handlers
========================================

What:  Google sign-in, the session probe, and sign-out.

Endpoints:
    GET  /api/auth/signin/google     → 302 to Google consent
    GET  /api/auth/callback/google   → completes sign-in, 302 to the notes page
    GET  /api/auth/session           → current identity, or {} when signed out
    GET  /api/auth/signout           → clears the session, 302 to callbackUrl
    POST /api/auth/signout           → same

Failure Behaviour:
    Missing OAuth configuration raises ConfigurationError (500) before any
    redirect, so a half-configured server never sends users to Google.
    A bad state, a denied consent or a failed token exchange raises
    AuthenticationError (401).
"""

import logging
import secrets

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from notekeep.config import settings
from notekeep.exceptions import AuthenticationError
from notekeep.schemas.auth import SessionIdentity
from notekeep.services import auth_service
from notekeep.services.auth_service import (
    SESSION_STATE_KEY,
    build_session,
    clear_session,
    get_session_identity,
    read_session_identity,
    redirect_uri,
    store_session_identity,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

LOGIN_PAGE = "/ui/login"


def _safe_callback_url(callback_url: str | None) -> str:
    """Only same-site relative paths are accepted as post-signout targets."""
    if callback_url and callback_url.startswith("/") and not callback_url.startswith("//"):
        return callback_url
    return LOGIN_PAGE


@router.get("/signin/google", summary="Start Google sign-in")
async def signin_google(request: Request) -> RedirectResponse:
    settings.validate_required()

    state = secrets.token_urlsafe(24)
    request.session[SESSION_STATE_KEY] = state
    url = auth_service.google_oauth.authorization_url(state, redirect_uri())
    return RedirectResponse(url, status_code=302)


@router.get("/callback/google", summary="Google OAuth callback")
async def callback_google(
    request: Request,
    code: str | None = Query(default=None),
    state: str | None = Query(default=None),
    error: str | None = Query(default=None),
) -> RedirectResponse:
    """
    Finish the OAuth handshake and populate the session.

    The state kept in the session is single-use: it is removed before the
    comparison so a replayed callback always fails.
    """
    settings.validate_required()

    expected_state = request.session.pop(SESSION_STATE_KEY, None)
    if error:
        raise AuthenticationError("Google sign-in was cancelled", context={"error": error})
    if not code or not state or not expected_state or not secrets.compare_digest(state, expected_state):
        raise AuthenticationError("Sign-in state mismatch. Please try again.")

    oauth = auth_service.google_oauth
    access_token = await oauth.exchange_code(code, redirect_uri())
    login = await oauth.fetch_userinfo(access_token)

    identity = build_session(read_session_identity(request), login)
    store_session_identity(request, identity)
    logger.info("Signed in %s as user_id=%s", identity.email, identity.user_id)

    return RedirectResponse(f"/ui/notes?userId={identity.user_id}", status_code=302)


@router.get("/session", summary="Current session")
async def get_session(
    identity: SessionIdentity | None = Depends(get_session_identity),
) -> dict:
    """Returns the signed-in identity with camelCase userId, or {} when signed out."""
    if identity is None:
        return {}
    return {
        "user": {
            "email": identity.email,
            "name": identity.name,
            "image": identity.picture,
        },
        "userId": identity.user_id,
    }


@router.api_route("/signout", methods=["GET", "POST"], summary="Sign out")
async def signout(
    request: Request,
    callback_url: str | None = Query(default=None, alias="callbackUrl"),
) -> RedirectResponse:
    identity = read_session_identity(request)
    clear_session(request)
    if identity is not None:
        logger.info("Signed out %s", identity.email)
    return RedirectResponse(_safe_callback_url(callback_url), status_code=303)
