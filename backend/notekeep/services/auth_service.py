"""
NoteKeep Backend — Google Sign-In and Session Identity
========================================================

What:  Everything between "Sign in with Google" and a populated session:
       the OAuth client, the session builder, and the FastAPI dependencies
       that read the identity back out of the cookie.
Why:   The rest of the app only needs `SessionIdentity.user_id` and
       `.email`; this module is the only place that knows how they got there.
How:   Authorization-code flow against Google using httpx. The resulting
       identity is stored in Starlette's signed session cookie.

Flow:
    Browser ──▶ /api/auth/signin/google ──▶ Google consent
            ◀── /api/auth/callback/google?code&state
                 1. verify state (kept in session)
                 2. exchange code for access token   (POST token endpoint)
                 3. fetch profile                    (GET userinfo endpoint)
                 4. build_session(existing, login)   (pure)
                 5. store identity in session cookie

Identity Rule:
    The internal user id is NOT derived from the Google account. Every
    first-time login is assigned settings.default_user_id (101). A login on
    top of an existing session keeps that session's id.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx
from starlette.requests import Request

from notekeep.config import settings
from notekeep.exceptions import AuthenticationError
from notekeep.schemas.auth import LoginEvent, SessionIdentity

logger = logging.getLogger(__name__)

SESSION_IDENTITY_KEY = "identity"
SESSION_STATE_KEY = "oauth_state"

CALLBACK_PATH = "/api/auth/callback/google"


def build_session(
    existing: Optional[SessionIdentity],
    login: LoginEvent,
) -> SessionIdentity:
    """
    Produce the session for a login event.

    Pure: the existing session is never modified; a new value is returned.

    Args:
        existing: Identity already in the cookie, or None for a fresh browser
        login: Profile returned by Google

    Returns:
        SessionIdentity with the profile fields from `login` and a user id
        that is either carried over from `existing` or, for a first-time
        login, the configured default.
    """
    if existing is not None and existing.user_id is not None:
        user_id = existing.user_id
    else:
        user_id = settings.default_user_id

    return SessionIdentity(
        email=login.email,
        name=login.name,
        picture=login.picture,
        user_id=user_id,
    )


def redirect_uri() -> str:
    return settings.oauth_redirect_base_url.rstrip("/") + CALLBACK_PATH


class GoogleOAuthClient:
    """
    Minimal Google OAuth 2.0 authorization-code client.

    Args:
        transport: Optional httpx transport, used by tests to stub Google.
    """

    SCOPES = "openid email profile"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=settings.upstream_timeout_seconds,
        )

    def authorization_url(self, state: str, callback_url: str) -> str:
        """Google consent URL the browser is redirected to."""
        params = {
            "client_id": settings.google_client_id,
            "redirect_uri": callback_url,
            "response_type": "code",
            "scope": self.SCOPES,
            "state": state,
            "access_type": "online",
            "prompt": "select_account",
        }
        return f"{settings.google_authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str, callback_url: str) -> str:
        """
        Trade the authorization code for an access token.

        Raises:
            AuthenticationError: Google rejected the code or was unreachable.
        """
        data = {
            "code": code,
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "redirect_uri": callback_url,
            "grant_type": "authorization_code",
        }
        try:
            async with self._client() as client:
                response = await client.post(settings.google_token_url, data=data)
        except httpx.HTTPError as e:
            raise AuthenticationError(
                "Could not reach Google to complete sign-in",
                context={"error_type": type(e).__name__},
            ) from e

        if response.status_code != 200:
            raise AuthenticationError(
                "Google rejected the sign-in request",
                context={"status": response.status_code},
            )

        payload: Dict[str, Any] = response.json()
        token = payload.get("access_token")
        if not isinstance(token, str) or not token:
            raise AuthenticationError("Google did not return an access token")
        return token

    async def fetch_userinfo(self, access_token: str) -> LoginEvent:
        """
        Look up the signed-in account's profile.

        Raises:
            AuthenticationError: Lookup failed or the profile has no email.
        """
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            async with self._client() as client:
                response = await client.get(settings.google_userinfo_url, headers=headers)
        except httpx.HTTPError as e:
            raise AuthenticationError(
                "Could not fetch Google profile",
                context={"error_type": type(e).__name__},
            ) from e

        if response.status_code != 200:
            raise AuthenticationError(
                "Google profile lookup failed",
                context={"status": response.status_code},
            )

        profile: Dict[str, Any] = response.json()
        email = profile.get("email")
        if not email:
            raise AuthenticationError("Google account has no email address")

        return LoginEvent(
            email=email,
            name=profile.get("name"),
            picture=profile.get("picture"),
        )


# Singleton instance; tests replace it with one built on a mock transport
google_oauth = GoogleOAuthClient()


# ══════════════════════════════════════════════════════════════════════════
# Session access
# ══════════════════════════════════════════════════════════════════════════


def read_session_identity(request: Request) -> Optional[SessionIdentity]:
    """
    Reads the identity from the session cookie.

    A cookie that no longer validates (e.g. written by an older build) is
    treated as signed out and dropped.
    """
    raw = request.session.get(SESSION_IDENTITY_KEY)
    if not raw:
        return None
    try:
        return SessionIdentity.model_validate(raw)
    except ValueError:
        logger.warning("Discarding unreadable session identity")
        request.session.pop(SESSION_IDENTITY_KEY, None)
        return None


def store_session_identity(request: Request, identity: SessionIdentity) -> None:
    request.session[SESSION_IDENTITY_KEY] = identity.model_dump()


def clear_session(request: Request) -> None:
    request.session.clear()


def get_session_identity(request: Request) -> Optional[SessionIdentity]:
    """FastAPI dependency: the signed-in identity, or None."""
    return read_session_identity(request)
