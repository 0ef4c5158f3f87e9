"""
NoteKeep Backend — Sign-In and Session Tests
==============================================

What:  Tests for build_session(), the Google OAuth client, and /api/auth/*.
How:   Google is replaced with an httpx.MockTransport (see conftest.py).

What we test:
    ✅ First-time login gets the default user id; existing sessions keep theirs
    ✅ build_session never mutates its input
    ✅ Callback verifies state, exchanges the code, stores the identity
    ✅ Token / userinfo failures surface as 401
    ✅ Sign-out clears the session and only redirects to local paths
    ✅ Missing OAuth configuration fails sign-in instead of degrading
"""

import httpx
import pytest

from notekeep.config import settings
from notekeep.exceptions import AuthenticationError
from notekeep.schemas.auth import SessionIdentity
from notekeep.services import auth_service
from notekeep.services.auth_service import GoogleOAuthClient, build_session


class TestBuildSession:

    def test_first_login_gets_default_id(self, login_event):
        session = build_session(None, login_event)

        assert session.user_id == 101
        assert session.email == "new.user@example.com"
        assert session.picture == "https://example.com/p.png"

    def test_existing_session_keeps_its_id(self, login_event):
        existing = SessionIdentity(email="old@example.com", user_id=555)

        session = build_session(existing, login_event)

        assert session.user_id == 555
        assert session.email == "new.user@example.com"

    def test_existing_without_id_is_first_login(self, login_event):
        existing = SessionIdentity(email="old@example.com")
        assert build_session(existing, login_event).user_id == 101

    def test_input_is_not_mutated(self, login_event):
        existing = SessionIdentity(email="old@example.com", user_id=555)

        session = build_session(existing, login_event)

        assert session is not existing
        assert existing.email == "old@example.com"
        assert existing.user_id == 555


class TestGoogleOAuthClient:

    def test_authorization_url(self):
        url = httpx.URL(GoogleOAuthClient().authorization_url("xyz", "http://localhost:8000/cb"))

        assert url.params["client_id"] == "test-client-id"
        assert url.params["state"] == "xyz"
        assert url.params["redirect_uri"] == "http://localhost:8000/cb"
        assert url.params["response_type"] == "code"
        assert "email" in url.params["scope"]

    @pytest.mark.asyncio
    async def test_exchange_and_userinfo(self, google_transport_factory):
        transport = google_transport_factory(email="someone@example.com")
        client = GoogleOAuthClient(transport=transport)

        token = await client.exchange_code("the-code", "http://localhost:8000/cb")
        login = await client.fetch_userinfo(token)

        assert token == "ya29.test-token"
        assert login.email == "someone@example.com"
        token_request = transport.calls[0]
        assert b"grant_type=authorization_code" in token_request.content
        assert b"client_secret=test-client-secret" in token_request.content
        assert transport.calls[1].headers["Authorization"] == "Bearer ya29.test-token"

    @pytest.mark.asyncio
    async def test_rejected_code(self, google_transport_factory):
        client = GoogleOAuthClient(transport=google_transport_factory(token_status=400))
        with pytest.raises(AuthenticationError):
            await client.exchange_code("bad", "http://localhost:8000/cb")

    @pytest.mark.asyncio
    async def test_userinfo_failure(self, google_transport_factory):
        client = GoogleOAuthClient(transport=google_transport_factory(userinfo_status=401))
        with pytest.raises(AuthenticationError):
            await client.fetch_userinfo("expired")

    @pytest.mark.asyncio
    async def test_network_error(self):
        def boom(request):
            raise httpx.ConnectError("unreachable", request=request)

        client = GoogleOAuthClient(transport=httpx.MockTransport(boom))
        with pytest.raises(AuthenticationError):
            await client.exchange_code("code", "http://localhost:8000/cb")


class TestAuthRoutes:

    @pytest.mark.asyncio
    async def test_signin_redirects_to_google(self, test_client, mock_google):
        response = await test_client.get("/api/auth/signin/google")

        assert response.status_code == 302
        location = httpx.URL(response.headers["location"])
        assert location.host == "accounts.google.com"
        assert location.params["redirect_uri"] == "http://localhost:8000/api/auth/callback/google"

    @pytest.mark.asyncio
    async def test_callback_creates_session(self, test_client, sign_in_flow):
        response = await sign_in_flow(test_client)

        assert response.status_code == 302
        assert response.headers["location"] == "/ui/notes?userId=101"

        session = await test_client.get("/api/auth/session")
        assert session.json() == {
            "user": {"email": "vanshikarajput@gmail.com", "name": "Test User", "image": None},
            "userId": 101,
        }

    @pytest.mark.asyncio
    async def test_second_login_keeps_user_id(self, test_client, sign_in_flow):
        await sign_in_flow(test_client)
        again = await sign_in_flow(test_client)

        assert again.headers["location"] == "/ui/notes?userId=101"

    @pytest.mark.asyncio
    async def test_callback_rejects_bad_state(self, test_client, mock_google):
        await test_client.get("/api/auth/signin/google")

        response = await test_client.get("/api/auth/callback/google?code=c&state=forged")

        assert response.status_code == 401
        assert response.json()["error"] == "authentication_failed"
        assert mock_google.calls == []

    @pytest.mark.asyncio
    async def test_callback_state_is_single_use(self, test_client, mock_google):
        start = await test_client.get("/api/auth/signin/google")
        state = httpx.URL(start.headers["location"]).params["state"]
        url = f"/api/auth/callback/google?code=c&state={state}"

        first = await test_client.get(url)
        replay = await test_client.get(url)

        assert first.status_code == 302
        assert replay.status_code == 401

    @pytest.mark.asyncio
    async def test_callback_consent_denied(self, test_client, mock_google):
        await test_client.get("/api/auth/signin/google")
        response = await test_client.get("/api/auth/callback/google?error=access_denied")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_callback_token_failure(self, test_client, monkeypatch, google_transport_factory):
        monkeypatch.setattr(
            auth_service, "google_oauth", GoogleOAuthClient(transport=google_transport_factory(token_status=500))
        )
        start = await test_client.get("/api/auth/signin/google")
        state = httpx.URL(start.headers["location"]).params["state"]

        response = await test_client.get(f"/api/auth/callback/google?code=c&state={state}")

        assert response.status_code == 401
        assert (await test_client.get("/api/auth/session")).json() == {}

    @pytest.mark.asyncio
    async def test_session_empty_when_signed_out(self, test_client):
        response = await test_client.get("/api/auth/session")
        assert response.json() == {}

    @pytest.mark.asyncio
    async def test_signout_clears_session(self, signed_in_client):
        response = await signed_in_client.post("/api/auth/signout?callbackUrl=/ui/login")

        assert response.status_code == 303
        assert response.headers["location"] == "/ui/login"
        assert (await signed_in_client.get("/api/auth/session")).json() == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("target", ["https://evil.example.com", "//evil.example.com", ""])
    async def test_signout_ignores_offsite_callback(self, test_client, target):
        response = await test_client.get("/api/auth/signout", params={"callbackUrl": target})
        assert response.headers["location"] == "/ui/login"

    @pytest.mark.asyncio
    async def test_signin_fails_without_configuration(self, test_client, monkeypatch):
        monkeypatch.setattr(settings, "google_client_secret", "")

        response = await test_client.get("/api/auth/signin/google")

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
