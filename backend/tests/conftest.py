"""
NoteKeep Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── note_store: NoteStore holding the seed notes
    ├── empty_store: NoteStore with nothing in it
    ├── app: FastAPI app bound to note_store
    ├── test_client: HTTPX AsyncClient talking to `app`
    ├── identity: A signed-in SessionIdentity (user 101)
    └── signed_in_client: test_client with an identity in its session cookie
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["SIMULATED_LATENCY_MS"] = "0"
os.environ["UPSTREAM_RETRY_ATTEMPTS"] = "1"
os.environ["LOG_LEVEL"] = "WARNING"

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notekeep.main import create_app
from notekeep.models.note import Note, default_seed
from notekeep.schemas.auth import LoginEvent, SessionIdentity
from notekeep.services import auth_service
from notekeep.services.auth_service import GoogleOAuthClient
from notekeep.store import NoteStore


@pytest.fixture
def note_store():
    """A store holding the twelve seed notes (ids 101-104, three each)."""
    return NoteStore(default_seed())


@pytest.fixture
def empty_store():
    return NoteStore()


@pytest.fixture
def sample_note():
    return Note(
        id=111,
        title="T",
        content="C",
        date="2024-01-01",
        owner="a@x.com",
    )


@pytest.fixture
def identity():
    return SessionIdentity(email="vanshikarajput@gmail.com", name="Vanshika", user_id=101)


@pytest.fixture
def login_event():
    return LoginEvent(email="new.user@example.com", name="New User", picture="https://example.com/p.png")


@pytest.fixture
def app(note_store):
    return create_app(store=note_store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app (no server).

    ASGITransport does not run the lifespan, so startup validation is
    exercised separately in test_app.py.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def google_transport(email="vanshikarajput@gmail.com", token_status=200, userinfo_status=200):
    """
    httpx.MockTransport standing in for Google's token and userinfo endpoints.

    The returned transport records every request on `.calls`.
    """
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.url.path.endswith("/token"):
            if token_status != 200:
                return httpx.Response(token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json={"access_token": "ya29.test-token", "token_type": "Bearer"})
        if request.url.path.endswith("/userinfo"):
            if userinfo_status != 200:
                return httpx.Response(userinfo_status, json={"error": "unauthorized"})
            return httpx.Response(200, json={"email": email, "name": "Test User", "picture": None})
        return httpx.Response(404)

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport


@pytest.fixture
def mock_google(monkeypatch):
    """Swaps the module-level Google OAuth client for one on a mock transport."""
    transport = google_transport()
    monkeypatch.setattr(auth_service, "google_oauth", GoogleOAuthClient(transport=transport))
    return transport


async def sign_in(client: AsyncClient) -> httpx.Response:
    """Runs the full sign-in redirect dance against a mocked Google."""
    start = await client.get("/api/auth/signin/google")
    assert start.status_code == 302
    state = httpx.URL(start.headers["location"]).params["state"]
    return await client.get(f"/api/auth/callback/google?code=test-code&state={state}")


@pytest_asyncio.fixture
async def signed_in_client(test_client, mock_google):
    response = await sign_in(test_client)
    assert response.status_code == 302
    return test_client


@pytest.fixture
def sign_in_flow(mock_google):
    """The sign_in helper, with Google already mocked."""
    return sign_in


@pytest.fixture
def google_transport_factory():
    """Builds Google mock transports with chosen failure modes."""
    return google_transport
