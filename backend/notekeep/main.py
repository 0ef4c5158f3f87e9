"""
NoteKeep Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn notekeep.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐ ┌──────────┐     │
    │  │  Req ID  │→│ Logging  │→│ Session  │→│   CORS   │     │
    │  └──────────┘ └──────────┘ └──────────┘ └──────────┘     │
    │                                                          │
    │  Routes:                                                 │
    │  /api/notes  /api/auth/*  /api/access-code               │
    │  /ui/login   /ui/notes    /health                        │
    │                                                          │
    │  State:                                                  │
    │  app.state.note_store  (one NoteStore per process)       │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration: missing OAuth or session secrets abort startup
    3. Log startup complete

    Shutdown:
    1. Log how many notes are being discarded (memory only)
"""

import logging
import secrets
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from notekeep import __version__
from notekeep.config import settings
from notekeep.exceptions import (
    AuthenticationError,
    ConfigurationError,
    NoteKeepError,
)
from notekeep.middleware.logging import RequestLoggingMiddleware
from notekeep.middleware.request_id import RequestIDMiddleware, request_id_var
from notekeep.models.note import default_seed
from notekeep.routes import access_code, auth, health, notes, ui
from notekeep.store import NoteStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every request at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup validates configuration and refuses to serve without the
    OAuth client and session secret. Shutdown drops the in-memory notes.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("NoteKeep Backend %s starting up...", __version__)

    try:
        settings.validate_required()
    except ConfigurationError as e:
        logger.error("%s", e.message)
        logger.error("Fix the configuration and restart the server.")
        raise

    store: NoteStore = app.state.note_store
    logger.info("Note store ready with %d notes (in memory, volatile)", len(store))
    logger.info("Simulated datastore latency: %dms", settings.simulated_latency_ms)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("NoteKeep Backend shutting down; discarding %d notes", len(store))
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and a uniform JSON body.

    Handler hierarchy:
        RequestValidationError  → 400 Bad Request (generic, no field details)
        AuthenticationError     → 401 Unauthorized
        ConfigurationError      → 500 Internal Server Error
        NoteKeepError (base)    → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Details such as stack traces and upstream payloads are logged, never returned.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_request(request: Request, exc: RequestValidationError):
        """Malformed body or parameters: deliberately generic."""
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request to %s: %d error(s)", rid, request.url.path, len(exc.errors()))
        return JSONResponse(
            status_code=400,
            content={
                "error": "bad_request",
                "message": "Malformed request body",
                "request_id": rid,
            },
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Authentication failed: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=401,
            content={
                "error": "authentication_failed",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(ConfigurationError)
    async def handle_configuration_error(request: Request, exc: ConfigurationError):
        rid = request_id_var.get("")
        logger.error("[%s] Configuration error: %s", rid, exc.message)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "The server is not configured for sign-in.",
                "request_id": rid,
            },
        )

    @app.exception_handler(NoteKeepError)
    async def handle_app_error(request: Request, exc: NoteKeepError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, full stack trace in the server log only."""
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[NoteStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: NoteStore to serve. Defaults to a new store holding the seed
               notes. Tests pass their own to start from a known state.

    Returns: Fully configured FastAPI instance.
    """
    app = FastAPI(
        title="NoteKeep API",
        description="Google sign-in and per-user notes held in memory.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.note_store = store if store is not None else NoteStore(default_seed())

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → Session → CORS → routes

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Without a configured secret the lifespan refuses to start; the random
    # key only matters for code paths that skip the lifespan (test clients)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret or secrets.token_urlsafe(32),
        session_cookie="notekeep_session",
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.oauth_redirect_base_url.startswith("https://"),
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(auth.router)
    app.include_router(access_code.router)
    app.include_router(ui.router)
    app.include_router(health.router)

    return app


# uvicorn expects `notekeep.main:app` to be importable
app = create_app()
