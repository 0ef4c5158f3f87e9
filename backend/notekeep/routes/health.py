"""
NoteKeep Backend — Health Check Route
=======================================

What:  Liveness/readiness probe for Docker and load balancers.
How:   There is no database to ping; the check reports how many notes are
       held in memory and whether the OAuth/session secrets are present.

Status levels:
    - healthy:       secrets configured (HTTP 200)
    - misconfigured: at least one required secret missing (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notekeep import __version__
from notekeep.config import settings
from notekeep.schemas.note import HealthResponse
from notekeep.store import NoteStore, get_note_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: NoteStore = Depends(get_note_store)) -> JSONResponse:
    missing = settings.missing_required()
    overall = "misconfigured" if missing else "healthy"
    if missing:
        logger.warning("Health check: %d required setting(s) missing", len(missing))

    body = HealthResponse(
        status=overall,
        version=__version__,
        notes_count=len(store),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=503 if missing else 200, content=body.model_dump())
