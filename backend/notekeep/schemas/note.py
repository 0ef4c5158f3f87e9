"""
NoteKeep Backend — Pydantic Request/Response Schemas
======================================================

What:  Pydantic models defining the API contract between browser and backend.
Why:   Input validation, serialization, and OpenAPI doc generation.
How:   FastAPI validates request bodies against these models and serializes
       responses through them. Wire names follow the browser client
       (camelCase `deletedId`, `uniqueGeneratedCode`) via serialization aliases.

The Note record itself lives in notekeep.models.note and is used directly
as both request body and response model for create/update.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from notekeep.models.note import Note


# ══════════════════════════════════════════════════════════════════════════
# Notes
# ══════════════════════════════════════════════════════════════════════════


class NoteListResponse(BaseModel):
    """
    What:  Response of GET /api/notes.

    wow:
        The access flag. True for every userId filter except the reserved
        default id (and true when no filter is given). The Notes View shows
        the access-denied screen when it is true. It never restricts the
        `notes` array: matching notes are always returned.
    """
    wow: bool = Field(description="Access flag read by the Notes View")
    notes: List[Note] = Field(description="Notes whose id equals the filter, or all notes")


class DeleteNoteRequest(BaseModel):
    """Body of DELETE /api/notes."""
    id: int = Field(description="Every note with this id is removed")


class DeleteNoteResponse(BaseModel):
    deleted_id: int = Field(serialization_alias="deletedId", description="The id that was requested")


# ══════════════════════════════════════════════════════════════════════════
# Access Code
# ══════════════════════════════════════════════════════════════════════════


class AccessCodeResponse(BaseModel):
    """
    What:  Successful response of GET /api/access-code.
    Why nullable: The upstream value is passed through only when it is a string.
    """
    unique_generated_code: Optional[str] = Field(
        default=None,
        serialization_alias="uniqueGeneratedCode",
        description="Code returned by the upstream endpoint",
    )


# ══════════════════════════════════════════════════════════════════════════
# Error / Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "bad_request")
        message: Human-readable description
        details: Optional extra context
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, misconfigured")
    version: str = Field(description="Application version")
    notes_count: int = Field(description="Notes currently held in memory")
    uptime_seconds: float = Field(description="Seconds since service started")
