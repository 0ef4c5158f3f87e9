"""
NoteKeep Backend — Custom Exception Hierarchy
===============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.

Exception Hierarchy:
    NoteKeepError (base)
    ├── AuthenticationError      → 401 Unauthorized
    ├── ConfigurationError       → 500 Internal Server Error
    └── UpstreamServiceError     → upstream status (or 500), answered by the
                                   access-code route itself

What is NOT an exception:
    - Updating or deleting a note id that does not exist. Filtering by
      equality yields zero matches and the operation quietly does nothing.
    - Asking for someone else's notes. That is routed to the access-denied
      view, not rejected with an HTTP error.
"""

from typing import Any, Dict, Optional


class NoteKeepError(Exception):
    """
    Base exception for all NoteKeep application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthenticationError(NoteKeepError):
    """
    Raised when the Google sign-in handshake cannot be completed.

    When:    State mismatch on the callback, token exchange rejected,
             userinfo lookup failed, or the user denied consent.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(NoteKeepError):
    """
    Raised when required settings (OAuth client, session secret) are missing.

    Raised from the lifespan so the server refuses to start, and from the
    sign-in route so authentication never runs half-configured.
    """

    def __init__(
        self,
        message: str = "Server is not configured",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UpstreamServiceError(NoteKeepError):
    """
    Raised when a third-party HTTP endpoint fails.

    Attributes:
        status_code: Upstream HTTP status, or 500 when no response was received.
    """

    def __init__(
        self,
        message: str = "Upstream service request failed",
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
