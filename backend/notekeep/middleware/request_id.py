"""
NoteKeep Backend — Request ID Middleware
==========================================

What:  Tags every request with a short correlation id and echoes it back
       in the X-Request-ID response header.
Why:   Notes operations, the OAuth callback and the access-denied log line
       for a single page load all share one id in the logs.
How:   Reuses a client-sent X-Request-ID when present, otherwise generates
       one; stores it in a ContextVar (for loggers and error handlers) and on
       request.state (for route handlers).
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request id and copies it onto the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate log lines
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
