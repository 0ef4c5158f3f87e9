"""
NoteKeep Backend — Access Code Upstream Client
================================================

What:  Fetches the "unique generated code" from a third-party endpoint.
Why:   GET /api/access-code is a thin passthrough of this upstream value;
       the browser never calls the upstream directly.
How:   httpx GET with no caching. Transport failures (connection refused,
       timeouts) are retried with tenacity; an HTTP error status from the
       upstream is NOT retried and is passed back as UpstreamServiceError
       carrying that status.

Error Mapping:
    upstream 2xx              → code string (or None if not a string)
    upstream 4xx/5xx          → UpstreamServiceError(status_code=<upstream>)
    no response after retries → UpstreamServiceError(status_code=500)
"""

import logging
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from notekeep.config import settings
from notekeep.exceptions import UpstreamServiceError

logger = logging.getLogger(__name__)


class AccessCodeService:
    """
    Client for the access-code upstream.

    Args:
        transport: Optional httpx transport, used by tests to stub the upstream.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    async def _get_once(self, client: httpx.AsyncClient) -> httpx.Response:
        return await client.get(
            settings.access_code_upstream_url,
            headers={"Cache-Control": "no-store"},
        )

    async def fetch_code(self) -> Optional[str]:
        """
        Fetch the current code from the upstream.

        Returns:
            The upstream `uniqueGeneratedCode` if it is a string, else None.

        Raises:
            UpstreamServiceError: Non-2xx upstream status, unreadable body,
                or no response after all retry attempts.
        """
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=settings.upstream_timeout_seconds,
            ) as client:
                response = None
                async for attempt in AsyncRetrying(
                    stop=stop_after_attempt(settings.upstream_retry_attempts),
                    wait=wait_exponential_jitter(multiplier=0.2, max=2),
                    retry=retry_if_exception_type(httpx.TransportError),
                    before_sleep=before_sleep_log(logger, logging.WARNING),
                    reraise=False,
                ):
                    with attempt:
                        response = await self._get_once(client)
        except RetryError as e:
            last = e.last_attempt.exception() if e.last_attempt else None
            logger.error("Access code upstream unreachable: %s", last)
            raise UpstreamServiceError(
                "Unable to fetch access code",
                status_code=500,
                context={"error_type": type(last).__name__ if last else "unknown"},
            ) from e
        except httpx.HTTPError as e:
            logger.error("Access code upstream request failed: %s", e)
            raise UpstreamServiceError(
                "Unable to fetch access code",
                status_code=500,
                context={"error_type": type(e).__name__},
            ) from e

        if not response.is_success:
            logger.warning("Access code upstream returned %d", response.status_code)
            raise UpstreamServiceError(
                "Failed to fetch access code",
                status_code=response.status_code,
            )

        try:
            data: Any = response.json()
        except ValueError as e:
            logger.error("Access code upstream returned a non-JSON body")
            raise UpstreamServiceError("Unable to fetch access code", status_code=500) from e

        code = data.get("uniqueGeneratedCode") if isinstance(data, dict) else None
        return code if isinstance(code, str) else None


# Singleton instance; tests replace it with one built on a mock transport
access_code_service = AccessCodeService()
