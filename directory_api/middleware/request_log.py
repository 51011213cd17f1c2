"""Request logging middleware — one log line per request, bounded by a deadline."""


import asyncio
import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from directory_api.core.config import settings

logger = logging.getLogger(__name__)

# Methods that mutate state
_WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of every request.

    The downstream handler runs under ``settings.request_timeout_seconds``;
    when the deadline passes the caller gets a 504 and the late response is
    discarded.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        try:
            response = await asyncio.wait_for(
                call_next(request), timeout=settings.request_timeout_seconds
            )
        except asyncio.TimeoutError:
            duration_ms = round((time.monotonic() - start) * 1000)
            logger.error(
                "%s %s timed out after %dms", request.method, request.url.path, duration_ms
            )
            return JSONResponse(
                status_code=504,
                content={"error": {"code": "TIMEOUT", "message": "Request timed out"}},
            )
        duration_ms = round((time.monotonic() - start) * 1000)

        level = logging.INFO if request.method in _WRITE_METHODS else logging.DEBUG
        if response.status_code >= 500:
            level = logging.ERROR
        logger.log(
            level,
            "%s %s → %d (%dms)",
            request.method, request.url.path, response.status_code, duration_ms,
        )
        return response
