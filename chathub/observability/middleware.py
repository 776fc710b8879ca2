"""
FastAPI middleware for observability.

Request logging and correlation ID middleware. Health checks are logged at
DEBUG so polling does not drown out real traffic.

Dependencies: fastapi, starlette, chathub.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from chathub.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
QUIET_PATH_PREFIXES = ("/api/health",)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log one line per request with status and timing.

    For the streaming chat endpoint the timing covers time to first byte;
    the body keeps streaming after this middleware returns.
    """

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        method = request.method
        path = request.url.path
        quiet = path.startswith(QUIET_PATH_PREFIXES)

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} failed",
                extra={
                    "method": method,
                    "path": path,
                    "process_time_ms": _elapsed_ms(started),
                    "error_type": type(e).__name__,
                    "request_id": get_correlation_id(),
                },
            )
            raise

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.DEBUG if quiet else logging.INFO

        logger.log(
            level,
            f"{method} {path} - {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "query_string": request.url.query or None,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(started),
                "request_id": get_correlation_id(),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind the request's correlation ID (or a fresh one) and echo it back."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
