"""HTTP request logging middleware."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from eps_family.core.logging import get_logger

logger = get_logger("http")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status code and duration of every request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # Unhandled errors are rendered as a 500 by the outermost handler.
            _log_request(request, 500, started)
            raise
        _log_request(request, response.status_code, started)
        return response


def _log_request(request: Request, status_code: int, started: float) -> None:
    duration_ms = round((time.perf_counter() - started) * 1000)
    logger.info(
        f"{request.method} {request.url.path} {status_code} - {duration_ms}ms",
        method=request.method,
        path=request.url.path,
        status_code=status_code,
        duration_ms=duration_ms,
    )
