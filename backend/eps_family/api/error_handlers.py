"""
Exception boundary: every failure leaves the API as the same envelope

    {statusCode, message, errors?, timestamp, path}

Only server-side (>= 500) failures are logged; internal error codes and
stack traces never reach the client.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound
from starlette.exceptions import HTTPException as StarletteHTTPException

from eps_family.api.schemas.errors import ErrorDetail, ErrorResponse
from eps_family.core.errors import AppError, ErrorKind, status_for
from eps_family.core.logging import get_logger

logger = get_logger(__name__)

UNIQUE_VIOLATION = "23505"
INTERNAL_MESSAGE = "Internal server error"

_KEY_DETAIL = re.compile(r"Key \((?P<fields>[^)]+)\)=")


def _error_response(
    request: Request,
    status_code: int,
    message: str,
    errors: list[ErrorDetail] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        status_code=status_code,
        message=message,
        errors=errors or None,
        timestamp=datetime.now(timezone.utc).isoformat(),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _conflicting_fields(exc: IntegrityError) -> str:
    """Pull the column list out of the driver's ``Key (col)=(value)`` detail."""
    orig = exc.orig
    candidates = [
        getattr(orig, "detail", None),
        getattr(getattr(orig, "__cause__", None), "detail", None),
        str(orig),
    ]
    for text in candidates:
        if not text:
            continue
        match = _KEY_DETAIL.search(str(text))
        if match:
            return match.group("fields")
    return "unknown"


def _validation_errors(exc: RequestValidationError) -> list[ErrorDetail]:
    details = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[-1]) if loc else "unknown"
        details.append(ErrorDetail(field=field, message=error.get("msg", "Invalid value")))
    return details


def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        method=request.method,
        path=request.url.path,
        status_code=500,
        exc_info=exc,
    )
    return _error_response(request, 500, INTERNAL_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the exception handlers that produce the error envelope."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if exc.kind is ErrorKind.INTERNAL:
            return _internal_error(request, exc)
        errors = [ErrorDetail(**error) for error in exc.errors]
        return _error_response(request, status_for(exc.kind), exc.message, errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            return _internal_error(request, exc)
        return _error_response(request, exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return _error_response(
            request,
            status_for(ErrorKind.VALIDATION),
            "Validation failed",
            _validation_errors(exc),
        )

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(request: Request, exc: IntegrityError):
        if _sqlstate(exc) != UNIQUE_VIOLATION:
            return _internal_error(request, exc)
        fields = _conflicting_fields(exc)
        return _error_response(
            request,
            status_for(ErrorKind.CONFLICT),
            f"A record with this {fields} already exists",
        )

    @app.exception_handler(NoResultFound)
    async def handle_no_result(request: Request, exc: NoResultFound):
        return _error_response(request, status_for(ErrorKind.NOT_FOUND), "Record not found")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        return _internal_error(request, exc)
