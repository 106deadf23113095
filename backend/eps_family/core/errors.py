"""
Application exception hierarchy.

Every error raised on purpose by services and dependencies is an
``AppError`` tagged with an ``ErrorKind``.  The HTTP boundary maps the
kind to a status code through ``STATUS_BY_KIND`` and never inspects the
error structurally.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    INTERNAL = "INTERNAL"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.INTERNAL: 500,
}


def status_for(kind: ErrorKind) -> int:
    """Return the HTTP status code for an error kind."""
    return STATUS_BY_KIND[kind]


class AppError(Exception):
    """Base exception for all application errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind | None = None,
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        if kind is not None:
            self.kind = kind
        self.message = message
        self.errors = errors or []
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return status_for(self.kind)


class ConflictError(AppError):
    """A unique key already exists."""

    kind = ErrorKind.CONFLICT


class UnauthorizedError(AppError):
    """Any credential or token failure."""

    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(AppError):
    """The requested entity does not exist (or is not visible to the caller)."""

    kind = ErrorKind.NOT_FOUND


class InternalError(AppError):
    kind = ErrorKind.INTERNAL
