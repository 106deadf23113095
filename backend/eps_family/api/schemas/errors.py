"""Uniform error envelope returned by every failing request."""

from __future__ import annotations

from eps_family.api.schemas.common import CamelModel


class ErrorDetail(CamelModel):
    field: str
    message: str


class ErrorResponse(CamelModel):
    status_code: int
    message: str
    errors: list[ErrorDetail] | None = None
    timestamp: str
    path: str
