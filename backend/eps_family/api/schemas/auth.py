"""Authentication request/response schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from eps_family.api.schemas.common import CamelModel

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


class RegisterRequest(CamelModel):
    """Request payload for the register endpoint."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=MAX_PASSWORD_BYTES)
    full_name: str = Field(..., min_length=2, max_length=255)

    @field_validator("password")
    @classmethod
    def password_fits_kdf(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(CamelModel):
    """Request payload for the login endpoint."""

    email: EmailStr
    password: str = Field(..., min_length=1, max_length=256)


class UserSummary(CamelModel):
    """Registered user, without the password hash."""

    id: uuid.UUID
    email: str
    full_name: str
    is_active: bool
    created_at: datetime


class AccessTokenResponse(CamelModel):
    access_token: str


class MissingRefreshTokenResponse(CamelModel):
    """200-status body returned when the refresh cookie is absent."""

    status_code: int = 401
    message: str = "No refresh token provided"
