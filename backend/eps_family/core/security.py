"""
Credential primitives: password hashing, the JWT token codec and the
refresh-token digest stored in the session cache.
"""

from __future__ import annotations

import hashlib
import hmac
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from eps_family.core.config import settings
from eps_family.core.constants import TokenType


class InvalidTokenError(Exception):
    """Token is malformed, expired, tampered with or of the wrong type."""


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims carried by both access and refresh tokens."""

    subject: str
    email: str


# ─── Passwords ────────────────────────────────
def hash_password(password: str) -> str:
    """Derive a salted bcrypt hash of *password*."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check of *password* against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


# ─── Token codec ──────────────────────────────
def _expires_delta(token_type: TokenType) -> timedelta:
    if token_type is TokenType.ACCESS:
        return timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    return timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)


def create_token(
    claims: TokenClaims,
    token_type: TokenType,
    *,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign *claims* into a compact JWT of the given type."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": claims.subject,
        "email": claims.email,
        "type": token_type.value,
        "iat": now,
        "exp": now + (expires_delta or _expires_delta(token_type)),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(claims: TokenClaims) -> str:
    return create_token(claims, TokenType.ACCESS)


def create_refresh_token(claims: TokenClaims) -> str:
    return create_token(claims, TokenType.REFRESH)


def decode_token(token: str, expected_type: TokenType) -> TokenClaims:
    """
    Verify signature, expiry and type of *token* and return its claims.

    Raises InvalidTokenError on any failure; callers collapse it into a
    single generic message.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    if payload.get("type") != expected_type.value:
        raise InvalidTokenError("unexpected token type")

    email = payload.get("email")
    if not isinstance(email, str):
        raise InvalidTokenError("missing email claim")

    return TokenClaims(subject=payload["sub"], email=email)


# ─── Refresh-token digest ─────────────────────
def hash_token(token: str) -> str:
    """SHA-256 hex digest of a token, as stored in the session cache."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def token_matches_hash(token: str, token_hash: str) -> bool:
    return hmac.compare_digest(hash_token(token), token_hash)
