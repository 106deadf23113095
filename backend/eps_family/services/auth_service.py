"""
Session manager — registration, login, access-token refresh and logout.

State lives entirely in the two external stores: the users table and one
Redis record per user holding the digest of the live refresh token.  The
service itself is stateless and safe to construct per request.

Lifecycle per user::

    NoSession --login--> ActiveSession --(logout | TTL expiry | next login)--> NoSession

`refresh` only reads the session record; refresh tokens are not rotated.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from eps_family.cache.session_cache import SessionCache
from eps_family.core.config import settings
from eps_family.core.constants import TokenType
from eps_family.core.errors import ConflictError, UnauthorizedError
from eps_family.core.logging import get_logger
from eps_family.core.security import (
    InvalidTokenError,
    TokenClaims,
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    hash_token,
    token_matches_hash,
    verify_password,
)
from eps_family.db.models.user import User
from eps_family.repositories import users as user_repository

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INACTIVE_USER = "User is inactive"
INVALID_REFRESH_TOKEN = "Invalid refresh token"
REVOKED_REFRESH_TOKEN = "Refresh token has been revoked"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class AuthService:
    """Orchestrates the credential store, session cache and token codec."""

    def __init__(self, db: AsyncSession, cache: SessionCache):
        self.db = db
        self.cache = cache

    async def register(self, *, email: str, password: str, full_name: str) -> User:
        """Create an account. Raises ConflictError when the email is taken."""
        existing = await user_repository.get_user_by_email(self.db, email)
        if existing is not None:
            raise ConflictError("A user with this email already exists")

        user = await user_repository.create_user(
            self.db,
            email=email,
            password_hash=await asyncio.to_thread(hash_password, password),
            full_name=full_name,
        )
        logger.info("User registered", user_id=str(user.id))
        return user

    async def login(self, *, email: str, password: str) -> TokenPair:
        """
        Verify credentials and open a session, replacing any previous one.

        Unknown email and wrong password produce the same error.  The
        inactive check runs only after the password matched, so its
        distinct message reveals that the account exists.
        """
        user = await user_repository.get_user_by_email(self.db, email)
        if user is None:
            raise UnauthorizedError(INVALID_CREDENTIALS)

        # bcrypt is CPU-bound; keep it off the event loop.
        if not await asyncio.to_thread(verify_password, password, user.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not user.is_active:
            raise UnauthorizedError(INACTIVE_USER)

        claims = TokenClaims(subject=str(user.id), email=user.email)
        access_token = create_access_token(claims)
        refresh_token = create_refresh_token(claims)

        # A cache failure propagates and the tokens are never returned.
        await self.cache.store(
            claims.subject,
            hash_token(refresh_token),
            settings.REFRESH_TOKEN_TTL_SECONDS,
        )

        logger.info("User logged in", user_id=claims.subject)
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def refresh(self, refresh_token: str) -> str:
        """Exchange a live refresh token for a new access token."""
        try:
            claims = decode_token(refresh_token, TokenType.REFRESH)
        except InvalidTokenError:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN) from None

        stored_hash = await self.cache.get(claims.subject)
        if stored_hash is None:
            raise UnauthorizedError(REVOKED_REFRESH_TOKEN)

        # Mismatch means a newer login replaced this session.
        if not token_matches_hash(refresh_token, stored_hash):
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        return create_access_token(claims)

    async def logout(self, user_id: str) -> None:
        """Revoke the user's refresh session. Idempotent."""
        await self.cache.revoke(user_id)
        logger.info("User logged out", user_id=user_id)
