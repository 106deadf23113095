"""Shared dependencies for API routes."""

from __future__ import annotations

import uuid
from typing import AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eps_family.cache.session_cache import SessionCache
from eps_family.core.constants import TokenType
from eps_family.core.errors import UnauthorizedError
from eps_family.core.redis import get_redis
from eps_family.core.security import InvalidTokenError, decode_token
from eps_family.db.models.user import User
from eps_family.db.session import get_db as _get_db
from eps_family.repositories import users as user_repository
from eps_family.services.auth_service import AuthService

security_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session."""
    async for session in _get_db():
        yield session


def get_session_cache() -> SessionCache:
    return SessionCache(get_redis())


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    cache: SessionCache = Depends(get_session_cache),
) -> AuthService:
    return AuthService(db, cache)


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(security_scheme),
) -> User:
    """Resolve the active user behind a bearer access token."""
    if credentials is None:
        raise UnauthorizedError("Authentication credentials were not provided")

    try:
        claims = decode_token(credentials.credentials, TokenType.ACCESS)
        user_id = uuid.UUID(claims.subject)
    except (InvalidTokenError, ValueError):
        raise UnauthorizedError("Invalid or expired token") from None

    user = await user_repository.get_active_user_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found or inactive")

    return user
