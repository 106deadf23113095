"""
User repository containing all data-access operations for the users table.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eps_family.db.models.user import User


async def create_user(
    db: AsyncSession,
    *,
    email: str,
    password_hash: str,
    full_name: str,
) -> User:
    """Insert a user whose password has already been hashed."""
    user = User(
        email=email,
        password_hash=password_hash,
        full_name=full_name.strip(),
    )
    db.add(user)
    await db.flush()
    return user


async def get_active_user_by_id(db: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Fetch an active user by primary key."""
    stmt = select(User).where(User.id == user_id, User.is_active.is_(True))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch a user by email address, matched exactly as stored."""
    stmt = select(User).where(User.email == email)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()
