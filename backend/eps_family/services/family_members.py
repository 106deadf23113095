"""Owner-scoped family member operations."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from eps_family.core.errors import NotFoundError
from eps_family.db.models.family_member import FamilyMember
from eps_family.repositories import family_members as member_repository

MEMBER_NOT_FOUND = "Family member not found"


async def create(db: AsyncSession, user_id: uuid.UUID, fields: dict[str, Any]) -> FamilyMember:
    return await member_repository.create_member(db, user_id, **fields)


async def find_all(db: AsyncSession, user_id: uuid.UUID) -> list[FamilyMember]:
    return await member_repository.list_members(db, user_id)


async def find_one(db: AsyncSession, member_id: uuid.UUID, user_id: uuid.UUID) -> FamilyMember:
    """Return the member, or raise NotFoundError if absent or owned by someone else."""
    member = await member_repository.get_member(db, member_id, user_id)
    if member is None:
        raise NotFoundError(MEMBER_NOT_FOUND)
    return member


async def update(
    db: AsyncSession,
    member_id: uuid.UUID,
    user_id: uuid.UUID,
    fields: dict[str, Any],
) -> FamilyMember:
    member = await find_one(db, member_id, user_id)
    return await member_repository.update_member(db, member, **fields)


async def remove(db: AsyncSession, member_id: uuid.UUID, user_id: uuid.UUID) -> None:
    member = await find_one(db, member_id, user_id)
    await member_repository.delete_member(db, member)
