"""
Family member repository.

Every read is scoped by owner: a member that belongs to another user is
treated exactly like a missing one.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eps_family.db.models.family_member import FamilyMember

MUTABLE_FIELDS = frozenset(
    {
        "eps_provider_id",
        "full_name",
        "document_type",
        "document_number",
        "birth_date",
        "address",
        "phone",
        "cellphone",
        "email",
        "department",
        "city",
        "regime",
        "relationship",
    }
)


async def create_member(
    db: AsyncSession,
    user_id: uuid.UUID,
    **fields: Any,
) -> FamilyMember:
    """Create a member owned by *user_id*."""
    member = FamilyMember(
        user_id=user_id,
        **{key: value for key, value in fields.items() if key in MUTABLE_FIELDS},
    )
    db.add(member)
    await db.flush()
    await db.refresh(member, attribute_names=["eps_provider"])
    return member


async def list_members(db: AsyncSession, user_id: uuid.UUID) -> list[FamilyMember]:
    """List the owner's members ordered by full name."""
    stmt = (
        select(FamilyMember)
        .where(FamilyMember.user_id == user_id)
        .order_by(FamilyMember.full_name.asc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_member(
    db: AsyncSession,
    member_id: uuid.UUID,
    user_id: uuid.UUID,
) -> FamilyMember | None:
    """Fetch a member by id, only if it belongs to *user_id*."""
    stmt = select(FamilyMember).where(
        FamilyMember.id == member_id,
        FamilyMember.user_id == user_id,
    )
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def update_member(
    db: AsyncSession,
    member: FamilyMember,
    **fields: Any,
) -> FamilyMember:
    """Apply the supplied fields to *member*."""
    for key, value in fields.items():
        if key not in MUTABLE_FIELDS:
            continue
        setattr(member, key, value)

    await db.flush()
    await db.refresh(member, attribute_names=["eps_provider", "updated_at"])
    return member


async def delete_member(db: AsyncSession, member: FamilyMember) -> None:
    await db.delete(member)
    await db.flush()
