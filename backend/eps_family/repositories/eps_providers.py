"""EPS provider repository (read-only at runtime; rows come from the seed script)."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from eps_family.db.models.base import utcnow
from eps_family.db.models.eps_provider import EpsProvider


async def list_active_providers(db: AsyncSession) -> list[EpsProvider]:
    """List active providers ordered by name."""
    stmt = (
        select(EpsProvider)
        .where(EpsProvider.is_active.is_(True))
        .order_by(EpsProvider.name.asc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_provider_by_id(db: AsyncSession, provider_id: uuid.UUID) -> EpsProvider | None:
    return await db.get(EpsProvider, provider_id)


async def upsert_provider(
    db: AsyncSession,
    *,
    name: str,
    code: str,
    parser_key: str | None,
) -> None:
    """Insert a provider, or update name/parser_key when the code exists."""
    stmt = insert(EpsProvider).values(
        id=uuid.uuid4(),
        name=name,
        code=code,
        parser_key=parser_key,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["code"],
        set_={
            "name": stmt.excluded.name,
            "parser_key": stmt.excluded.parser_key,
            "updated_at": utcnow(),
        },
    )
    await db.execute(stmt)
    await db.flush()
