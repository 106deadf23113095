"""Public EPS provider catalogue."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eps_family.api.deps import get_db
from eps_family.api.schemas.eps_providers import EpsProviderDetail, EpsProviderSummary
from eps_family.core.errors import NotFoundError
from eps_family.repositories import eps_providers as provider_repository

router = APIRouter(prefix="/eps-providers", tags=["EPS Providers"])


@router.get("", response_model=list[EpsProviderSummary])
async def list_eps_providers(db: AsyncSession = Depends(get_db)) -> list[EpsProviderSummary]:
    """List active EPS providers ordered by name."""
    providers = await provider_repository.list_active_providers(db)
    return [EpsProviderSummary.model_validate(provider) for provider in providers]


@router.get("/{provider_id}", response_model=EpsProviderDetail)
async def get_eps_provider(provider_id: UUID, db: AsyncSession = Depends(get_db)) -> EpsProviderDetail:
    provider = await provider_repository.get_provider_by_id(db, provider_id)
    if provider is None:
        raise NotFoundError("EPS provider not found")
    return EpsProviderDetail.model_validate(provider)
