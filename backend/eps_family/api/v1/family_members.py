"""Family member CRUD, scoped to the authenticated user."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eps_family.api.deps import get_current_user, get_db
from eps_family.api.schemas.common import MessageResponse
from eps_family.api.schemas.family_members import (
    FamilyMemberCreate,
    FamilyMemberResponse,
    FamilyMemberUpdate,
)
from eps_family.db.models.user import User
from eps_family.services import family_members as member_service

router = APIRouter(prefix="/family-members", tags=["Family Members"])


@router.post("", response_model=FamilyMemberResponse, status_code=status.HTTP_201_CREATED)
async def create_family_member(
    payload: FamilyMemberCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FamilyMemberResponse:
    """Register a dependent for the current user."""
    member = await member_service.create(db, current_user.id, payload.model_dump())
    return FamilyMemberResponse.model_validate(member)


@router.get("", response_model=list[FamilyMemberResponse])
async def list_family_members(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[FamilyMemberResponse]:
    members = await member_service.find_all(db, current_user.id)
    return [FamilyMemberResponse.model_validate(member) for member in members]


@router.get("/{member_id}", response_model=FamilyMemberResponse)
async def get_family_member(
    member_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FamilyMemberResponse:
    member = await member_service.find_one(db, member_id, current_user.id)
    return FamilyMemberResponse.model_validate(member)


@router.put("/{member_id}", response_model=FamilyMemberResponse)
async def update_family_member(
    member_id: UUID,
    payload: FamilyMemberUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> FamilyMemberResponse:
    """Change only the fields present in the payload."""
    member = await member_service.update(
        db, member_id, current_user.id, payload.model_dump(exclude_unset=True)
    )
    return FamilyMemberResponse.model_validate(member)


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_family_member(
    member_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    await member_service.remove(db, member_id, current_user.id)
    return MessageResponse(message="Family member deleted successfully")
