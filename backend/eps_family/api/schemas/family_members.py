"""Family member request/response schemas."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import EmailStr, Field, field_validator

from eps_family.api.schemas.common import CamelModel
from eps_family.api.schemas.eps_providers import EpsProviderSummary
from eps_family.core.constants import DocumentType


class FamilyMemberUpdate(CamelModel):
    """Partial update; only fields present in the payload are applied."""

    eps_provider_id: uuid.UUID | None = None
    full_name: str | None = Field(default=None, min_length=2, max_length=255)
    document_type: DocumentType | None = None
    document_number: str | None = Field(default=None, max_length=50)
    birth_date: date | None = None
    address: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    cellphone: str | None = Field(default=None, max_length=50)
    email: EmailStr | None = None
    department: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    regime: str | None = Field(default=None, max_length=50)
    relationship: str | None = Field(default=None, min_length=2, max_length=50)

    @field_validator("full_name", "relationship")
    @classmethod
    def _not_null(cls, value: str | None) -> str | None:
        # Omitted keeps the stored value; an explicit null cannot clear a required column.
        if value is None:
            raise ValueError("must not be null")
        return value


class FamilyMemberCreate(FamilyMemberUpdate):
    full_name: str = Field(..., min_length=2, max_length=255)
    relationship: str = Field(..., min_length=2, max_length=50)


class FamilyMemberResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    eps_provider_id: uuid.UUID | None
    full_name: str
    document_type: DocumentType | None
    document_number: str | None
    birth_date: date | None
    address: str | None
    phone: str | None
    cellphone: str | None
    email: str | None
    department: str | None
    city: str | None
    regime: str | None
    relationship: str
    eps_provider: EpsProviderSummary | None
    created_at: datetime
    updated_at: datetime
