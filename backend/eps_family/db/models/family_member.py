"""
FamilyMember — a dependent registered by a user, optionally affiliated
with an EPS provider.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.orm import relationship as orm_relationship

from eps_family.core.constants import DocumentType
from eps_family.db.models.base import Base, generate_uuid, utcnow


class FamilyMember(Base):
    __tablename__ = "family_members"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=generate_uuid
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    eps_provider_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("eps_providers.id", ondelete="SET NULL"), nullable=True
    )

    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    document_type: Mapped[Optional[DocumentType]] = mapped_column(
        Enum(DocumentType, name="document_type"), nullable=True
    )
    document_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    birth_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Contact
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    cellphone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    department: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    regime: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # Contributivo | Subsidiado
    relationship: Mapped[str] = mapped_column(String(50), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    user = orm_relationship("User", back_populates="family_members")
    eps_provider = orm_relationship("EpsProvider", lazy="joined")

    def __repr__(self) -> str:
        return f"<FamilyMember id={self.id} {self.full_name} user={self.user_id}>"
