"""
Declarative base and column helpers shared by every model.

Convention:
    - One table per file under `eps_family/db/models/`
    - Primary keys are UUID v4 generated client-side
    - Timestamps are timezone-aware UTC
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def generate_uuid() -> uuid.UUID:
    return uuid.uuid4()


def utcnow() -> datetime:
    """Current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)
