"""
Models package — re-exports Base and all models.

Import models here so Alembic's `target_metadata = Base.metadata`
picks up every table automatically.

When adding a new model:
    1. Create `eps_family/db/models/<table_name>.py`
    2. Import it here
"""

from eps_family.db.models.base import Base
from eps_family.db.models.eps_provider import EpsProvider
from eps_family.db.models.family_member import FamilyMember
from eps_family.db.models.user import User

__all__ = [
    "Base",
    "User",
    "EpsProvider",
    "FamilyMember",
]
