"""EPS provider response schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from eps_family.api.schemas.common import CamelModel


class EpsProviderSummary(CamelModel):
    id: uuid.UUID
    name: str
    code: str


class EpsProviderDetail(EpsProviderSummary):
    parser_key: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
