"""API schema package."""

from eps_family.api.schemas.auth import (
    AccessTokenResponse,
    LoginRequest,
    MissingRefreshTokenResponse,
    RegisterRequest,
    UserSummary,
)
from eps_family.api.schemas.common import CamelModel, MessageResponse
from eps_family.api.schemas.errors import ErrorDetail, ErrorResponse
from eps_family.api.schemas.eps_providers import EpsProviderDetail, EpsProviderSummary
from eps_family.api.schemas.family_members import (
    FamilyMemberCreate,
    FamilyMemberResponse,
    FamilyMemberUpdate,
)
from eps_family.api.schemas.health import HealthResponse

__all__ = [
    "AccessTokenResponse",
    "CamelModel",
    "EpsProviderDetail",
    "EpsProviderSummary",
    "ErrorDetail",
    "ErrorResponse",
    "FamilyMemberCreate",
    "FamilyMemberResponse",
    "FamilyMemberUpdate",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "MissingRefreshTokenResponse",
    "RegisterRequest",
    "UserSummary",
]
