"""Authentication endpoints: register, login, refresh and logout."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from eps_family.api.deps import get_auth_service, get_current_user
from eps_family.api.schemas.auth import (
    AccessTokenResponse,
    LoginRequest,
    MissingRefreshTokenResponse,
    RegisterRequest,
    UserSummary,
)
from eps_family.api.schemas.common import MessageResponse
from eps_family.core.config import settings
from eps_family.db.models.user import User
from eps_family.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


def _set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=settings.REFRESH_TOKEN_TTL_SECONDS,
        path=settings.REFRESH_COOKIE_PATH,
        secure=settings.is_production,
        httponly=True,
        samesite="strict",
    )


def _clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        path=settings.REFRESH_COOKIE_PATH,
        secure=settings.is_production,
        httponly=True,
        samesite="strict",
    )


@router.post("/register", response_model=UserSummary, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> UserSummary:
    """Create a new account."""
    user = await auth_service.register(
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
    )
    return UserSummary.model_validate(user)


@router.post("/login", response_model=AccessTokenResponse)
async def login(
    payload: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
) -> AccessTokenResponse:
    """Authenticate, return an access token and set the refresh-token cookie."""
    tokens = await auth_service.login(email=payload.email, password=payload.password)
    _set_refresh_cookie(response, tokens.refresh_token)
    return AccessTokenResponse(access_token=tokens.access_token)


@router.post(
    "/refresh",
    response_model=AccessTokenResponse | MissingRefreshTokenResponse,
)
async def refresh(
    request: Request,
    auth_service: AuthService = Depends(get_auth_service),
) -> AccessTokenResponse | MissingRefreshTokenResponse:
    """
    Issue a new access token from the refresh-token cookie.

    A missing cookie answers 200 with a ``statusCode: 401`` body, unlike
    every other failure here; existing clients depend on that shape.
    """
    refresh_token = request.cookies.get(settings.REFRESH_COOKIE_NAME)
    if not refresh_token:
        return MissingRefreshTokenResponse()

    access_token = await auth_service.refresh(refresh_token)
    return AccessTokenResponse(access_token=access_token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Revoke the caller's refresh session and clear the cookie."""
    await auth_service.logout(str(current_user.id))
    _clear_refresh_cookie(response)
    return MessageResponse(message="Logged out successfully")
