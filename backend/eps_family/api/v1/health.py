"""Liveness of the database and Redis."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from eps_family.api.schemas.health import HealthResponse
from eps_family.core.redis import get_redis
from eps_family.db.session import async_session, ping_database
from eps_family.services.health_service import HealthService

router = APIRouter(prefix="/health", tags=["Health"])


async def _probe_database() -> None:
    async with async_session() as session:
        await ping_database(session)


async def _probe_redis() -> bool:
    return await get_redis().ping()


def get_health_service() -> HealthService:
    return HealthService(database_probe=_probe_database, redis_probe=_probe_redis)


@router.get("", response_model=HealthResponse)
async def health_check(health_service: HealthService = Depends(get_health_service)) -> JSONResponse:
    """200 when every dependency is reachable, 503 otherwise."""
    health = await health_service.check()
    status_code = status.HTTP_200_OK if health["status"] == "ok" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=status_code, content=health)
