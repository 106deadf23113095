"""Dependency health probes for the database and Redis."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from eps_family.core.logging import get_logger

logger = get_logger(__name__)

CONNECTED = "connected"
DISCONNECTED = "disconnected"


class HealthService:
    """
    Runs one probe per backing store.

    Each probe is an awaitable that raises when the store is unreachable
    (the Redis probe may also return False).  Failures are logged and
    reported as ``disconnected``; they never propagate.
    """

    def __init__(
        self,
        database_probe: Callable[[], Awaitable[Any]],
        redis_probe: Callable[[], Awaitable[Any]],
    ):
        self.database_probe = database_probe
        self.redis_probe = redis_probe

    async def check(self) -> dict[str, str]:
        database = await self._run("database", self.database_probe)
        redis = await self._run("redis", self.redis_probe)
        status = "ok" if database == CONNECTED and redis == CONNECTED else "degraded"
        return {
            "status": status,
            "database": database,
            "redis": redis,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    async def _run(self, name: str, probe: Callable[[], Awaitable[Any]]) -> str:
        try:
            result = await probe()
        except Exception as exc:
            logger.error("Health check failed", dependency=name, error=str(exc))
            return DISCONNECTED
        if result is False:
            logger.error("Health check failed", dependency=name, error="probe returned false")
            return DISCONNECTED
        return CONNECTED
