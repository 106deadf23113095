"""
Async Redis client shared by the session cache and the health check.

The client is created lazily and closed from the application lifespan.
"""

from __future__ import annotations

from redis.asyncio import Redis

from eps_family.core.config import settings
from eps_family.core.logging import get_logger

logger = get_logger(__name__)

_client: Redis | None = None


def get_redis() -> Redis:
    """Return the process-wide Redis client, creating it on first use."""
    global _client
    if _client is None:
        _client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
        logger.info("Redis client created", host=settings.REDIS_HOST, port=settings.REDIS_PORT)
    return _client


async def close_redis() -> None:
    """Close the Redis client if one was created."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
        logger.info("Redis disconnected")
