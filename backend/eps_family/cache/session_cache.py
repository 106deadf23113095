"""
Revocable session records in Redis.

One entry per user at ``refresh:<user_id>`` holding the digest of the
currently valid refresh token.  Writing a new entry overwrites the old
one (last writer wins), so each user has at most one live refresh session.
"""

from __future__ import annotations

from redis.asyncio import Redis

from eps_family.core.constants import REFRESH_KEY_PREFIX


def session_key(user_id: str) -> str:
    return f"{REFRESH_KEY_PREFIX}{user_id}"


class SessionCache:
    """Thin wrapper over Redis GET/SET EX/DEL for refresh sessions."""

    def __init__(self, client: Redis):
        self.client = client

    async def store(self, user_id: str, token_hash: str, ttl_seconds: int) -> None:
        """Record *token_hash* as the user's only live session, replacing any prior one."""
        await self.client.set(session_key(user_id), token_hash, ex=ttl_seconds)

    async def get(self, user_id: str) -> str | None:
        value = await self.client.get(session_key(user_id))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def revoke(self, user_id: str) -> None:
        """Delete the user's session record. Missing keys are not an error."""
        await self.client.delete(session_key(user_id))
