"""
Seed development accounts.
Run: python -m scripts.seed_users  (from backend/)
"""

import asyncio

from eps_family.core.logging import get_logger, setup_logging
from eps_family.core.security import hash_password
from eps_family.db.session import async_session, engine
from eps_family.repositories.users import create_user, get_user_by_email

logger = get_logger("seed.users")

SEED_USERS = [
    {
        "email": "admin@epsfamily.dev",
        "password": "admin12345",  # Change in production!
        "full_name": "System Admin",
    },
    {
        "email": "demo@epsfamily.dev",
        "password": "demo12345",
        "full_name": "Demo User",
    },
]


async def seed() -> None:
    """Insert seed users that do not exist yet."""
    async with async_session() as session:
        for data in SEED_USERS:
            if await get_user_by_email(session, data["email"]) is not None:
                logger.info("User already exists, skipping", email=data["email"])
                continue
            user = await create_user(
                session,
                email=data["email"],
                password_hash=hash_password(data["password"]),
                full_name=data["full_name"],
            )
            logger.info("Created user", user_id=str(user.id))
        await session.commit()
    await engine.dispose()


if __name__ == "__main__":
    setup_logging("INFO")
    asyncio.run(seed())
