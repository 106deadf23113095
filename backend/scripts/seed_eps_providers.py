"""
Seed the EPS provider catalogue. Idempotent: providers are upserted by code.
Run: python -m scripts.seed_eps_providers  (from backend/)
"""

import asyncio

from eps_family.core.logging import get_logger, setup_logging
from eps_family.db.session import async_session, engine
from eps_family.repositories.eps_providers import upsert_provider

logger = get_logger("seed.eps_providers")

EPS_PROVIDERS = [
    {"name": "Salud Total EPS - Virrey Solis", "code": "EPS002", "parser_key": "salud_total"},
    {"name": "Nueva EPS", "code": "EPS037", "parser_key": "nueva_eps"},
    {"name": "EPS Sanitas", "code": "EPS005", "parser_key": "sanitas"},
    {"name": "EPS Sura", "code": "EPS010", "parser_key": "sura"},
    {"name": "Compensar EPS", "code": "EPS008", "parser_key": "compensar"},
    {"name": "Famisanar EPS", "code": "EPS017", "parser_key": "famisanar"},
    {"name": "Coosalud EPS", "code": "EPS019", "parser_key": "coosalud"},
    {"name": "Mutual Ser EPS", "code": "ESS024", "parser_key": "mutual_ser"},
    {"name": "Aliansalud EPS", "code": "EPS001", "parser_key": "aliansalud"},
    {"name": "Capital Salud EPS", "code": "EPS039", "parser_key": "capital_salud"},
]


async def seed() -> None:
    """Upsert every provider in one transaction."""
    async with async_session() as session:
        for data in EPS_PROVIDERS:
            await upsert_provider(session, **data)
        await session.commit()
    await engine.dispose()
    logger.info("EPS providers seeded", count=len(EPS_PROVIDERS))


if __name__ == "__main__":
    setup_logging("INFO")
    asyncio.run(seed())
