"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eps_family.api.error_handlers import register_exception_handlers
from eps_family.api.middleware import RequestLoggingMiddleware
from eps_family.api.v1 import auth, eps_providers, family_members, health
from eps_family.core.config import settings
from eps_family.core.logging import get_logger, setup_logging
from eps_family.core.redis import close_redis, get_redis
from eps_family.db.session import engine

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging("DEBUG" if settings.APP_ENV == "development" else "INFO")
    logger = get_logger("startup")
    logger.info("Application starting", env=settings.APP_ENV)
    get_redis()
    yield
    await close_redis()
    await engine.dispose()
    logger.info("Application shutting down")


def create_app() -> FastAPI:
    app = FastAPI(
        title="EPS Family API",
        description="Accounts, sessions and family members affiliated with EPS health insurers",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router, prefix=API_PREFIX)
    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(eps_providers.router, prefix=API_PREFIX)
    app.include_router(family_members.router, prefix=API_PREFIX)
    return app


app = create_app()
