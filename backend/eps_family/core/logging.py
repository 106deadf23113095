"""
Structured logging setup (structlog).

Usage:
    from eps_family.core.logging import get_logger, setup_logging

    setup_logging("INFO")   # call once at startup
    logger = get_logger(__name__)
    logger.info("User logged in", user_id=str(user.id))
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from eps_family.core.config import settings

_REDACTED_KEYS = ("password", "token", "secret", "authorization")


def _redact_secrets(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask values whose key looks like a credential."""
    for key in list(event_dict.keys()):
        if any(marker in key.lower() for marker in _REDACTED_KEYS):
            event_dict[key] = "***"
    return event_dict


def setup_logging(level: str = "INFO") -> None:
    """Configure structlog and the stdlib root logger."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _redact_secrets,
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.LOG_JSON:
        renderer_processors = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer_processors = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=shared_processors + renderer_processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)
