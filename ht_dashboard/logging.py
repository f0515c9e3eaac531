"""
structlog setup for the dashboard API, sync engine and Celery worker.

Every event is one JSON line on stdout carrying ``service`` and
``environment``; sync events add ``run_id`` where a run is active.
"""

from __future__ import annotations

import logging

import structlog

from .config import settings

SERVICE_NAME = "hattrick-dashboard"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def resolve_log_level(level: str | None, environment: str) -> int:
    """LOG_LEVEL when set and known, else INFO in production and DEBUG elsewhere."""
    if level:
        return LOG_LEVELS.get(level.strip().upper(), logging.INFO)
    return logging.INFO if environment.lower() == "production" else logging.DEBUG


def configure_logging() -> None:
    level = resolve_log_level(settings.log_level, settings.environment)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.EventRenamer("message"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


configure_logging()

logger = structlog.get_logger(SERVICE_NAME).bind(
    service=SERVICE_NAME,
    environment=settings.environment,
)
