"""
Structured logging using structlog.

Every event carries the application name and environment, plus whatever
request context the server binds (``request_id``). Production renders
JSON lines, development a colored console.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from adtags.common.config import Settings, get_settings


class AppContext:
    """Processor stamping ``app`` and ``env`` on every event."""

    def __init__(self, app_name: str, env: str):
        self.app_name = app_name
        self.env = env

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("app", self.app_name)
        event_dict.setdefault("env", self.env)
        return event_dict


def build_processors(settings: Settings) -> list[Processor]:
    """Processor chain for the configured log format."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        AppContext(settings.app_name, settings.env),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger used by uvicorn."""
    settings = settings or get_settings()
    level = logging.getLevelName(settings.logging.level)

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """
    Get a structured logger, bound to ``logger_name`` when given.

    Usage:
        logger = get_logger(__name__)
        logger.debug("Ad unit defined", unit_name="news_oop")
    """
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger_name=name)
    return logger


def log_context(**kwargs: Any) -> None:
    """Bind values (e.g. ``request_id``) to every later event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("adtags")
