"""Structlog configuration helpers."""

from __future__ import annotations

import logging as std_logging
import os
import sys

import structlog

LOG_LEVEL_ENV = "DOTSTYLE_LOG_LEVEL"

_LEVELS: dict[str, int] = {
    "debug": std_logging.DEBUG,
    "info": std_logging.INFO,
    "warning": std_logging.WARNING,
    "error": std_logging.ERROR,
}


def resolve_log_level(raw: str | None = None) -> int:
    """Map a level name to a stdlib level, defaulting to WARNING."""

    value = os.getenv(LOG_LEVEL_ENV) if raw is None else raw
    if value is None or not value.strip():
        return std_logging.WARNING
    return _LEVELS.get(value.strip().lower(), std_logging.WARNING)


def configure_logging(level: int | None = None) -> None:
    """Configure structlog for CLI runs."""

    resolved = resolve_log_level() if level is None else level
    # Diagnostics go to stderr so stdout only carries progress lines.
    handler = std_logging.StreamHandler(sys.stderr)
    handler.setFormatter(std_logging.Formatter("%(message)s"))
    std_logging.basicConfig(level=resolved, handlers=[handler])

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolved),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
