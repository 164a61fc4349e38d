"""Structured logging setup."""

import logging
import sys

import structlog

from src.core.config import settings


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        level: Log level name, defaults to settings.log_level
        log_format: "json" for machine-readable output, anything else
            renders for the console. Defaults to settings.log_format
    """
    level = (level or settings.log_level).upper()
    log_format = log_format or settings.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
