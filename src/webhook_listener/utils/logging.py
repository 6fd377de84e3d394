"""
Logging utilities for the webhook listener.

Provides structured logging configuration and the checks applied to
host-supplied loggers.
"""

import logging
import sys
from typing import Any

import structlog

LOGGER_METHODS = ("info", "debug", "error", "warn")
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """
    Set up structured logging for the listener.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: ``json`` for one JSON object per line, ``console``
                    for human-readable terminal output

    Raises:
        ValueError: If the level or format is unknown
    """
    level = log_level.upper()
    if level not in VALID_LEVELS:
        raise ValueError(f"Invalid log level: {log_level}. Must be one of {list(VALID_LEVELS)}")

    if log_format.lower() == "json":
        renderer = structlog.processors.JSONRenderer()
    elif log_format.lower() == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        raise ValueError(f"Invalid log format: {log_format}")

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, level))

    # Per-request access lines from aiohttp; the handler logs what matters
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def is_logger_like(candidate: Any) -> bool:
    """Whether ``candidate`` exposes callable info/debug/error/warn methods."""
    return all(callable(getattr(candidate, name, None)) for name in LOGGER_METHODS)
