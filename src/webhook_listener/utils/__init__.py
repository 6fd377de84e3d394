"""Utility modules."""

from .logging import get_logger, is_logger_like, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "is_logger_like",
]
