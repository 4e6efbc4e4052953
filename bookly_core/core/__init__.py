"""Core utilities shared across the booking engine."""

from .logging import LogFormat, get_logger, setup_logging

__all__ = [
    "LogFormat",
    "setup_logging",
    "get_logger",
]
