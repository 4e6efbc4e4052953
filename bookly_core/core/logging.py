"""
Standardized Logging Configuration

Structured logging on structlog over the standard library. JSON output for
production, a console renderer for development.
"""

import logging
import sys
from enum import Enum
from typing import Optional, Union

import structlog


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    PRETTY = "pretty"


_handler: Optional[logging.Handler] = None


def setup_logging(
    level: Union[str, int] = "INFO",
    format: Union[str, LogFormat] = LogFormat.PRETTY,
) -> None:
    """
    Configure structlog and the root stdlib logger.

    Args:
        level: Log level name or number
        format: ``json`` or ``pretty``
    """
    global _handler

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    log_format = LogFormat(format)

    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == LogFormat.JSON
        else structlog.dev.ConsoleRenderer()
    )

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
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdout carries command output only
    root = logging.getLogger()
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(_handler)
    else:
        _handler.setStream(sys.stderr)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger."""
    return structlog.get_logger(name)


__all__ = [
    "LogFormat",
    "setup_logging",
    "get_logger",
]
