"""Structured logging configuration.

This module initializes a logger with a stable structured format.
Events are rendered as JSON lines on stderr so stdout stays clean for CSV.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL


_configured = False


def configure_logging(level_name: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog processors and level filtering.

    Safe to call again; the CLI does so once the runtime log level is known.

    Args:
        level_name: Lowercase level name such as ``info`` or ``warning``.
    """
    global _configured
    level = logging.getLevelName(level_name.upper())
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    _configured = True


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    """Build a print logger bound to whatever stderr currently is."""
    return structlog.PrintLogger(file=sys.stderr)
