"""Structured logging configuration.

This module initializes structlog with a stable JSON format and tracks
the active level so lazy log producers can skip work when filtered out.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL, SUPPORTED_LOG_LEVELS

_LEVEL_NUMBERS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
_active_level: str | None = None


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog output and minimum level.

    Args:
        level: Minimum level name, one of the supported log levels.

    Raises:
        ValueError: If level is unknown.
    """
    global _active_level
    if level not in SUPPORTED_LOG_LEVELS:
        raise ValueError(f"Unsupported log level '{level}'.")
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LEVEL_NUMBERS[level]),
        cache_logger_on_first_use=False,
    )
    _active_level = level


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if _active_level is None:
        configure_logging()
    return structlog.get_logger(name)


def is_level_enabled(level: str) -> bool:
    """Return whether events at level pass the active filter."""
    active_level = _active_level or DEFAULT_LOG_LEVEL
    return _LEVEL_NUMBERS[level] >= _LEVEL_NUMBERS[active_level]
