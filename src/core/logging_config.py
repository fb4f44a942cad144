"""Structured logging configuration.

This module initializes structlog with a stable processor chain.
Console rendering is the default; JSON output suits CI log collectors.
"""

from __future__ import annotations

from typing import Any

import structlog

from core.constants import DEFAULT_LOG_FORMAT, SUPPORTED_LOG_FORMATS
from core.errors import SuiteBuildConfigError


def configure_logging(log_format: str = DEFAULT_LOG_FORMAT) -> None:
    """Configure the global structlog processor chain.

    Args:
        log_format: Either ``console`` or ``json``.

    Raises:
        SuiteBuildConfigError: If the format is not supported.
    """
    if log_format not in SUPPORTED_LOG_FORMATS:
        raise SuiteBuildConfigError(
            f"Unsupported log format '{log_format}'. "
            f"Use one of: {', '.join(SUPPORTED_LOG_FORMATS)}."
        )
    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger that accepts keyword event fields.
    """
    return structlog.get_logger(name)
