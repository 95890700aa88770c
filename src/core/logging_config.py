"""Structured logging configuration.

This module initializes structlog with a stable JSON event format.
Every module logs snake_case events with keyword fields.
"""

from __future__ import annotations

from typing import Any

import structlog


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        # resolve stdout per call so redirected streams are honored
        cache_logger_on_first_use=False,
    )
    return structlog.get_logger(name)
