"""Structured logging setup for applications emitting outcomes.

Uses structlog on top of stdlib logging, so outcome lines logged through
either a ``logging.Logger`` or a structlog logger end up in the same
handlers with the same rendering.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from outcome_log.core.config import LoggingSettings


def _add_component(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: tag entries with the emitting logger's name."""
    name = getattr(logger, "name", None)
    if name:
        event_dict.setdefault("component", name)
    return event_dict


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    capture_warnings: bool = False,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for production, "console" for development.
        capture_warnings: Route ``warnings.warn`` through logging.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        _add_component,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )
    logging.captureWarnings(capture_warnings)


def configure_from_settings(settings: LoggingSettings) -> None:
    """Apply :class:`LoggingSettings` via :func:`setup_logging`."""
    setup_logging(
        level=settings.log_level,
        format=settings.log_format,
        capture_warnings=settings.capture_warnings,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module.

    The result can be passed anywhere an ``actor_or_logger`` is accepted.
    """
    return structlog.get_logger(name)
