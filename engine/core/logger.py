"""Centralized logging configuration using structlog.

This module provides consistent, structured logging across the engine with:
- JSON output for machine consumption (LOG_FORMAT=json)
- Colored console output for local use (default)
- Plugin-style gated debug output via debug_log()

Usage:
    from core import get_logger
    logger = get_logger(__name__)
    logger.info("habits.loaded", path="habits.json", habits=3)
"""

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

DEFAULT_PLUGIN_NAME = "Habit Tracker 21"
DEBUG_LOGGER_NAME = "debug"

bind_contextvars = structlog.contextvars.bind_contextvars
clear_contextvars = structlog.contextvars.clear_contextvars


def _get_log_level() -> int:
    """Get log level from environment, defaulting to INFO."""
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _is_json_format() -> bool:
    """Determine if JSON output is enabled."""
    return os.environ.get("LOG_FORMAT", "").lower() == "json"


def configure_logging(
    level: int | str | None = None, json_format: bool | None = None
) -> None:
    """Configure structlog and stdlib logging. Call once at startup.

    This sets up:
    1. structlog processors for structured logging
    2. stdlib logging to use structlog's ProcessorFormatter

    Explicit arguments win over the LOG_LEVEL / LOG_FORMAT environment.
    """
    if level is None:
        log_level = _get_log_level()
    elif isinstance(level, str):
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        log_level = level
    use_json = _is_json_format() if json_format is None else json_format

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if use_json:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True, exception_formatter=structlog.dev.plain_traceback
        )

    structlog.configure(
        processors=shared_processors
        + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # debug_log output is gated by DEBUG_LEVEL only, not LOG_LEVEL
    logging.getLogger(DEBUG_LOGGER_NAME).setLevel(logging.DEBUG)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        A structlog BoundLogger that supports structured key-value logging.

    Example:
        logger = get_logger(__name__)
        logger.info("streak.computed", habit="reading", longest=12)
    """
    return structlog.stdlib.get_logger(name)


def debug_log(
    message: Any,
    current_level: int | str | None,
    required_level: int | str | None = None,
    plugin_name: str = DEFAULT_PLUGIN_NAME,
) -> bool:
    """Emit a plugin-tagged debug message when debugging is switched on.

    Nothing is logged when ``current_level`` is falsy, or when a
    ``required_level`` is given and differs from ``current_level``.
    The configured log level does not filter these messages.

    Returns:
        True if the message was emitted.
    """
    if not current_level:
        return False

    if required_level and required_level != current_level:
        return False

    get_logger(DEBUG_LOGGER_NAME).info(
        "debug",
        plugin=f"[{plugin_name}]",
        message=message,
        debug_level=current_level,
    )
    return True
