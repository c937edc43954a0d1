"""Structured logging configuration using structlog.

The library only emits debug events and never configures logging on import.
Applications opt in with :func:`configure_logging`.
"""

import logging
import sys
from typing import List, Optional, cast

import structlog
from structlog.types import Processor

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "console"


def configure_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to INFO.
        log_format: Output format ("console" or "json"). Defaults to console.

    Examples:
        >>> configure_logging(level="DEBUG", log_format="json")
    """
    level = level or DEFAULT_LEVEL
    log_format = log_format or DEFAULT_FORMAT

    shared_processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors: List[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    # Loggers are created at import time, so they must pick up reconfiguration.
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
        force=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger backed by the stdlib logger of the same name.

    Events go through the stdlib logger, so they stay silent until the host
    application enables its level or calls :func:`configure_logging`.

    Args:
        name: Logger name, usually the calling module's ``__name__``

    Returns:
        A bound structlog logger instance.
    """
    return cast(
        structlog.stdlib.BoundLogger,
        structlog.wrap_logger(
            logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
        ),
    )


__all__ = [
    'configure_logging',
    'get_logger',
]
