"""Structured logging configuration.

The injector only emits events through structlog; applications that want
them rendered call :func:`setup_logging` once at startup.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import Processor

from lazywire.config import InjectorSettings, get_settings

__all__ = ["setup_logging", "get_logger"]


def setup_logging(settings: Optional[InjectorSettings] = None) -> structlog.stdlib.BoundLogger:
    """Configure structlog on top of the standard library root logger."""
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level.upper())

    return structlog.get_logger("lazywire")


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance with optional name binding.

    The logger stays lazy, so it follows later calls to :func:`setup_logging`.
    """
    if name:
        return structlog.get_logger("lazywire", component=name)
    return structlog.get_logger("lazywire")
