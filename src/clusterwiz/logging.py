"""Structured logging configuration for clusterwiz.

Logging is built on structlog and bridged into the standard library so that
third-party loggers share the same renderer:

- Pretty console output by default
- JSON output when ``CLUSTERWIZ_LOG_FORMAT=json``
- Level taken from ``CLUSTERWIZ_LOG_LEVEL`` (default ``INFO``)

Usage:
    from clusterwiz.logging import configure_logging, get_logger

    configure_logging()

    log = get_logger(__name__).bind(project="demo-project")
    log.info("clusters_listed", count=3)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bind_context",
    "clear_context",
]

LOG_FORMAT_ENV_VAR = "CLUSTERWIZ_LOG_FORMAT"
LOG_LEVEL_ENV_VAR = "CLUSTERWIZ_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, name, logging.INFO)


def _json_requested() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _shared_processors() -> list[Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(use_json: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Configure structlog and the root stdlib logger.

    Safe to call more than once; each call replaces the root handlers.

    Args:
        force_json: Render JSON regardless of ``CLUSTERWIZ_LOG_FORMAT``.
        level: Explicit log level. Read from ``CLUSTERWIZ_LOG_LEVEL`` if None.
    """
    use_json = force_json or _json_requested()
    log_level = level if level is not None else _level_from_env()

    exc_processor: Processor = (
        structlog.processors.dict_tracebacks
        if use_json
        else structlog.processors.format_exc_info
    )

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Logs go to stderr so command output on stdout stays machine-readable
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                exc_processor,
                _renderer(use_json),
            ],
            foreign_pre_chain=_shared_processors(),
        )
    )
    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name, normally ``__name__``.

    Returns:
        A bound structlog logger.
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


def bind_context(**context: Any) -> None:
    """Bind values into every subsequent log event on this task.

    Uses structlog contextvars, so the binding follows the current asyncio
    task rather than the thread.

    Example:
        bind_context(project="demo-project")
        log.info("clusters_listed")  # includes project
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Clear all values bound with :func:`bind_context`."""
    structlog.contextvars.clear_contextvars()
