"""Structured logging for cmdflow.

Logging goes through structlog on top of the standard library so that
third-party loggers end up in the same stream. Two renderers exist:

- console (default): coloured key/value lines on stderr
- json: one JSON object per line, selected with ``CMDFLOW_LOG_FORMAT=json``

Usage:
    from cmdflow.logging import configure_logging, get_logger

    configure_logging()
    log = get_logger(__name__).bind(file_path="git-push.yaml")
    log.debug("workflow_parsed", arguments=2)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "LOG_FORMAT_ENV_VAR",
    "LOG_LEVEL_ENV_VAR",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
]

LOG_FORMAT_ENV_VAR = "CMDFLOW_LOG_FORMAT"
LOG_LEVEL_ENV_VAR = "CMDFLOW_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def _json_requested() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").strip().lower() == "json"


def _pre_chain() -> list[Processor]:
    """Processors applied to both structlog and stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _render_chain(use_json: bool) -> list[Processor]:
    """Exception handling and rendering for the chosen output format."""
    if use_json:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Configure structlog and the root stdlib logger.

    Safe to call more than once; each call replaces the previous handler.

    Args:
        force_json: Emit JSON lines regardless of ``CMDFLOW_LOG_FORMAT``.
        level: Explicit log level. Falls back to ``CMDFLOW_LOG_LEVEL``.
    """
    use_json = force_json or _json_requested()
    log_level = level if level is not None else _level_from_env()

    structlog.configure(
        processors=[
            *_pre_chain(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(use_json),
            ],
            foreign_pre_chain=_pre_chain(),
        )
    )

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, optionally named after a module."""
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


def bind_context(**context: Any) -> None:
    """Attach key/value pairs to every log line in the current context."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Drop all values previously attached with :func:`bind_context`."""
    structlog.contextvars.clear_contextvars()
