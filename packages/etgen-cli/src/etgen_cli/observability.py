"""Structured logging setup for the etgen command.

Log events go to stderr so that command output on stdout stays clean.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    json_format: bool = False,
) -> None:
    """Configure structlog for a CLI run.

    Args:
        verbose: If True, emit DEBUG events; otherwise WARNING and above.
        json_format: If True, render JSON lines instead of console output.

    Example:
        >>> configure_logging(verbose=True)
    """
    level = logging.DEBUG if verbose else logging.WARNING

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if verbose:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
