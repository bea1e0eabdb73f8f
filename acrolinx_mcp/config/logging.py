"""Structured logging setup writing one key/value line per event to stderr.

Stdout carries the stdio tool protocol, so every log line goes to the
diagnostic stream instead.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def config_configure_logging(debug: bool = False, stream: TextIO | None = None) -> None:
    """Configure process-wide structlog rendering.

    Args:
        debug: Emit debug-level events when enabled.
        stream: Optional output stream override, stderr by default.

    Returns:
        None: Configures structlog as a side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    minimum_level = logging.DEBUG if debug else logging.INFO
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(
                key_order=["timestamp", "level", "event"],
                drop_missing=True,
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(minimum_level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
