"""Structured logging via structlog.

Internal diagnostics (skips, failures, store reads and writes) go through
`structlog.get_logger()`. They are separate from the build log: the lines a
user sees in their build output are written to a BuildListener.

Renderer selection:
  debug=True:  `ConsoleRenderer` for local development.
  debug=False: `JSONRenderer` for machine-parseable logs.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from artifact_post.core.config import get_settings


def configure_structlog(debug: Optional[bool] = None) -> None:
    """Configure structlog for the process lifetime.

    The host calls this once at startup. Calling it again replaces the
    previous configuration. When debug is None it comes from Settings.
    """
    if debug is None:
        debug = get_settings().debug

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # Bridge stdlib logging so httpx and LoggerListener output lands in the
    # same stream.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=logging.DEBUG if debug else logging.INFO,
    )
