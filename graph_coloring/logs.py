from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    # look up sys.stderr per logger so redirected streams are honored
    return structlog.PrintLogger(file=sys.stderr)


def configure_logging(level: str = "info") -> None:
    """Route structlog output to stderr, dropping events below `level`."""
    try:
        threshold = _LEVELS[level.lower()]
    except KeyError as e:
        raise ValueError(f"Unknown log level {level!r}. Choose one of: {', '.join(_LEVELS)}") from e

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
