"""Structured logging for fundcore: structlog events rendered through the stdlib ``fundcore`` logger."""

from __future__ import annotations

import logging
import os

import structlog

LOGGER_NAME = "fundcore"
LOG_FORMATS = ("console", "json")


def setup_logging(log_level: str = "INFO", log_format: str | None = None) -> None:
    """Send fundcore's structlog events to stderr.

    `log_format` is "console" (human-readable, default) or "json"; when it is
    omitted the LOG_FORMAT environment variable decides. Only the ``fundcore``
    logger tree gets a handler, so a host's root logging is left alone.
    """
    fmt = (log_format or os.environ.get("LOG_FORMAT", "console")).lower()
    if fmt not in LOG_FORMATS:
        raise ValueError(f"unknown log format {fmt!r}, expected one of {LOG_FORMATS}")
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {log_level!r}")

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if fmt == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structlog logger for `name`, placed under the ``fundcore`` tree."""
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return structlog.get_logger(name)
