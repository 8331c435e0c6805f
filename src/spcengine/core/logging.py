"""Structured logging configuration using structlog.

The engine modules only call ``structlog.get_logger(__name__)``; nothing is
configured on import. Applications (the CLI, examples) call
configure_logging() once at startup. Output format follows
SPCENGINE_LOG_FORMAT:
  - "console" (default): colored, human-readable output
  - "json": one JSON object per line
"""

import logging
import sys
from typing import TextIO

import structlog


def _renderer(log_format: str, stream: TextIO) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    log_format: str = "console",
    log_level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog events through stdlib logging to a single handler.

    Args:
        log_format: "console" or "json". Unknown values fall back to console.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        stream: Where to write, stderr by default so stdout stays free
            for command output.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format, stream),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
