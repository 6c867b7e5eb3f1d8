"""Structured logging configuration using structlog.

Loggers from :func:`get_logger` hand their rendered events to the standard
library logger of the same name. Until an application configures logging,
the standard library defaults apply and debug events are discarded.
"""

import logging
import sys

import structlog


def setup_logging(*, json_logs: bool = False, log_level: str = "INFO") -> None:
    """Configure structlog with console or JSON output on stderr.

    Args:
        json_logs: If True, output JSON logs. Otherwise, the dev console renderer.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    level = getattr(logging, log_level.upper())
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        renderers: list[structlog.types.Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=[*shared_processors, *renderers],
        context_class=dict,
    )

    # Rendered events leave through standard library logging, on stderr
    logging.basicConfig(format="%(message)s", stream=sys.stderr)
    logging.getLogger().setLevel(level)


def get_logger(name: str | None = None):
    """Get a logger instance.

    Args:
        name: Optional logger name (typically __name__).
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
