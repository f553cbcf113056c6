"""structlog setup for the server's own events.

Three kinds of line reach stderr:

- ``dirserve.access``: one INFO line per request, shown with ``-v``.
- startup and resolution events from the rest of ``dirserve``: INFO and
  DEBUG, shown with ``-v``.
- warnings and the fatal bind error: always shown.

``--log-json`` switches every line to one JSON object per line.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

APP_LOGGER = "dirserve"
ACCESS_LOGGER = "dirserve.access"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _levels(verbose: bool) -> dict[str, int]:
    if not verbose:
        return {APP_LOGGER: logging.WARNING, ACCESS_LOGGER: logging.WARNING}
    return {APP_LOGGER: logging.DEBUG, ACCESS_LOGGER: logging.INFO}


def _renderer(log_json: bool, stream: TextIO) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route structlog and stdlib records through one handler on *stream*.

    Safe to call repeatedly; the previous handler is replaced.

    Args:
        verbose: Show access lines and startup events.
        log_json: JSON lines instead of the console renderer.
        stream: Destination, stderr by default.

    Returns:
        The installed handler.
    """
    stream = stream or sys.stderr

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, stream),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    for name, level in _levels(verbose).items():
        logging.getLogger(name).setLevel(level)
    return handler
