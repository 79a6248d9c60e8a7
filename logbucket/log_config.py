"""Opt-in log output for logbucket's own diagnostics (structlog over stdlib)."""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

import structlog

_HANDLER_NAME = "logbucket"


def setup_logging(
    level: str | None = None,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Send ``logbucket.*`` events to *stream* (default: stderr).

    Only the ``logbucket`` stdlib logger is touched; the host's root logger is
    left alone, and an existing structlog configuration is kept. Calling it
    again replaces the handler installed by the previous call.

    Arguments win over environment variables:
        LOGBUCKET_LOG_LEVEL  — log level (default: INFO)
        LOGBUCKET_LOG_FORMAT — console | json (default: console)
    """
    level = (level or os.environ.get("LOGBUCKET_LOG_LEVEL", "INFO")).upper()
    fmt = (fmt or os.environ.get("LOGBUCKET_LOG_FORMAT", "console")).lower()

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if not structlog.is_configured():
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                *pre_chain,
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    if fmt == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=pre_chain,
        )
    )

    package_logger = logging.getLogger("logbucket")
    for old in [h for h in package_logger.handlers if h.get_name() == _HANDLER_NAME]:
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return handler
