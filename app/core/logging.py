"""Logging setup for the application process."""

import logging
import sys

import structlog

from app.core.config import settings

# Applied to stdlib records before rendering
SHARED_PROCESSORS: list = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def build_formatter(fmt: str) -> logging.Formatter:
    """JSON formatter backed by structlog, or a plain text line formatter."""
    if fmt == "json":
        return structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
        )
    return logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")


def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure the root logger from settings.

    Safe to call more than once; existing handlers are replaced.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(fmt or settings.LOG_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel((level or settings.LOG_LEVEL).upper())

    # Request lines from the venue client are noise at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
