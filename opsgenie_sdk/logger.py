"""Logging configuration for applications using the SDK.

The SDK itself only emits structlog events and never configures logging.
Applications may call ``setup_logging`` once at startup.

Supports two logging formats:
- JSON logging (production): Structured logs for log aggregation systems
- Console logging (development): Human-readable logs with stacktraces
"""

import logging
import sys

import structlog

from opsgenie_sdk.config import ClientSettings


def setup_logging(log_level: str = "INFO", *, json_format: bool = True) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Logging level name (e.g. "DEBUG")
        json_format: Render JSON lines instead of console output
    """
    level = logging.getLevelNamesMapping()[log_level.upper()]
    renderers: list[structlog.typing.Processor] = (
        [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        if json_format
        else [structlog.dev.ConsoleRenderer()]
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            *renderers,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stdout),
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(level=level, stream=sys.stdout, format="%(message)s")
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def setup_logging_from_settings(settings: ClientSettings) -> None:
    setup_logging(settings.log_level, json_format=settings.log_format_json)
