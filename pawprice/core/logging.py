"""Logging configuration module."""

from logging import (
    CRITICAL,
    DEBUG,
    ERROR,
    INFO,
    WARNING,
    Handler,
    Logger,
    StreamHandler,
    getLogger,
)
from typing import cast

import structlog
from structlog import contextvars, dev, stdlib
from structlog.processors import JSONRenderer, TimeStamper, dict_tracebacks
from structlog.stdlib import BoundLogger

# Define log levels
LOG_LEVELS: dict[str, int] = {
    "debug": DEBUG,
    "info": INFO,
    "warning": WARNING,
    "error": ERROR,
    "critical": CRITICAL,
}

QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    level: str = "info", json_logs: bool = True, testing: bool = False
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level name (case-insensitive)
        json_logs: Render JSON lines instead of console output
        testing: Whether the application is running in test mode
    """
    log_level = LOG_LEVELS.get(level.lower(), INFO)
    render_json = json_logs and not testing

    root_logger: Logger = getLogger()
    root_logger.setLevel(log_level)

    app_logger: Logger = getLogger("pawprice")
    app_logger.setLevel(log_level)

    handler: Handler = StreamHandler()
    handler.setLevel(log_level)

    shared_processors = [
        contextvars.merge_contextvars,
        stdlib.add_logger_name,
        stdlib.add_log_level,
        stdlib.PositionalArgumentsFormatter(),
        TimeStamper(fmt="%Y-%m-%d %H:%M:%S.%f"),
        dict_tracebacks,
    ]

    structlog.configure(
        processors=[
            stdlib.filter_by_level,
            *shared_processors,
            stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=stdlib.LoggerFactory(),
        wrapper_class=stdlib.BoundLogger,
        cache_logger_on_first_use=not testing,
    )

    formatter = stdlib.ProcessorFormatter(
        processors=[
            stdlib.ProcessorFormatter.remove_processors_meta,
            JSONRenderer() if render_json else dev.ConsoleRenderer(colors=False),
        ],
        foreign_pre_chain=shared_processors,
    )
    handler.setFormatter(formatter)

    # Clear existing handlers to prevent duplicates
    root_logger.handlers = []
    app_logger.handlers = []
    app_logger.propagate = False

    root_logger.addHandler(handler)
    app_logger.addHandler(handler)

    # Request lines carry credentials in query strings
    for name in QUIET_LOGGERS:
        getLogger(name).setLevel(max(log_level, WARNING))


def get_logger(name: str | None = None) -> BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional logger name, usually the calling module's ``__name__``

    Returns:
        A structured logger instance.
    """
    return cast(BoundLogger, structlog.get_logger(name))


def mask_secret(value: str | None) -> str:
    """Render a credential for logs without revealing it."""
    if not value:
        return "<unset>"
    return f"{value[:2]}***"
