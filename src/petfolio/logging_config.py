"""
Centralized logging configuration for petfolio.

Structured logging is provided by structlog. Development runs render
human-readable console lines, production runs emit one JSON object per event.
"""

import logging
import os
import sys
from typing import Any

import structlog

LEVEL_MAPPING = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_log_level() -> int:
    """
    Get log level from the LOG_LEVEL environment variable.

    Returns:
        int: Log level constant from logging module, INFO when unset or unknown
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    return LEVEL_MAPPING.get(level_name, logging.INFO)


def is_development_environment() -> bool:
    """Check if running in development environment."""
    return os.getenv("ENVIRONMENT", "development").lower() in ["development", "dev", "local", "test"]


def configure_structured_logging() -> None:
    """
    Configure structured logging for the whole package.

    Sets up the standard library root logger and the structlog processor
    chain. Safe to call more than once; the last call wins.
    """
    log_level = get_log_level()
    is_dev = is_development_environment()

    logging.basicConfig(
        level=log_level,
        format="%(message)s",  # structlog will handle formatting
        stream=sys.stderr,
    )

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger().setLevel(log_level)

    logger = structlog.get_logger("petfolio.logging")
    logger.info(
        "logging_configured",
        log_level=logging.getLevelName(log_level),
        environment="development" if is_dev else "production",
    )


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (optional, defaults to calling module)

    Returns:
        structlog.BoundLogger: Configured logger instance
    """
    if name is None:
        import inspect

        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "unknown")

    return structlog.get_logger(name)


def log_performance(operation: str, duration: float, **context: Any) -> None:
    """
    Log performance metrics.

    Args:
        operation: Name of the operation
        duration: Duration in seconds
        **context: Additional context information
    """
    logger = get_logger("petfolio.performance")
    logger.info("performance_metric", operation=operation, duration_seconds=duration, **context)


def log_user_action(action: str, **context: Any) -> None:
    """
    Log owner actions for the audit trail.

    Args:
        action: Action performed
        **context: Additional context information
    """
    logger = get_logger("petfolio.user_actions")
    logger.info("user_action", action=action, **context)


def log_error(error: Exception, context: dict[str, Any] | None = None) -> None:
    """
    Log errors with structured context.

    Args:
        error: Exception that occurred
        context: Additional context information
    """
    logger = get_logger("petfolio.errors")

    error_context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_context.update(context)

    logger.error("error_occurred", **error_context)


def log_security_event(event_type: str, **context: Any) -> None:
    """
    Log capability-related events such as rejected mutations.

    Args:
        event_type: Type of event
        **context: Additional context information
    """
    logger = get_logger("petfolio.security")
    logger.warning("security_event", event_type=event_type, **context)
