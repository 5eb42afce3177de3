"""Structured logging configuration."""

import logging
import sys
from typing import Optional, Any
import structlog
from structlog.stdlib import LoggerFactory

from citytime.core.config import settings


def add_app_info(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Stamp every event with the application version and environment."""
    event_dict.setdefault("app_version", settings.app_version)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def configure_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    json_logs: Optional[bool] = None,
) -> None:
    """Configure stdlib logging and structlog for the service.

    Console rendering is used outside production unless ``json_logs`` is
    given explicitly.
    """
    log_level = (log_level or settings.logging.level).upper()
    log_file = log_file or settings.logging.file_path
    if json_logs is None:
        json_logs = settings.environment == "production"

    handler_kwargs = {"filename": log_file, "filemode": "a"} if log_file else {"stream": sys.stdout}
    logging.basicConfig(
        level=getattr(logging, log_level),
        format=settings.logging.format,
        force=True,
        **handler_kwargs,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_app_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, **initial_values: Any) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, optionally bound to initial context."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger
