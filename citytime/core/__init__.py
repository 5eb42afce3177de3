"""Core application modules."""

from .config import settings
from .exceptions import CityTimeException, InvalidInputError, ConfigurationError
from .logging import configure_logging, get_logger

__all__ = [
    "settings",
    "CityTimeException",
    "InvalidInputError",
    "ConfigurationError",
    "configure_logging",
    "get_logger",
]
