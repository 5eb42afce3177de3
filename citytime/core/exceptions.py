"""Custom exceptions for the City Time Converter."""

from typing import Optional, Dict, Any


class CityTimeException(Exception):
    """Base exception for the City Time Converter."""

    default_error_code: Optional[str] = None

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputError(CityTimeException):
    """A civil date or time could not be parsed."""

    default_error_code = "INVALID_INPUT"


class ConfigurationError(CityTimeException):
    """Configuration-related errors."""

    default_error_code = "CONFIGURATION_ERROR"
