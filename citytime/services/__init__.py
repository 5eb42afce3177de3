"""Service layer for the City Time Converter."""

from .formatter import CivilTimeFormatter, PytzCivilTimeFormatter
from .offset_resolver import resolve_offset_minutes, utc_millis, format_utc_offset
from .converter import TimeConversionService, get_conversion_service

__all__ = [
    "CivilTimeFormatter",
    "PytzCivilTimeFormatter",
    "resolve_offset_minutes",
    "utc_millis",
    "format_utc_offset",
    "TimeConversionService",
    "get_conversion_service",
]
