"""Pydantic models for the City Time Converter."""

from .conversion import CivilDateTime, CivilFields, CurrentTimeResponse, ZoneDescription, ErrorResponse

__all__ = ["CivilDateTime", "CivilFields", "CurrentTimeResponse", "ZoneDescription", "ErrorResponse"]
