"""Conversion-related models."""

import calendar
import re
from typing import Optional, Dict, List, NamedTuple
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from citytime.core.exceptions import InvalidInputError

_NUMERIC = re.compile(r"[0-9]+")


class CivilFields(NamedTuple):
    """Calendar and clock fields as read off a wall clock in some zone."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int = 0


def _split_numeric(value: Optional[str], separator: str, count: int, label: str) -> List[int]:
    """Split ``value`` into exactly ``count`` unsigned integer components."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"Missing {label}", details={label: value})

    parts = value.strip().split(separator)
    if len(parts) != count:
        raise InvalidInputError(
            f"Invalid {label} format: expected {count} components separated by '{separator}'",
            details={label: value},
        )

    for part in parts:
        if not _NUMERIC.fullmatch(part):
            raise InvalidInputError(
                f"Invalid {label} format: '{part}' is not a number",
                details={label: value},
            )
    return [int(part) for part in parts]


class CivilDateTime(BaseModel):
    """A calendar date and clock time with no zone attached."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(ge=1, le=9999, description="Calendar year")
    month: int = Field(ge=1, le=12, description="Month of year")
    day: int = Field(ge=1, le=31, description="Day of month")
    hour: int = Field(ge=0, le=23, description="Hour of day, 24-hour clock")
    minute: int = Field(ge=0, le=59, description="Minute of hour")

    @model_validator(mode="after")
    def validate_calendar_day(self):
        """Reject days the month does not have, e.g. February 30th."""
        days_in_month = calendar.monthrange(self.year, self.month)[1]
        if self.day > days_in_month:
            raise ValueError(f"Day {self.day} is out of range for {self.year:04d}-{self.month:02d}")
        return self

    @classmethod
    def parse(cls, date_str: Optional[str], time_str: Optional[str]) -> "CivilDateTime":
        """Build from ``YYYY-MM-DD`` and ``HH:MM`` strings.

        Raises:
            InvalidInputError: if a component is missing, non-numeric or out of range.
        """
        year, month, day = _split_numeric(date_str, "-", 3, "date")
        hour, minute = _split_numeric(time_str, ":", 2, "time")

        try:
            return cls(year=year, month=month, day=day, hour=hour, minute=minute)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(loc) for loc in err['loc']) or 'value'}: {err['msg']}"
                for err in e.errors()
            ]
            raise InvalidInputError(
                "Invalid date or time format",
                details={"date": date_str, "time": time_str, "errors": errors},
            ) from e

    def to_fields(self) -> CivilFields:
        """Fields for instant arithmetic, with seconds at zero."""
        return CivilFields(self.year, self.month, self.day, self.hour, self.minute, 0)

    @property
    def date_string(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    @property
    def time_string(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class CurrentTimeResponse(BaseModel):
    """Current time in the default zone and its conversions."""

    date: str = Field(description="Local date in the source zone (YYYY-MM-DD)")
    time: str = Field(description="Local time in the source zone (HH:MM)")
    timezone: str = Field(description="Source zone identifier")
    conversions: Dict[str, str] = Field(description="Zone identifier to local HH:MM")


class ZoneDescription(BaseModel):
    """A supported zone with display metadata."""

    id: str = Field(description="IANA zone identifier")
    name: str = Field(description="Country name")
    location: str = Field(description="City or region")
    country: str = Field(description="ISO 3166 country code")
    offset_minutes: int = Field(description="UTC offset in minutes on the requested date")
    utc_offset: str = Field(description="UTC offset label, e.g. UTC-03:00")


class ErrorResponse(BaseModel):
    """Error payload returned by the API."""

    error: str
    error_code: Optional[str] = None
    details: Dict = Field(default_factory=dict)
