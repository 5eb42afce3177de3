"""Civil-time formatting backed by the pytz timezone database."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
import pytz

from citytime.models.conversion import CivilFields

EPOCH = datetime(1970, 1, 1, tzinfo=pytz.utc)


def instant_to_datetime(instant: int) -> datetime:
    """Aware UTC datetime for an instant in epoch milliseconds."""
    return EPOCH + timedelta(milliseconds=instant)


class CivilTimeFormatter(ABC):
    """Reads the wall clock of a zone at a given instant.

    This is the only place that knows about a timezone database; the offset
    resolver and the converter work purely in terms of these two calls.
    """

    @abstractmethod
    def civil_fields(self, instant: int, zone: str) -> CivilFields:
        """Calendar and 24-hour clock fields observed in ``zone`` at ``instant``."""

    def format_time(self, instant: int, zone: str) -> str:
        """Local ``HH:MM`` in ``zone`` at ``instant``."""
        fields = self.civil_fields(instant, zone)
        return f"{fields.hour:02d}:{fields.minute:02d}"

    def format_date(self, instant: int, zone: str) -> str:
        """Local ``YYYY-MM-DD`` in ``zone`` at ``instant``."""
        fields = self.civil_fields(instant, zone)
        return f"{fields.year:04d}-{fields.month:02d}-{fields.day:02d}"


class PytzCivilTimeFormatter(CivilTimeFormatter):
    """Formatter using pytz zone rules.

    Unknown zone names raise ``pytz.UnknownTimeZoneError``.
    """

    def civil_fields(self, instant: int, zone: str) -> CivilFields:
        local = instant_to_datetime(instant).astimezone(pytz.timezone(zone))
        return CivilFields(local.year, local.month, local.day, local.hour, local.minute, local.second)


# Default formatter instance
civil_time_formatter = PytzCivilTimeFormatter()
