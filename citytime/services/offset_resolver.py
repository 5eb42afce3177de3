"""UTC offset lookup through a civil-time formatter."""

from datetime import datetime, timedelta
from typing import Optional
import pytz

from citytime.models.conversion import CivilFields
from citytime.services.formatter import CivilTimeFormatter, EPOCH, civil_time_formatter

MS_PER_MINUTE = 60 * 1000


def utc_millis(fields: CivilFields) -> int:
    """Instant obtained by reading ``fields`` as if they were UTC."""
    as_utc = datetime(
        fields.year, fields.month, fields.day,
        fields.hour, fields.minute, fields.second,
        tzinfo=pytz.utc,
    )
    return (as_utc - EPOCH) // timedelta(milliseconds=1)


def resolve_offset_minutes(
    instant: int,
    zone: str,
    formatter: Optional[CivilTimeFormatter] = None,
) -> int:
    """
    UTC offset of ``zone`` at ``instant``, in minutes.

    The zone's wall clock at ``instant`` is read back as if it were UTC; the
    difference to ``instant`` is the offset in effect, DST included.
    Zones west of UTC are negative.

    Args:
        instant: Epoch milliseconds
        zone: IANA zone identifier
        formatter: Civil-time formatter, pytz-backed by default

    Returns:
        Offset in minutes
    """
    formatter = formatter or civil_time_formatter
    fields = formatter.civil_fields(instant, zone)
    # Sub-second part of the instant is not in the fields
    truncated = instant - instant % 1000
    return (utc_millis(fields) - truncated) // MS_PER_MINUTE


def format_utc_offset(offset_minutes: int) -> str:
    """Render an offset as ``UTC+HH:MM`` / ``UTC-HH:MM``."""
    sign = "-" if offset_minutes < 0 else "+"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"UTC{sign}{hours:02d}:{minutes:02d}"
