"""Conversion of a wall-clock time between the supported zones."""

import time
from typing import Optional, List, Dict, Iterable

from citytime.core.config import settings
from citytime.core.exceptions import ConfigurationError, InvalidInputError
from citytime.core.logging import get_logger
from citytime.models.conversion import CivilDateTime, CurrentTimeResponse, ZoneDescription
from citytime.services.formatter import CivilTimeFormatter, civil_time_formatter
from citytime.services.offset_resolver import (
    MS_PER_MINUTE,
    format_utc_offset,
    resolve_offset_minutes,
    utc_millis,
)

logger = get_logger(__name__)

RESOLUTION_STRATEGIES = ("anchor", "fixed_point")

# Display metadata for the zones the front end shows
ZONE_DETAILS: Dict[str, Dict[str, str]] = {
    "America/Santiago": {"name": "Chile", "location": "Santiago", "country": "CL"},
    "America/New_York": {"name": "United States", "location": "New York (Eastern Time)", "country": "US"},
    "America/Argentina/Buenos_Aires": {"name": "Argentina", "location": "Buenos Aires", "country": "AR"},
    "America/Bogota": {"name": "Colombia", "location": "Bogotá", "country": "CO"},
    "America/Santo_Domingo": {"name": "Dominican Republic", "location": "Santo Domingo", "country": "DO"},
}


def zone_details(zone: str) -> Dict[str, str]:
    """Display metadata for ``zone``, derived from its name when unknown."""
    if zone in ZONE_DETAILS:
        return ZONE_DETAILS[zone]
    location = zone.split("/")[-1].replace("_", " ")
    return {"name": location, "location": location, "country": ""}


class TimeConversionService:
    """Resolves a civil time in a source zone and projects it into other zones."""

    def __init__(
        self,
        formatter: Optional[CivilTimeFormatter] = None,
        supported_zones: Optional[Iterable[str]] = None,
        default_source_zone: Optional[str] = None,
        strategy: Optional[str] = None,
        max_iterations: Optional[int] = None,
    ):
        self.formatter = formatter or civil_time_formatter
        self.supported_zones: List[str] = list(supported_zones or settings.conversion.supported_zones)
        self.default_source_zone = default_source_zone or settings.conversion.default_source_zone
        self.strategy = strategy or settings.conversion.resolution_strategy
        self.max_iterations = max_iterations or settings.conversion.max_iterations

        if self.strategy not in RESOLUTION_STRATEGIES:
            raise ConfigurationError(
                f"Unknown resolution strategy: {self.strategy}",
                details={"allowed": list(RESOLUTION_STRATEGIES)},
            )

        self.logger = logger.bind(service="TimeConversionService", strategy=self.strategy)

    def _out_of_range(self, civil: CivilDateTime, zone: str, error: OverflowError) -> InvalidInputError:
        """Invalid input error for a civil time too close to the ends of the calendar."""
        self.logger.warning(
            "Civil time out of supported range",
            zone=zone,
            civil=f"{civil.date_string} {civil.time_string}",
            error=str(error),
        )
        return InvalidInputError(
            "Date out of supported range",
            details={"date": civil.date_string, "time": civil.time_string, "zone": zone},
        )

    def offset_at(self, instant: int, zone: str) -> int:
        """UTC offset of ``zone`` at ``instant`` in minutes."""
        return resolve_offset_minutes(instant, zone, self.formatter)

    def resolve_instant(self, civil: CivilDateTime, source_zone: str) -> int:
        """
        Epoch milliseconds denoted by ``civil`` on the wall clock of ``source_zone``.

        The anchor strategy samples the source offset once, at the civil fields
        read as UTC. That sample can land on the other side of a DST transition
        and be an hour off. The fixed point strategy re-samples the offset at
        each trial instant until it stops moving. A time inside a spring-forward
        gap never settles; the two alternating candidates straddle the
        transition and the later one (pre-transition offset) is returned.
        """
        try:
            return self._iterate_instant(civil, source_zone)
        except OverflowError as e:
            raise self._out_of_range(civil, source_zone, e) from e

    def _iterate_instant(self, civil: CivilDateTime, source_zone: str) -> int:
        anchor = utc_millis(civil.to_fields())
        instant = anchor - self.offset_at(anchor, source_zone) * MS_PER_MINUTE
        if self.strategy == "anchor":
            return instant

        seen = [instant]
        for _ in range(self.max_iterations):
            candidate = anchor - self.offset_at(instant, source_zone) * MS_PER_MINUTE
            if candidate == instant:
                return instant
            if candidate in seen:
                self.logger.debug(
                    "Civil time falls in a DST gap",
                    source_zone=source_zone,
                    civil=f"{civil.date_string} {civil.time_string}",
                )
                return max(instant, candidate)
            seen.append(candidate)
            instant = candidate

        self.logger.warning(
            "Offset iteration did not settle",
            source_zone=source_zone,
            civil=f"{civil.date_string} {civil.time_string}",
            iterations=self.max_iterations,
        )
        return instant

    def convert(self, civil: CivilDateTime, source_zone: str, target_zones: Iterable[str]) -> Dict[str, str]:
        """Local ``HH:MM`` in each target zone for ``civil`` observed in ``source_zone``."""
        instant = self.resolve_instant(civil, source_zone)
        try:
            result = {zone: self.formatter.format_time(instant, zone) for zone in target_zones}
        except OverflowError as e:
            raise self._out_of_range(civil, source_zone, e) from e

        self.logger.debug(
            "Converted civil time",
            source_zone=source_zone,
            date=civil.date_string,
            time=civil.time_string,
            instant=instant,
            targets=len(result),
        )
        return result

    def convert_all(self, date_str: str, time_str: str, source_zone: Optional[str] = None) -> Dict[str, str]:
        """Convert over every supported zone, the source included."""
        source_zone = source_zone or self.default_source_zone
        civil = CivilDateTime.parse(date_str, time_str)
        return self.convert(civil, source_zone, self.supported_zones)

    def convert_excluding_source(
        self,
        date_str: str,
        time_str: str,
        source_zone: Optional[str] = None
    ) -> Dict[str, str]:
        """Convert over the supported zones other than the source."""
        source_zone = source_zone or self.default_source_zone
        civil = CivilDateTime.parse(date_str, time_str)
        targets = [zone for zone in self.supported_zones if zone != source_zone]
        return self.convert(civil, source_zone, targets)

    def current(self, now: Optional[int] = None) -> CurrentTimeResponse:
        """Current time in the default source zone and its conversions.

        Args:
            now: Epoch milliseconds, the system clock when omitted
        """
        instant = now if now is not None else time.time_ns() // 1_000_000
        zone = self.default_source_zone
        date_str = self.formatter.format_date(instant, zone)
        time_str = self.formatter.format_time(instant, zone)

        return CurrentTimeResponse(
            date=date_str,
            time=time_str,
            timezone=zone,
            conversions=self.convert_all(date_str, time_str, zone),
        )

    def list_zones(self, date_str: Optional[str] = None, now: Optional[int] = None) -> List[ZoneDescription]:
        """Supported zones with their UTC offset at noon UTC of ``date_str``."""
        if date_str is None:
            instant = now if now is not None else time.time_ns() // 1_000_000
            date_str = self.formatter.format_date(instant, "UTC")
        noon = utc_millis(CivilDateTime.parse(date_str, "12:00").to_fields())

        zones = []
        for zone in self.supported_zones:
            try:
                offset = self.offset_at(noon, zone)
            except OverflowError as e:
                raise InvalidInputError(
                    "Date out of supported range",
                    details={"date": date_str, "zone": zone, "error": str(e)},
                ) from e
            zones.append(ZoneDescription(
                id=zone,
                offset_minutes=offset,
                utc_offset=format_utc_offset(offset),
                **zone_details(zone),
            ))
        return zones


# Global conversion service instance
time_conversion_service = TimeConversionService()


def get_conversion_service() -> TimeConversionService:
    """FastAPI dependency returning the shared conversion service."""
    return time_conversion_service
