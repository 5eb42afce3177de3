"""Time conversion endpoints."""

from typing import Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from citytime.core.logging import get_logger
from citytime.models.conversion import CurrentTimeResponse, ErrorResponse, ZoneDescription
from citytime.services.converter import TimeConversionService, get_conversion_service

router = APIRouter()
logger = get_logger(__name__)

MISSING_PARAMETERS = "Missing date or time query parameters"
ERROR_RESPONSES = {400: {"model": ErrorResponse, "description": "Invalid or missing input"}}


def _require_date_and_time(date: Optional[str], time: Optional[str]) -> None:
    if not date or not time:
        raise HTTPException(status_code=400, detail=MISSING_PARAMETERS)


@router.get("/convert", response_model=Dict[str, str], responses=ERROR_RESPONSES)
async def convert(
    date: Optional[str] = Query(None, description="Local date in the source zone (YYYY-MM-DD)"),
    time: Optional[str] = Query(None, description="Local time in the source zone (HH:MM)"),
    source: Optional[str] = Query(None, description="Source IANA zone"),
    service: TimeConversionService = Depends(get_conversion_service),
) -> Dict[str, str]:
    """
    Convert a time to every supported zone except the source.

    Kept for clients of the earlier single-source converter.

    Raises:
        HTTPException: If date or time is missing
    """
    _require_date_and_time(date, time)
    return service.convert_excluding_source(date, time, source)


@router.get("/convert-multi", response_model=Dict[str, str], responses=ERROR_RESPONSES)
async def convert_multi(
    date: Optional[str] = Query(None, description="Local date in the source zone (YYYY-MM-DD)"),
    time: Optional[str] = Query(None, description="Local time in the source zone (HH:MM)"),
    source: Optional[str] = Query(None, description="Source IANA zone"),
    service: TimeConversionService = Depends(get_conversion_service),
) -> Dict[str, str]:
    """Convert a time to every supported zone, the source included."""
    _require_date_and_time(date, time)
    return service.convert_all(date, time, source)


@router.get("/current", response_model=CurrentTimeResponse)
async def current_time(
    service: TimeConversionService = Depends(get_conversion_service),
) -> CurrentTimeResponse:
    """Current time in the default zone, converted to every supported zone."""
    return service.current()


@router.get("/zones", response_model=List[ZoneDescription], responses=ERROR_RESPONSES)
async def list_zones(
    date: Optional[str] = Query(None, description="Date the offsets are computed for (YYYY-MM-DD), today if omitted"),
    service: TimeConversionService = Depends(get_conversion_service),
) -> List[ZoneDescription]:
    """Supported zones with display names and UTC offsets."""
    return service.list_zones(date)
