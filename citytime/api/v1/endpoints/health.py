"""Health check endpoints for monitoring."""

from datetime import datetime, timezone
from typing import Dict, Any
from fastapi import APIRouter, Depends, HTTPException

from citytime.core.config import settings
from citytime.core.logging import get_logger
from citytime.services.converter import TimeConversionService, get_conversion_service

router = APIRouter()
logger = get_logger(__name__)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", tags=["health"])
async def health_check(
    service: TimeConversionService = Depends(get_conversion_service),
) -> Dict[str, Any]:
    """
    Health check including a probe of the timezone rules.

    Every supported zone must report an offset for the current instant.

    Returns:
        Dict containing health status, zone count and timestamp

    Raises:
        HTTPException: If a supported zone cannot be resolved
    """
    try:
        zones = service.list_zones()
    except Exception as e:
        logger.error("Timezone probe failed", error=str(e))
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "timestamp": _timestamp(),
                "error": str(e),
            }
        )

    return {
        "status": "healthy",
        "timestamp": _timestamp(),
        "version": settings.app_version,
        "environment": settings.environment,
        "zones": len(zones),
        "resolution_strategy": service.strategy,
    }


@router.get("/health/live", tags=["health"])
async def liveness_check() -> Dict[str, Any]:
    """
    Liveness probe endpoint.

    Returns:
        Dict containing liveness status
    """
    return {
        "status": "alive",
        "timestamp": _timestamp(),
    }
