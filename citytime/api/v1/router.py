"""Main API router for version 1."""

from fastapi import APIRouter

from .endpoints import conversion, health

# Create main API router
api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, tags=["health"])
api_router.include_router(conversion.router, tags=["conversion"])
