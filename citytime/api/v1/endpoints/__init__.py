"""API v1 endpoints package."""

from . import conversion, health

__all__ = ["conversion", "health"]
