"""Pytest configuration and shared fixtures for the City Time Converter."""

import os

# Settings are read at import time; keep the limiter out of the way of the suite
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Generator
from fastapi.testclient import TestClient
from httpx import AsyncClient, ASGITransport

from citytime.main import app
from citytime.services.converter import TimeConversionService, get_conversion_service
from citytime.services.formatter import PytzCivilTimeFormatter

ALL_ZONES = [
    "America/Santiago",
    "America/New_York",
    "America/Argentina/Buenos_Aires",
    "America/Bogota",
    "America/Santo_Domingo",
]


@pytest.fixture
def formatter() -> PytzCivilTimeFormatter:
    """Create the pytz-backed formatter."""
    return PytzCivilTimeFormatter()


@pytest.fixture
def conversion_service(formatter) -> TimeConversionService:
    """Conversion service using fixed point resolution."""
    return TimeConversionService(
        formatter=formatter,
        supported_zones=ALL_ZONES,
        default_source_zone="America/Santiago",
        strategy="fixed_point",
        max_iterations=4,
    )


@pytest.fixture
def anchor_service(formatter) -> TimeConversionService:
    """Conversion service using the single anchor lookup."""
    return TimeConversionService(
        formatter=formatter,
        supported_zones=ALL_ZONES,
        default_source_zone="America/Santiago",
        strategy="anchor",
    )


@pytest.fixture
def client(conversion_service) -> Generator[TestClient, None, None]:
    """Synchronous test client bound to a known conversion service."""
    app.dependency_overrides[get_conversion_service] = lambda: conversion_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(conversion_service) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for the FastAPI application."""
    app.dependency_overrides[get_conversion_service] = lambda: conversion_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_conversion_params():
    """Chilean summer afternoon, the reference scenario."""
    return {
        "date": "2025-01-15",
        "time": "14:30",
        "source": "America/Santiago",
    }
