"""Shared test fixtures for settings, the async database, and geocoding stubs."""

import math
from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from address_proximity.core.config import Settings
from address_proximity.lib.geocoder.base import GeocodingResult
from address_proximity.models.base import Base


def _nullable(fn: Any) -> Any:
    """Wrap a math function so NULL arguments yield NULL, as in SQL."""

    def wrapper(value: float | None) -> float | None:
        if value is None:
            return None
        return fn(value)

    return wrapper


def _register_math_functions(dbapi_connection: Any, connection_record: Any) -> None:
    """Provide the trigonometric SQL functions SQLite lacks by default."""
    dbapi_connection.create_function("radians", 1, _nullable(math.radians))
    dbapi_connection.create_function("cos", 1, _nullable(math.cos))
    dbapi_connection.create_function("sin", 1, _nullable(math.sin))
    dbapi_connection.create_function("acos", 1, _nullable(math.acos))


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        database_url="sqlite+aiosqlite:///:memory:",
        geocoder_google_api_key="test-key",
    )


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine with math functions registered."""
    engine = create_async_engine(settings.database_url, echo=False)
    event.listen(engine.sync_engine, "connect", _register_math_functions)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


def make_google_result(
    lat: float,
    lng: float,
    *,
    types: list[str] | None = None,
    components: list[dict[str, Any]] | None = None,
    formatted: str | None = None,
) -> GeocodingResult:
    """Build a GeocodingResult shaped like a Google Maps ``results`` entry."""
    raw: dict[str, Any] = {
        "geometry": {"location": {"lat": lat, "lng": lng}},
        "types": types or [],
        "address_components": components or [],
    }
    if formatted:
        raw["formatted_address"] = formatted
    return GeocodingResult(latitude=lat, longitude=lng, raw_response=raw, matched_address=formatted)


@pytest.fixture
def make_result() -> Any:
    """Factory for Google-shaped geocoding results."""
    return make_google_result

@pytest.fixture
def cook_county_result() -> GeocodingResult:
    """Geocoder match for the text "Cook County"."""
    return make_google_result(
        41.7377,
        -87.6976,
        types=["administrative_area_level_2", "political"],
        components=[
            {"long_name": "Cook County", "short_name": "Cook County", "types": ["administrative_area_level_2"]},
            {"long_name": "Illinois", "short_name": "IL", "types": ["administrative_area_level_1"]},
            {"long_name": "United States", "short_name": "US", "types": ["country", "political"]},
        ],
        formatted="Cook County, IL, USA",
    )


@pytest.fixture
def lookup() -> AsyncMock:
    """Geocoding lookup stub that finds nothing unless configured."""
    stub = AsyncMock()
    stub.lookup = AsyncMock(return_value=None)
    return stub
