"""Per-provider database caching layer for geocoding results."""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from address_proximity.lib.geocoder.base import GeocodingResult
from address_proximity.models.geocoder_cache import GeocoderCache


async def cache_lookup(
    session: AsyncSession,
    provider: str,
    query_key: str,
) -> GeocodingResult | None:
    """Look up a cached geocoding result.

    Args:
        session: Database session.
        provider: Provider name.
        query_key: Normalized query (cache key).

    Returns:
        GeocodingResult if found, None on cache miss.
    """
    result = await session.execute(
        select(GeocoderCache).where(
            GeocoderCache.provider == provider,
            GeocoderCache.query_key == query_key,
        )
    )
    entry = result.scalar_one_or_none()
    if entry is None:
        return None

    return GeocodingResult(
        latitude=entry.latitude,
        longitude=entry.longitude,
        raw_response=entry.raw_response,
        matched_address=entry.matched_address,
    )


async def cache_store(
    session: AsyncSession,
    provider: str,
    query_key: str,
    result: GeocodingResult,
) -> None:
    """Store a geocoding result in the cache.

    Args:
        session: Database session.
        provider: Provider name.
        query_key: Normalized query (cache key).
        result: Geocoding result to cache.
    """
    entry = GeocoderCache(
        provider=provider,
        query_key=query_key,
        latitude=result.latitude,
        longitude=result.longitude,
        raw_response=result.raw_response,
        matched_address=result.matched_address,
        cached_at=datetime.now(UTC),
    )
    session.add(entry)
    await session.flush()
