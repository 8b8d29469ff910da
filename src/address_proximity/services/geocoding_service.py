"""Geocoding service — cached single-match lookups for search targets."""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from address_proximity.core.config import Settings
from address_proximity.lib.geocoder import (
    BaseGeocoder,
    GeocodeQuery,
    GeocodingProviderError,
    GeocodingResult,
    cache_lookup,
    cache_store,
    get_geocoder,
    normalize_lookup_query,
)


class CachedGeocodingLookup:
    """Geocoding lookup backed by the geocoder_cache table.

    Each lookup performs at most one provider call. Provider failures are
    logged and reported as "no match" so that a search degrades instead of
    failing.
    """

    def __init__(
        self,
        geocoder: BaseGeocoder,
        session: AsyncSession | None = None,
        *,
        cache_enabled: bool = True,
    ) -> None:
        self._geocoder = geocoder
        self._session = session
        self._cache_enabled = cache_enabled and session is not None

    @classmethod
    def from_settings(cls, settings: Settings, session: AsyncSession | None = None) -> "CachedGeocodingLookup":
        """Build a Google Maps backed lookup from application settings."""
        geocoder = get_geocoder(
            "google",
            api_key=settings.geocoder_google_api_key or "",
            timeout=settings.geocoder_google_timeout,
            region=settings.geocoder_google_region,
        )
        return cls(geocoder, session, cache_enabled=settings.geocoder_cache_enabled)

    async def lookup(self, query: GeocodeQuery) -> GeocodingResult | None:
        """Geocode a query, serving repeated queries from the cache.

        Args:
            query: Address text or structured request parameters.

        Returns:
            Best match, or None when nothing matched or the provider failed.
        """
        query_key = normalize_lookup_query(query)
        if not query_key:
            return None

        provider = self._geocoder.provider_name

        if self._cache_enabled:
            cached = await cache_lookup(self._session, provider, query_key)
            if cached is not None:
                logger.debug(f"Geocoder cache hit ({provider})")
                return cached

        if not self._geocoder.is_configured:
            logger.warning(f"Geocoder {provider!r} is not configured, skipping lookup")
            return None

        try:
            result = await self._geocoder.geocode(query)
        except GeocodingProviderError as e:
            logger.warning(f"Geocoding lookup failed: {e}")
            return None

        if result is not None and self._cache_enabled:
            await cache_store(self._session, provider, query_key, result)

        return result
