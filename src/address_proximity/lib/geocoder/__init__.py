"""Geocoder library — address lookup with caching.

Public API:
    - BaseGeocoder: Abstract provider interface
    - GeocodingResult: Best-match result dataclass
    - GeocodingProviderError: Provider transport/service failure
    - GoogleMapsGeocoder: Google Maps provider
    - AddressComponents / restructure_components: Subfields from a raw result
    - normalize_lookup_query: Cache key for a lookup query
    - cache_lookup / cache_store: Database caching functions
    - get_geocoder: Provider factory/registry
"""

from typing import Any

from address_proximity.lib.geocoder.base import (
    BaseGeocoder,
    GeocodeQuery,
    GeocodingProviderError,
    GeocodingResult,
)
from address_proximity.lib.geocoder.cache import cache_lookup, cache_store
from address_proximity.lib.geocoder.components import (
    AddressComponents,
    normalize_lookup_query,
    restructure_components,
)
from address_proximity.lib.geocoder.google_maps import GoogleMapsGeocoder

# Provider registry
_PROVIDERS: dict[str, type[BaseGeocoder]] = {
    "google": GoogleMapsGeocoder,
}


def get_geocoder(provider: str = "google", **kwargs: Any) -> BaseGeocoder:
    """Get a geocoder instance by provider name.

    Args:
        provider: Provider name (e.g., "google").
        **kwargs: Additional arguments forwarded to the provider constructor
            (e.g., ``api_key="..."``).

    Returns:
        An instance of the requested geocoder provider.

    Raises:
        ValueError: If the provider is not registered.
    """
    cls = _PROVIDERS.get(provider)
    if cls is None:
        msg = f"Unknown geocoder provider: {provider!r}. Available: {list(_PROVIDERS.keys())}"
        raise ValueError(msg)
    return cls(**kwargs)


__all__ = [
    "AddressComponents",
    "BaseGeocoder",
    "GeocodeQuery",
    "GeocodingProviderError",
    "GeocodingResult",
    "GoogleMapsGeocoder",
    "cache_lookup",
    "cache_store",
    "get_geocoder",
    "normalize_lookup_query",
    "restructure_components",
]
