"""Abstract base geocoder interface for pluggable provider support."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

# A lookup query is either freeform text or a structured set of request parameters
GeocodeQuery = str | Mapping[str, Any]


@dataclass
class GeocodingResult:
    """Best match from a geocoding lookup.

    ``raw_response`` holds the provider's payload for the matched result
    (for Google, one entry of ``results``), including its classification
    ``types`` and ``address_components``.
    """

    latitude: float
    longitude: float
    raw_response: dict | None = None
    matched_address: str | None = None

    def __post_init__(self) -> None:
        if not (-90 <= self.latitude <= 90):
            msg = f"latitude must be between -90 and 90, got {self.latitude}"
            raise ValueError(msg)
        if not (-180 <= self.longitude <= 180):
            msg = f"longitude must be between -180 and 180, got {self.longitude}"
            raise ValueError(msg)

    @property
    def result_type(self) -> str | None:
        """Primary classification tag of the match (e.g. ``locality``)."""
        types = (self.raw_response or {}).get("types") or []
        if isinstance(types, list) and types:
            return types[0]
        return None


class GeocodingProviderError(Exception):
    """Raised when a geocoding provider experiences a transport or service error.

    Distinguishes provider failures (timeout, HTTP error, connection error)
    from a successful response with no match (which returns None).

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


class BaseGeocoder(ABC):
    """Abstract geocoder interface. All providers must implement this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this geocoder provider."""

    @property
    def requires_api_key(self) -> bool:
        """Whether this provider requires an API key to function."""
        return False

    @property
    def is_configured(self) -> bool:
        """Whether this provider has all required configuration (e.g., API keys)."""
        return True

    @abstractmethod
    async def geocode(self, query: GeocodeQuery) -> GeocodingResult | None:
        """Geocode a freeform address or a structured query.

        Args:
            query: Address text, or a mapping of provider request parameters.

        Returns:
            GeocodingResult for the best match, or None if nothing matched.
        """
