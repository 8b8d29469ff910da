"""Google Maps Geocoding API provider.

Uses the Google Maps Geocoding API
(https://developers.google.com/maps/documentation/geocoding/)
for address-to-coordinate resolution. Requires an API key.
"""

from collections.abc import Mapping

import httpx
from loguru import logger

from address_proximity.lib.geocoder.base import (
    BaseGeocoder,
    GeocodeQuery,
    GeocodingProviderError,
    GeocodingResult,
)

GOOGLE_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_TIMEOUT = 10.0


def _param_value(value: object) -> str:
    if isinstance(value, Mapping):
        return "|".join(f"{k}:{v}" for k, v in value.items() if v is not None)
    return str(value)


class GoogleMapsGeocoder(BaseGeocoder):
    """Google Maps geocoder provider."""

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        region: str = "us",
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._region = region

    @property
    def provider_name(self) -> str:
        return "google"

    @property
    def requires_api_key(self) -> bool:
        return True

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _build_params(self, query: GeocodeQuery) -> dict[str, str]:
        """Translate a lookup query into request parameters.

        Structured queries are passed through as API parameters
        (``address``, ``components``, ``bounds``, ``language``, ...). A mapping
        value such as ``{"country": "US"}`` is sent as ``country:US``, with
        multiple pairs joined by ``|``.
        """
        params = {"region": self._region}
        if isinstance(query, Mapping):
            params.update({str(k): _param_value(v) for k, v in query.items() if v is not None})
        else:
            params["address"] = query
        params["key"] = self._api_key
        return params

    async def geocode(self, query: GeocodeQuery) -> GeocodingResult | None:
        """Geocode an address using the Google Maps API.

        Args:
            query: Address text or structured request parameters.

        Returns:
            GeocodingResult or None if no match found.

        Raises:
            GeocodingProviderError: On transport, service, or API-specific errors.
        """
        params = self._build_params(query)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(GOOGLE_API_URL, params=params)
                response.raise_for_status()

            data = response.json()
            return self._parse_response(data)

        except httpx.TimeoutException as e:
            logger.warning("Google Maps geocoder timeout for query (redacted)")
            raise GeocodingProviderError("google", "Geocoding request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"Google Maps geocoder HTTP error {e.response.status_code}")
            raise GeocodingProviderError(
                "google",
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.ConnectError as e:
            logger.warning("Google Maps geocoder connection error")
            raise GeocodingProviderError("google", "Connection to geocoding provider failed") from e
        except GeocodingProviderError:
            raise
        except Exception as e:
            logger.exception("Google Maps geocoder unexpected error")
            raise GeocodingProviderError("google", f"Unexpected error: {e}") from e

    def _parse_response(self, data: dict) -> GeocodingResult | None:
        """Parse Google Maps API response into a GeocodingResult.

        Args:
            data: Raw JSON response from Google Maps API.

        Returns:
            GeocodingResult or None if no match found.

        Raises:
            GeocodingProviderError: On API-specific error statuses.
        """
        api_status = data.get("status", "UNKNOWN")

        if api_status == "ZERO_RESULTS":
            return None

        if api_status in ("REQUEST_DENIED", "OVER_QUERY_LIMIT", "INVALID_REQUEST"):
            msg = data.get("error_message", api_status)
            raise GeocodingProviderError("google", f"API error: {msg}")

        if api_status != "OK":
            raise GeocodingProviderError("google", f"Unexpected API status: {api_status}")

        results = data.get("results", [])
        if not results:
            return None

        best = results[0]
        try:
            location = best["geometry"]["location"]
            lat = float(location["lat"])
            lng = float(location["lng"])
        except (KeyError, ValueError, TypeError) as e:
            logger.warning(f"Failed to parse Google Maps response: {e}")
            raise GeocodingProviderError("google", f"Failed to parse response: {e}") from e

        return GeocodingResult(
            latitude=lat,
            longitude=lng,
            raw_response=best,
            matched_address=best.get("formatted_address"),
        )
