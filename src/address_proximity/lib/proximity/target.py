"""Target resolution — turns a search target into origin coordinates."""

from dataclasses import dataclass
from typing import Protocol

from loguru import logger

from address_proximity.lib.geocoder.base import GeocodeQuery, GeocodingResult
from address_proximity.lib.proximity.options import (
    CoordinateTarget,
    DefaultTarget,
    Target,
    TextTarget,
)


class GeocodingLookup(Protocol):
    """Resolves a query to its best match, at most one provider call per lookup."""

    async def lookup(self, query: GeocodeQuery) -> GeocodingResult | None: ...


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class DefaultLocation:
    """Where searches start when their target cannot be resolved."""

    coordinates: Coordinates = Coordinates(0.0, 0.0)


@dataclass(frozen=True)
class ResolvedTarget:
    """Origin of a search, plus the geocoder match it came from (if any)."""

    coordinates: Coordinates
    match: GeocodingResult | None = None
    is_default: bool = False


class TargetResolver:
    """Resolves targets, geocoding text and structured queries through a lookup."""

    def __init__(self, lookup: GeocodingLookup, default_location: DefaultLocation | None = None) -> None:
        self._lookup = lookup
        self._default = default_location or DefaultLocation()

    def _default_target(self) -> ResolvedTarget:
        return ResolvedTarget(self._default.coordinates, is_default=True)

    async def resolve(self, target: Target) -> ResolvedTarget:
        """Resolve a target to coordinates.

        Coordinate targets are returned unchanged without a lookup. Text and
        structured targets are geocoded; anything unresolvable yields the
        default location instead of an error.
        """
        if isinstance(target, CoordinateTarget):
            return ResolvedTarget(Coordinates(target.lat, target.lng))

        if isinstance(target, DefaultTarget):
            logger.debug("Unsupported target type, using default location")
            return self._default_target()

        query: GeocodeQuery = target.text if isinstance(target, TextTarget) else target.query
        match = await self._lookup.lookup(query)
        if match is None:
            logger.info("Target could not be geocoded, using default location")
            return self._default_target()

        return ResolvedTarget(Coordinates(match.latitude, match.longitude), match=match)

