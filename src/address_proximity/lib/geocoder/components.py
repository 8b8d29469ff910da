"""Address component restructuring and lookup query normalization.

Converts a geocoder's raw ``address_components`` list into the flat set of
address subfields stored on each address record, and normalizes lookup
queries into stable cache keys.
"""

import json
import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from address_proximity.lib.geocoder.base import GeocodeQuery

# Google component type → subfield, first listed type wins
_CITY_TYPES = ("locality", "postal_town", "sublocality_level_1", "sublocality")
_NAME_TYPES = ("premise", "point_of_interest", "establishment")


@dataclass
class AddressComponents:
    """Flat address subfields synthesized from a geocoder result."""

    name: str | None = None
    street1: str | None = None
    street2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    neighborhood: str | None = None
    county: str | None = None
    country: str | None = None
    country_code: str | None = None
    place_id: str | None = None
    formatted: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        """Return components as a plain dict."""
        return asdict(self)


def _index_components(components: list) -> tuple[dict[str, str], dict[str, str]]:
    """Map each component type to its long and short names (first occurrence wins)."""
    long_names: dict[str, str] = {}
    short_names: dict[str, str] = {}
    for component in components:
        if not isinstance(component, Mapping):
            continue
        for component_type in component.get("types") or []:
            if component_type in long_names:
                continue
            long_names[component_type] = component.get("long_name") or ""
            short_names[component_type] = component.get("short_name") or ""
    return long_names, short_names


def _first(names: dict[str, str], types: tuple[str, ...]) -> str | None:
    for component_type in types:
        if names.get(component_type):
            return names[component_type]
    return None


def restructure_components(raw: Mapping[str, Any] | None) -> AddressComponents:
    """Restructure a raw geocoder result into address subfields.

    Args:
        raw: One geocoder result (e.g. a Google ``results`` entry).

    Returns:
        AddressComponents with every subfield that could be derived; missing
        parts are None.
    """
    if not raw:
        return AddressComponents()

    components = raw.get("address_components") or []
    if not isinstance(components, list):
        components = []
    long_names, short_names = _index_components(components)

    street_number = long_names.get("street_number")
    route = long_names.get("route")
    street1 = " ".join(part for part in (street_number, route) if part) or None

    # A premise or place name is only meaningful when it differs from the street line
    name = _first(long_names, _NAME_TYPES)
    if name and name == street1:
        name = None

    return AddressComponents(
        name=name,
        street1=street1,
        street2=long_names.get("subpremise") or None,
        city=_first(long_names, _CITY_TYPES),
        state=long_names.get("administrative_area_level_1") or None,
        zip=long_names.get("postal_code") or None,
        neighborhood=long_names.get("neighborhood") or None,
        county=long_names.get("administrative_area_level_2") or None,
        country=long_names.get("country") or None,
        country_code=short_names.get("country") or None,
        place_id=raw.get("place_id"),
        formatted=raw.get("formatted_address"),
    )


def normalize_lookup_query(query: GeocodeQuery) -> str:
    """Normalize a lookup query into a cache key.

    Text is trimmed, whitespace-collapsed and upper-cased. Structured
    queries become canonical JSON (sorted keys, normalized string values).

    Args:
        query: Address text or structured request parameters.

    Returns:
        Normalized key string; empty string for blank text.
    """
    if isinstance(query, Mapping):
        normalized = {
            str(key): re.sub(r"\s+", " ", value.strip()).upper() if isinstance(value, str) else value
            for key, value in query.items()
            if value is not None
        }
        return json.dumps(normalized, sort_keys=True, default=str)

    return re.sub(r"\s+", " ", query.strip()).upper()
