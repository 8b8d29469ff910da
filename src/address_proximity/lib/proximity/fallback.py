"""Subfield filter fallback.

When a search asks for ``subfields="fallback"``, the subfield filter is
derived from the geocoded target instead of being supplied by the caller.
A broad target such as "Cook County" geocodes to the county's center, so a
plain radius search would miss most of the county and catch its
neighbours; filtering on the matching subfield keeps the result set on the
intended area. Precise targets (street addresses, routes, localities) are
left alone, since a radius around them is already accurate.
"""

from loguru import logger

from address_proximity.lib.geocoder.base import GeocodingResult
from address_proximity.lib.geocoder.components import restructure_components
from address_proximity.lib.proximity.options import FilterTarget, Target, TextTarget

# Narrowly focused result types, exempt from the fallback filter
FOCUSED_TYPES: tuple[str, ...] = (
    "premise",  # "123 Main Street"
    "route",  # "Western Blvd"
    "intersection",  # "Western Blvd and 22nd Street"
    "locality",  # "Los Angeles"
    "neighborhood",  # "Venice, California"
)

# Checked in order; the first subfield equal to the target wins alone
FALLBACK_PRIORITY: tuple[str, ...] = ("city", "state", "zip", "county", "country")


def _simplify(value: str) -> str:
    return value.strip().casefold()


def _target_text(target: Target) -> str:
    if isinstance(target, TextTarget):
        return target.text
    if isinstance(target, FilterTarget):
        return target.address
    return ""


def derive_fallback_filter(target: Target, match: GeocodingResult | None) -> dict[str, str] | None:
    """Derive a subfield filter from a geocoded target.

    Args:
        target: The search target that was geocoded.
        match: The geocoder's best match for it.

    Returns:
        Subfield filter to apply, or None when the match is precise enough
        (or too sparse) to need one.
    """
    if match is None:
        return None

    raw = match.raw_response or {}
    components = restructure_components(raw)

    # A street address is precise, trust the coordinates
    if components.street1:
        return None

    if not raw.get("address_components"):
        return None

    result_type = match.result_type
    if result_type in FOCUSED_TYPES:
        logger.debug(f"Fallback skipped for focused result type {result_type!r}")
        return None

    values = {subfield: getattr(components, subfield) for subfield in FALLBACK_PRIORITY}
    wanted = _simplify(_target_text(target))

    for subfield in FALLBACK_PRIORITY:
        value = values[subfield]
        if value is not None and _simplify(value) == wanted:
            return {subfield: value}

    narrowed = {subfield: value for subfield, value in values.items() if value is not None}
    return narrowed or None
