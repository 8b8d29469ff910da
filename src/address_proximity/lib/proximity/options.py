"""Proximity search options, normalized once from caller input.

Callers pass a loose mapping (``range``, ``units``, ``target``,
``subfields``, ``requireCoords``, ``reverseRadius``). ``parse`` turns it into
a frozen ProximitySearchOptions whose ``target`` and ``subfields`` are tagged
variants, so later steps never inspect raw input types again.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_RANGE = 500.0
DEFAULT_UNITS = "mi"
VALID_UNITS = ("mi", "km", "miles", "kilometers")

FALLBACK_MARKER = "fallback"


@dataclass(frozen=True)
class CoordinateTarget:
    """Target given directly as coordinates."""

    lat: float
    lng: float


@dataclass(frozen=True)
class TextTarget:
    """Target given as freeform address text."""

    text: str


@dataclass(frozen=True)
class FilterTarget:
    """Target given as a structured geocoding query (``address``, ``components``, ...)."""

    query: Mapping[str, Any]

    @property
    def address(self) -> str:
        """The freeform ``address`` part of the query, if any."""
        value = self.query.get("address")
        return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class DefaultTarget:
    """Target of an unsupported type; searches from the default location."""


Target = CoordinateTarget | TextTarget | FilterTarget | DefaultTarget


@dataclass(frozen=True)
class ExplicitSubfields:
    """Caller-supplied subfield filter (subfield → value or list of values)."""

    values: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FallbackSubfields:
    """Request to derive the subfield filter from the geocoded target."""


Subfields = ExplicitSubfields | FallbackSubfields


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def parse_range(value: Any, default: float = DEFAULT_RANGE) -> float:
    """Return ``value`` as a positive float, or ``default``.

    Numbers and numeric strings are accepted; booleans, non-finite and
    non-positive values are not.
    """
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if not _is_number(value) or not math.isfinite(value) or value <= 0:
        return default
    return float(value)


def parse_units(value: Any, default: str = DEFAULT_UNITS) -> str:
    """Return ``value`` if it is a supported unit spelling, else ``default``."""
    if isinstance(value, str) and value in VALID_UNITS:
        return value
    return default


def parse_target(value: Any) -> Target | None:
    """Classify a raw target."""
    if not value:
        return None

    if isinstance(value, str):
        text = value.strip()
        return TextTarget(text) if text else None

    if isinstance(value, Mapping):
        lat, lng = value.get("lat"), value.get("lng")
        if lat is None or lng is None:
            return FilterTarget(dict(value))
        try:
            return CoordinateTarget(lat=float(lat), lng=float(lng))
        except (TypeError, ValueError):
            return DefaultTarget()

    return DefaultTarget()


def parse_subfields(value: Any) -> Subfields | None:
    """Classify a raw subfields option."""
    if value == FALLBACK_MARKER:
        return FallbackSubfields()
    if isinstance(value, Mapping):
        return ExplicitSubfields(dict(value))
    return None


@dataclass(frozen=True)
class ProximitySearchOptions:
    """Normalized options of one proximity search."""

    range: float = DEFAULT_RANGE
    units: str = DEFAULT_UNITS
    target: Target | None = None
    subfields: Subfields | None = None
    require_coords: bool = False
    reverse_radius: str | None = None

    @classmethod
    def parse(
        cls,
        raw: Mapping[str, Any],
        *,
        default_range: float = DEFAULT_RANGE,
        default_units: str = DEFAULT_UNITS,
    ) -> ProximitySearchOptions:
        """Normalize caller options; invalid values fall back to defaults.

        Args:
            raw: Caller options. ``requireCoords``/``reverseRadius`` may also be
                given in snake case.
            default_range: Range used when ``range`` is missing or invalid.
            default_units: Units used when ``units`` is missing or invalid.

        Returns:
            Frozen, normalized options.
        """
        reverse_radius = raw.get("reverseRadius", raw.get("reverse_radius"))
        return cls(
            range=parse_range(raw.get("range"), default_range),
            units=parse_units(raw.get("units"), default_units),
            target=parse_target(raw.get("target")),
            subfields=parse_subfields(raw.get("subfields")),
            require_coords=bool(raw.get("requireCoords", raw.get("require_coords", False))),
            reverse_radius=reverse_radius if isinstance(reverse_radius, str) and reverse_radius else None,
        )
