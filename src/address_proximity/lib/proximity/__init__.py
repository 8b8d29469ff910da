"""Proximity search library — compiles distance searches into element queries.

Public API:
    - ProximitySearchCompiler: Applies a proximity search to an element query
    - ProximitySearchOptions: Normalized search options
    - ElementQuery / HostQuery: Query builder and the interface it satisfies
    - AddressField / FieldLayout / LayoutField / FieldType: Field configuration
    - Backend / DialectAdapter: Backend-specific projection filtering
    - TargetResolver / DefaultLocation / Coordinates: Target resolution
    - derive_fallback_filter: Subfield filter fallback
    - build_subfield_filter: Subfield predicates
    - haversine_distance / earth_radius: Distance expression
    - ProximityConfigurationError: Misconfigured reverse radius field
"""

from address_proximity.lib.proximity.compiler import DISTANCE_LABEL, ProximitySearchCompiler
from address_proximity.lib.proximity.dialect import Backend, DialectAdapter, FilterClause
from address_proximity.lib.proximity.fallback import FOCUSED_TYPES, derive_fallback_filter
from address_proximity.lib.proximity.fields import (
    AddressField,
    FieldLayout,
    FieldType,
    LayoutField,
    subfield_whitelist,
)
from address_proximity.lib.proximity.haversine import earth_radius, haversine_distance
from address_proximity.lib.proximity.options import (
    CoordinateTarget,
    DefaultTarget,
    ExplicitSubfields,
    FallbackSubfields,
    FilterTarget,
    ProximitySearchOptions,
    TextTarget,
)
from address_proximity.lib.proximity.query import ElementQuery, HostQuery
from address_proximity.lib.proximity.reverse_radius import (
    REVERSE_RADIUS_LABEL,
    ProximityConfigurationError,
    resolve_reverse_radius,
)
from address_proximity.lib.proximity.subfields import build_subfield_filter
from address_proximity.lib.proximity.target import (
    Coordinates,
    DefaultLocation,
    GeocodingLookup,
    ResolvedTarget,
    TargetResolver,
)

__all__ = [
    "DISTANCE_LABEL",
    "FOCUSED_TYPES",
    "REVERSE_RADIUS_LABEL",
    "AddressField",
    "Backend",
    "Coordinates",
    "CoordinateTarget",
    "DefaultLocation",
    "DefaultTarget",
    "DialectAdapter",
    "ElementQuery",
    "ExplicitSubfields",
    "FallbackSubfields",
    "FieldLayout",
    "FieldType",
    "FilterClause",
    "FilterTarget",
    "GeocodingLookup",
    "HostQuery",
    "LayoutField",
    "ProximityConfigurationError",
    "ProximitySearchCompiler",
    "ProximitySearchOptions",
    "ResolvedTarget",
    "TargetResolver",
    "TextTarget",
    "build_subfield_filter",
    "derive_fallback_filter",
    "earth_radius",
    "haversine_distance",
    "resolve_reverse_radius",
    "subfield_whitelist",
]
