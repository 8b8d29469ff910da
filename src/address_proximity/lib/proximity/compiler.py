"""Proximity search compiler.

Adds a proximity search to an element query: joins the address table,
projects the distance from the search target, and filters by range,
subfields, coordinate presence and reverse radius. Options are applied as
an ordered pipeline; every step reads the normalized options and appends
to the caller's query.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from loguru import logger
from sqlalchemy import and_, null, or_

from address_proximity.lib.proximity.dialect import Backend, DialectAdapter
from address_proximity.lib.proximity.fallback import derive_fallback_filter
from address_proximity.lib.proximity.fields import AddressField, subfield_whitelist
from address_proximity.lib.proximity.haversine import haversine_distance
from address_proximity.lib.proximity.options import (
    DEFAULT_RANGE,
    DEFAULT_UNITS,
    ExplicitSubfields,
    FallbackSubfields,
    ProximitySearchOptions,
)
from address_proximity.lib.proximity.query import HostQuery
from address_proximity.lib.proximity.reverse_radius import resolve_reverse_radius
from address_proximity.lib.proximity.subfields import build_subfield_filter
from address_proximity.lib.proximity.target import (
    Coordinates,
    DefaultLocation,
    GeocodingLookup,
    TargetResolver,
)
from address_proximity.models.address import Address
from address_proximity.models.element import Element, ElementSite

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import Label

    from address_proximity.core.config import Settings

DISTANCE_LABEL = "distance"


@dataclass
class _Compilation:
    """State of one compile call."""

    query: HostQuery
    field: AddressField
    options: ProximitySearchOptions
    distance: Label | None = None
    reverse_radius: Label | None = None


class ProximitySearchCompiler:
    """Compiles proximity search options into clauses on an element query."""

    def __init__(
        self,
        lookup: GeocodingLookup,
        backend: Backend,
        *,
        default_location: DefaultLocation | None = None,
        whitelist: Collection[str] | None = None,
        default_range: float = DEFAULT_RANGE,
        default_units: str = DEFAULT_UNITS,
    ) -> None:
        self._resolver = TargetResolver(lookup, default_location)
        self._dialect = DialectAdapter(backend)
        self._whitelist = frozenset(whitelist) if whitelist is not None else subfield_whitelist()
        self._default_range = default_range
        self._default_units = default_units

    @classmethod
    def from_settings(cls, settings: Settings, lookup: GeocodingLookup, backend: Backend) -> ProximitySearchCompiler:
        """Build a compiler configured from application settings."""
        return cls(
            lookup,
            backend,
            default_location=DefaultLocation(
                coordinates=Coordinates(settings.proximity_default_latitude, settings.proximity_default_longitude),
            ),
            whitelist=subfield_whitelist(settings.proximity_subfield_list),
            default_range=settings.proximity_default_range,
            default_units=settings.proximity_default_units,
        )

    async def compile(
        self,
        query: HostQuery,
        field: AddressField,
        options: ProximitySearchOptions | Mapping[str, Any] | None,
    ) -> None:
        """Apply a proximity search to ``query`` in place.

        Args:
            query: Element query to modify.
            field: Address field being searched.
            options: Search options; raw mappings are normalized first.
                Empty options leave the query untouched.

        Raises:
            ProximityConfigurationError: If ``reverseRadius`` names a field
                that is missing or not a number field.
        """
        if not options:
            return

        if not isinstance(options, ProximitySearchOptions):
            options = ProximitySearchOptions.parse(
                options,
                default_range=self._default_range,
                default_units=self._default_units,
            )

        # A misconfigured reverse radius fails before the query is touched
        reverse_radius = resolve_reverse_radius(field, options.reverse_radius) if options.reverse_radius else None

        state = _Compilation(query=query, field=field, options=options, reverse_radius=reverse_radius)
        self._join_addresses(state)
        await self._apply_target(state)
        self._apply_subfields(state)
        self._apply_require_coords(state)
        self._apply_reverse_radius(state)

    def _join_addresses(self, state: _Compilation) -> None:
        state.query.inner_join(
            Address,
            and_(
                Address.element_id == Element.id,
                Address.site_id == ElementSite.site_id,
                Address.field_id == state.field.id,
            ),
        )

    async def _apply_target(self, state: _Compilation) -> None:
        options = state.options

        if options.target is None:
            state.distance = null().label(DISTANCE_LABEL)
            state.query.add_select(state.distance)
            return

        resolved = await self._resolver.resolve(options.target)

        if isinstance(options.subfields, FallbackSubfields):
            narrowed = derive_fallback_filter(options.target, resolved.match)
            if narrowed:
                logger.debug(f"Fallback subfield filter: {narrowed}")
            state.options = dataclasses.replace(
                options,
                subfields=ExplicitSubfields(narrowed) if narrowed else None,
            )

        origin = resolved.coordinates
        state.distance = haversine_distance(origin.lat, origin.lng, Address.lat, Address.lng, options.units).label(
            DISTANCE_LABEL
        )
        state.query.add_select(state.distance)
        state.query.add_public_select(DISTANCE_LABEL, state.field.handle)

        # A reverse radius replaces the caller's range
        if options.reverse_radius:
            return

        clause = self._dialect.filter_within(state.query, state.distance, options.range)
        logger.debug(f"Range filter {options.range} {options.units} attached to {clause}")

    def _apply_subfields(self, state: _Compilation) -> None:
        subfields = state.options.subfields
        if not isinstance(subfields, ExplicitSubfields):
            return

        predicate = build_subfield_filter(subfields.values, self._whitelist)
        if predicate is not None:
            state.query.where(predicate)

    def _apply_require_coords(self, state: _Compilation) -> None:
        if state.options.require_coords:
            state.query.where(~or_(Address.lat.is_(None), Address.lng.is_(None)))

    def _apply_reverse_radius(self, state: _Compilation) -> None:
        if state.reverse_radius is None:
            return

        state.query.add_select(state.reverse_radius)
        clause = self._dialect.filter_within(state.query, state.distance, state.reverse_radius)
        logger.debug(f"Reverse radius {state.options.reverse_radius!r} attached to {clause}")
