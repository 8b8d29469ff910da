"""Proximity service — runs proximity searches against the database."""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from address_proximity.lib.proximity import (
    DISTANCE_LABEL,
    REVERSE_RADIUS_LABEL,
    AddressField,
    ElementQuery,
    ProximitySearchCompiler,
    ProximitySearchOptions,
)
from address_proximity.schemas.proximity import ProximityMatch


async def search_addresses(
    session: AsyncSession,
    field: AddressField,
    options: ProximitySearchOptions | Mapping[str, Any] | None,
    *,
    compiler: ProximitySearchCompiler,
    site_id: int | None = None,
    element_type: str | None = None,
    limit: int | None = None,
) -> list[ProximityMatch]:
    """Find elements whose address in ``field`` matches a proximity search.

    Args:
        session: Database session.
        field: Address field to search.
        options: Proximity search options.
        compiler: Compiler configured for the session's backend.
        site_id: Restrict to one site.
        element_type: Restrict to one element type.
        limit: Maximum number of matches.

    Returns:
        Matches, nearest first when the search has a distance.

    Raises:
        ProximityConfigurationError: If the reverse radius field is invalid.
    """
    query = ElementQuery(site_id=site_id, element_type=element_type)
    await compiler.compile(query, field, options)

    stmt = query.statement()
    columns = stmt.selected_columns
    if DISTANCE_LABEL in columns.keys():
        stmt = stmt.order_by(columns[DISTANCE_LABEL], columns["element_id"])
    else:
        stmt = stmt.order_by(columns["element_id"])
    if limit is not None:
        stmt = stmt.limit(limit)

    result = await session.execute(stmt)
    matches = [
        ProximityMatch(
            element_id=row.element_id,
            site_id=row.site_id,
            distance=row._mapping.get(DISTANCE_LABEL),
            reverse_radius=row._mapping.get(REVERSE_RADIUS_LABEL),
        )
        for row in result
    ]
    logger.info(f"Proximity search on field {field.handle!r} returned {len(matches)} matches")
    return matches
