"""Proximity search CLI command."""

import asyncio
from typing import Any

import typer

from address_proximity.lib.proximity.options import FALLBACK_MARKER


def parse_subfield_options(values: list[str]) -> dict[str, str | list[str]]:
    """Turn repeated ``key=value`` options into a subfield filter.

    A key given more than once matches any of its values.

    Raises:
        typer.BadParameter: If an option is not ``key=value``.
    """
    subfields: dict[str, str | list[str]] = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            msg = f"Expected key=value, got {item!r}"
            raise typer.BadParameter(msg, param_hint="--subfield")
        existing = subfields.get(key)
        if existing is None:
            subfields[key] = value.strip()
        elif isinstance(existing, list):
            existing.append(value.strip())
        else:
            subfields[key] = [existing, value.strip()]
    return subfields


def build_options(
    target: str | None,
    lat: float | None,
    lng: float | None,
    search_range: float | None,
    units: str | None,
    subfields: list[str] | None,
    fallback: bool,
    require_coords: bool,
) -> dict[str, Any]:
    """Assemble raw proximity search options from command-line values."""
    options: dict[str, Any] = {}
    if lat is not None and lng is not None:
        options["target"] = {"lat": lat, "lng": lng}
    elif target:
        options["target"] = target
    if search_range is not None:
        options["range"] = search_range
    if units:
        options["units"] = units
    if fallback:
        options["subfields"] = FALLBACK_MARKER
    elif subfields:
        options["subfields"] = parse_subfield_options(subfields)
    if require_coords:
        options["requireCoords"] = True
    return options


def search(
    field_id: int = typer.Option(..., "--field-id", help="Address field ID"),  # noqa: B008
    handle: str = typer.Option("address", "--handle", help="Address field handle"),
    target: str | None = typer.Option(None, "--target", help="Address to search from"),
    lat: float | None = typer.Option(None, "--lat", help="Target latitude"),  # noqa: B008
    lng: float | None = typer.Option(None, "--lng", help="Target longitude"),  # noqa: B008
    search_range: float | None = typer.Option(None, "--range", help="Search radius"),  # noqa: B008
    units: str | None = typer.Option(None, "--units", help="mi, km, miles or kilometers"),
    subfield: list[str] | None = typer.Option(None, "--subfield", help="Subfield filter as key=value"),  # noqa: B008
    fallback: bool = typer.Option(False, "--fallback", help="Derive subfield filter from the target"),  # noqa: FBT001
    require_coords: bool = typer.Option(False, "--require-coords", help="Skip addresses without coordinates"),  # noqa: FBT001
    site_id: int | None = typer.Option(None, "--site-id", help="Limit to one site"),  # noqa: B008
    limit: int | None = typer.Option(None, "--limit", help="Maximum number of matches"),  # noqa: B008
) -> None:
    """Search stored addresses by distance from a target."""
    options = build_options(target, lat, lng, search_range, units, subfield, fallback, require_coords)
    asyncio.run(_search(field_id, handle, options, site_id, limit))


async def _search(
    field_id: int,
    handle: str,
    options: dict[str, Any],
    site_id: int | None,
    limit: int | None,
) -> None:
    """Async implementation of a proximity search."""
    from address_proximity.core.config import get_settings
    from address_proximity.core.database import dispose_engine, get_backend, get_session_factory, init_engine
    from address_proximity.lib.proximity import AddressField, ProximitySearchCompiler
    from address_proximity.services.geocoding_service import CachedGeocodingLookup
    from address_proximity.services.proximity_service import search_addresses

    settings = get_settings()
    init_engine(settings.database_url, echo=settings.database_echo)

    try:
        factory = get_session_factory()
        async with factory() as session:
            lookup = CachedGeocodingLookup.from_settings(settings, session)
            compiler = ProximitySearchCompiler.from_settings(settings, lookup, get_backend())
            field = AddressField(id=field_id, handle=handle)
            matches = await search_addresses(session, field, options, compiler=compiler, site_id=site_id, limit=limit)
            await session.commit()
    finally:
        await dispose_engine()

    if not matches:
        typer.echo("No matches.")
        return

    typer.echo(f"{len(matches)} match(es):")
    for match in matches:
        distance = f"{match.distance:.2f}" if match.distance is not None else "-"
        typer.echo(f"  element {match.element_id} (site {match.site_id})  distance: {distance}")
