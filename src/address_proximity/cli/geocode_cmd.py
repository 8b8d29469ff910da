"""Geocoding CLI commands for address lookups and storing addresses."""

import asyncio

import typer

from address_proximity.lib.geocoder import GeocodingResult, restructure_components
from address_proximity.schemas.proximity import GeocodeMatch


def lookup(
    query: str = typer.Argument(..., help="Address to geocode"),
    as_json: bool = typer.Option(False, "--json", help="Print the match as JSON"),  # noqa: FBT001
) -> None:
    """Geocode an address and print the best match with its subfields."""
    match = asyncio.run(_lookup(query))
    if match is None:
        typer.echo("No match found.")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(match.model_dump_json(indent=2))
        return

    typer.echo(f"Match: {match.matched_address or '-'}")
    typer.echo(f"  Lat/Lng: {match.latitude}, {match.longitude}")
    typer.echo(f"  Type:    {match.result_type or '-'}")
    for key, value in match.subfields.items():
        if value is not None:
            typer.echo(f"  {key}: {value}")


def save_address(
    query: str = typer.Argument(..., help="Address to geocode and store"),
    element_id: int = typer.Option(..., "--element-id", help="Owning element ID"),  # noqa: B008
    field_id: int = typer.Option(..., "--field-id", help="Address field ID"),  # noqa: B008
    site_id: int = typer.Option(1, "--site-id", help="Site ID"),  # noqa: B008
    zoom: int | None = typer.Option(None, "--zoom", help="Map zoom level"),  # noqa: B008
) -> None:
    """Geocode an address and store it for an element's address field."""
    asyncio.run(_save_address(query, element_id, field_id, site_id, zoom))


def _to_match(result: GeocodingResult) -> GeocodeMatch:
    return GeocodeMatch(
        latitude=result.latitude,
        longitude=result.longitude,
        matched_address=result.matched_address,
        result_type=result.result_type,
        subfields=restructure_components(result.raw_response).to_dict(),
    )


async def _lookup(query: str) -> GeocodeMatch | None:
    """Async implementation of a single lookup."""
    from address_proximity.core.config import get_settings
    from address_proximity.core.database import dispose_engine, get_session_factory, init_engine
    from address_proximity.services.geocoding_service import CachedGeocodingLookup

    settings = get_settings()
    init_engine(settings.database_url, echo=settings.database_echo)

    try:
        factory = get_session_factory()
        async with factory() as session:
            result = await CachedGeocodingLookup.from_settings(settings, session).lookup(query)
            await session.commit()
    finally:
        await dispose_engine()

    return _to_match(result) if result is not None else None


async def _save_address(query: str, element_id: int, field_id: int, site_id: int, zoom: int | None) -> None:
    """Async implementation of storing a geocoded address."""
    from address_proximity.core.config import get_settings
    from address_proximity.core.database import dispose_engine, get_session_factory, init_engine
    from address_proximity.services.address_service import save_address as store_address
    from address_proximity.services.geocoding_service import CachedGeocodingLookup

    settings = get_settings()
    init_engine(settings.database_url, echo=settings.database_echo)

    try:
        factory = get_session_factory()
        async with factory() as session:
            result = await CachedGeocodingLookup.from_settings(settings, session).lookup(query)
            if result is None:
                typer.echo("No match found; nothing stored.")
                raise typer.Exit(code=1)

            address = await store_address(
                session,
                element_id,
                site_id,
                field_id,
                result,
                zoom=zoom,
                default_zoom=settings.proximity_default_zoom,
            )
            await session.commit()
            typer.echo(f"Address stored: {address.id}")
            typer.echo(f"  Formatted: {address.formatted or '-'}")
            typer.echo(f"  Lat/Lng:   {address.lat}, {address.lng}")
    finally:
        await dispose_engine()
