"""Address service — stores and removes the address rows searches run against."""

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from address_proximity.lib.geocoder import GeocodingResult, restructure_components
from address_proximity.models.address import Address


async def get_address(
    session: AsyncSession,
    element_id: int,
    site_id: int,
    field_id: int,
) -> Address | None:
    """Look up the address stored for an element, site and field.

    Returns:
        Address or None if not found.
    """
    result = await session.execute(
        select(Address).where(
            Address.element_id == element_id,
            Address.site_id == site_id,
            Address.field_id == field_id,
        )
    )
    return result.scalar_one_or_none()


async def _get_or_create(
    session: AsyncSession,
    element_id: int,
    site_id: int,
    field_id: int,
) -> Address:
    address = await get_address(session, element_id, site_id, field_id)
    if address is None:
        address = Address(element_id=element_id, site_id=site_id, field_id=field_id)
        session.add(address)
    return address


async def save_address(
    session: AsyncSession,
    element_id: int,
    site_id: int,
    field_id: int,
    result: GeocodingResult,
    *,
    zoom: int | None = None,
    default_zoom: int = 11,
) -> Address:
    """Create or update the address row from a geocoding match.

    Subfields are restructured from the match's address components and
    replace whatever was stored before.

    Args:
        session: Database session.
        element_id: Owning element.
        site_id: Site the address belongs to.
        field_id: Address field the value was entered in.
        result: Geocoding match to store.
        zoom: Map zoom level chosen for the address.
        default_zoom: Zoom stored when ``zoom`` is not given.

    Returns:
        The saved Address row.
    """
    address = await _get_or_create(session, element_id, site_id, field_id)

    components = restructure_components(result.raw_response)
    for key, value in components.to_dict().items():
        setattr(address, key, value)
    address.formatted = components.formatted or result.matched_address
    address.raw = result.raw_response
    address.lat = result.latitude
    address.lng = result.longitude
    address.zoom = zoom if zoom is not None else default_zoom

    await session.flush()
    logger.debug(f"Saved address for element {element_id} (site {site_id}, field {field_id})")
    return address


async def save_coordinates(
    session: AsyncSession,
    element_id: int,
    site_id: int,
    field_id: int,
    lat: float | None,
    lng: float | None,
    *,
    zoom: int | None = None,
    default_zoom: int = 11,
) -> Address:
    """Create or update an address row holding only a coordinate pair.

    Existing subfields are left untouched. Pass both coordinates, or
    neither to clear them.

    Returns:
        The saved Address row.

    Raises:
        ValueError: If only one of ``lat`` and ``lng`` is given.
    """
    if (lat is None) != (lng is None):
        msg = "lat and lng must both be given or both be None"
        raise ValueError(msg)

    address = await _get_or_create(session, element_id, site_id, field_id)
    address.lat = lat
    address.lng = lng
    address.zoom = zoom if zoom is not None else default_zoom

    await session.flush()
    return address


async def delete_addresses(
    session: AsyncSession,
    *,
    element_id: int | None = None,
    field_id: int | None = None,
) -> int:
    """Delete stored addresses of an element, a field, or both.

    Args:
        session: Database session.
        element_id: Restrict to this element.
        field_id: Restrict to this field.

    Returns:
        Number of rows deleted.

    Raises:
        ValueError: If neither ``element_id`` nor ``field_id`` is given.
    """
    if element_id is None and field_id is None:
        msg = "delete_addresses requires element_id, field_id, or both"
        raise ValueError(msg)

    stmt = delete(Address)
    if element_id is not None:
        stmt = stmt.where(Address.element_id == element_id)
    if field_id is not None:
        stmt = stmt.where(Address.field_id == field_id)

    result = await session.execute(stmt)
    await session.flush()
    logger.info(f"Deleted {result.rowcount} address rows")
    return result.rowcount
