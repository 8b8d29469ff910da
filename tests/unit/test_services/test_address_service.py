"""Unit tests for address service — save and delete address rows."""

from typing import Any

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from address_proximity.models.address import Address
from address_proximity.models.element import Element
from address_proximity.services.address_service import (
    delete_addresses,
    get_address,
    save_address,
    save_coordinates,
)

WACKER_COMPONENTS = [
    {"long_name": "233", "short_name": "233", "types": ["street_number"]},
    {"long_name": "South Wacker Drive", "short_name": "S Wacker Dr", "types": ["route"]},
    {"long_name": "Chicago", "short_name": "Chicago", "types": ["locality", "political"]},
    {"long_name": "Illinois", "short_name": "IL", "types": ["administrative_area_level_1", "political"]},
    {"long_name": "United States", "short_name": "US", "types": ["country", "political"]},
    {"long_name": "60606", "short_name": "60606", "types": ["postal_code"]},
]


@pytest.fixture
async def elements(async_session: AsyncSession) -> list[Element]:
    """Create two elements to attach addresses to."""
    rows = [Element(id=1), Element(id=2)]
    async_session.add_all(rows)
    await async_session.flush()
    return rows


async def _count(session: AsyncSession) -> int:
    return (await session.execute(select(func.count()).select_from(Address))).scalar_one()


class TestSaveAddress:
    """Tests for save_address()."""

    @pytest.mark.asyncio
    async def test_creates_row_with_subfields(
        self, async_session: AsyncSession, elements: list[Element], make_result: Any
    ) -> None:
        result = make_result(41.8789, -87.6359, components=WACKER_COMPONENTS, formatted="233 S Wacker Dr, Chicago")

        address = await save_address(async_session, 1, 1, 7, result)

        assert address.id is not None
        assert address.street1 == "233 South Wacker Drive"
        assert address.city == "Chicago"
        assert address.state == "Illinois"
        assert address.zip == "60606"
        assert address.country_code == "US"
        assert address.formatted == "233 S Wacker Dr, Chicago"
        assert address.lat == pytest.approx(41.8789)
        assert address.lng == pytest.approx(-87.6359)
        assert address.zoom == 11
        assert address.has_coords is True

    @pytest.mark.asyncio
    async def test_updates_existing_row(
        self, async_session: AsyncSession, elements: list[Element], make_result: Any
    ) -> None:
        await save_address(async_session, 1, 1, 7, make_result(41.0, -87.0, components=WACKER_COMPONENTS))
        updated = await save_address(async_session, 1, 1, 7, make_result(42.0, -88.0), zoom=15)

        assert await _count(async_session) == 1
        assert updated.lat == pytest.approx(42.0)
        assert updated.zoom == 15
        assert updated.city is None

    @pytest.mark.asyncio
    async def test_one_row_per_site_and_field(
        self, async_session: AsyncSession, elements: list[Element], make_result: Any
    ) -> None:
        result = make_result(41.0, -87.0)
        await save_address(async_session, 1, 1, 7, result)
        await save_address(async_session, 1, 2, 7, result)
        await save_address(async_session, 1, 1, 8, result)
        assert await _count(async_session) == 3


class TestSaveCoordinates:
    """Tests for save_coordinates()."""

    @pytest.mark.asyncio
    async def test_keeps_subfields(self, async_session: AsyncSession, elements: list[Element], make_result: Any) -> None:
        await save_address(async_session, 1, 1, 7, make_result(41.0, -87.0, components=WACKER_COMPONENTS))

        address = await save_coordinates(async_session, 1, 1, 7, 41.5, -87.5, default_zoom=9)

        assert address.city == "Chicago"
        assert address.lat == pytest.approx(41.5)
        assert address.zoom == 9

    @pytest.mark.asyncio
    async def test_clears_coordinates(self, async_session: AsyncSession, elements: list[Element]) -> None:
        address = await save_coordinates(async_session, 2, 1, 7, None, None)
        assert address.has_coords is False
        assert await get_address(async_session, 2, 1, 7) is address

    @pytest.mark.asyncio
    async def test_rejects_single_coordinate(self, async_session: AsyncSession, elements: list[Element]) -> None:
        with pytest.raises(ValueError, match="both"):
            await save_coordinates(async_session, 1, 1, 7, 41.5, None)
        with pytest.raises(ValueError, match="both"):
            await save_coordinates(async_session, 1, 1, 7, None, -87.5)
        assert await get_address(async_session, 1, 1, 7) is None


class TestDeleteAddresses:
    """Tests for delete_addresses()."""

    @pytest.mark.asyncio
    async def test_by_element(self, async_session: AsyncSession, elements: list[Element]) -> None:
        await save_coordinates(async_session, 1, 1, 7, 1.0, 1.0)
        await save_coordinates(async_session, 1, 1, 8, 1.0, 1.0)
        await save_coordinates(async_session, 2, 1, 7, 1.0, 1.0)

        assert await delete_addresses(async_session, element_id=1) == 2
        assert await _count(async_session) == 1

    @pytest.mark.asyncio
    async def test_by_field(self, async_session: AsyncSession, elements: list[Element]) -> None:
        await save_coordinates(async_session, 1, 1, 7, 1.0, 1.0)
        await save_coordinates(async_session, 2, 1, 7, 1.0, 1.0)
        await save_coordinates(async_session, 2, 1, 8, 1.0, 1.0)

        assert await delete_addresses(async_session, field_id=7) == 2
        assert await _count(async_session) == 1

    @pytest.mark.asyncio
    async def test_requires_a_filter(self, async_session: AsyncSession) -> None:
        with pytest.raises(ValueError, match="requires element_id"):
            await delete_addresses(async_session)
