"""Pydantic v2 schemas for proximity search results."""

from pydantic import BaseModel


class ProximityMatch(BaseModel):
    """One element matched by a proximity search."""

    model_config = {"from_attributes": True}

    element_id: int
    site_id: int
    distance: float | None = None
    reverse_radius: float | None = None


class GeocodeMatch(BaseModel):
    """Best geocoder match for a lookup, with its restructured subfields."""

    latitude: float
    longitude: float
    matched_address: str | None = None
    result_type: str | None = None
    subfields: dict[str, str | None] = {}
