"""ORM model registry — import all models so metadata discovers them."""

from address_proximity.models.address import Address
from address_proximity.models.element import Element, ElementSite
from address_proximity.models.geocoder_cache import GeocoderCache

__all__ = [
    "Address",
    "Element",
    "ElementSite",
    "GeocoderCache",
]
