"""Field configuration consumed by proximity searches.

An address field belongs to a field layout. The layout lets a search find
sibling fields by handle (the reverse radius field); the subfield
whitelist decides which address parts may be filtered on.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum


class FieldType(StrEnum):
    """Storage type of a layout field."""

    ADDRESS = "address"
    NUMBER = "number"
    PLAIN_TEXT = "plain_text"
    DROPDOWN = "dropdown"
    LIGHTSWITCH = "lightswitch"
    DATE = "date"


@dataclass(frozen=True)
class LayoutField:
    """A field placed in a layout, with the uid its content is stored under."""

    handle: str
    uid: str
    field_type: FieldType


DEFAULT_SUBFIELDS: tuple[str, ...] = (
    "name",
    "street1",
    "street2",
    "city",
    "state",
    "zip",
    "neighborhood",
    "county",
    "country",
)

# Coordinates can always be filtered on
COORDINATE_SUBFIELDS = ("lat", "lng")


@dataclass
class FieldLayout:
    """Ordered set of fields shown together on an element."""

    fields: list[LayoutField] = field(default_factory=list)

    def get_field(self, handle: str) -> LayoutField | None:
        """Return the layout field with the given handle, or None."""
        return next((f for f in self.fields if f.handle == handle), None)


@dataclass
class AddressField:
    """An address field definition."""

    id: int
    handle: str
    layout: FieldLayout = field(default_factory=FieldLayout)


def subfield_whitelist(handles: Iterable[str] = DEFAULT_SUBFIELDS) -> frozenset[str]:
    """Build the set of subfield names a search may filter on.

    Args:
        handles: Configured subfield handles.

    Returns:
        The handles plus ``lat`` and ``lng``.
    """
    return frozenset(set(handles) | set(COORDINATE_SUBFIELDS))
