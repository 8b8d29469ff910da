"""Reverse radius — filter on a radius stored with each record.

A regular search finds records within the caller's range of the target. A
reverse radius search finds records whose own radius (read from a number
field on the record) reaches the target, e.g. businesses whose delivery
area covers a customer's address.
"""

from sqlalchemy.sql.elements import Label

from address_proximity.lib.proximity.fields import AddressField, FieldType
from address_proximity.models.element import ElementSite

REVERSE_RADIUS_LABEL = "reverse_radius"


class ProximityConfigurationError(ValueError):
    """Raised when a search references a field that cannot serve its purpose.

    Args:
        handle: Handle of the offending field.
        message: Human-readable error description.
        field_type: Actual type of the field, if it exists.
    """

    def __init__(self, handle: str, message: str, field_type: str | None = None) -> None:
        self.handle = handle
        self.field_type = field_type
        super().__init__(message)


def resolve_reverse_radius(field: AddressField, handle: str) -> Label:
    """Build the projection of each record's own radius.

    Args:
        field: Address field being searched; its layout holds the radius field.
        handle: Handle of the number field holding each record's radius.

    Returns:
        Labeled expression extracting the radius from element content.

    Raises:
        ProximityConfigurationError: If the field does not exist in the layout
            or is not a number field.
    """
    layout_field = field.layout.get_field(handle)
    if layout_field is None:
        msg = f'The "{handle}" field does not exist in the layout of the "{field.handle}" field.'
        raise ProximityConfigurationError(handle, msg)

    if layout_field.field_type != FieldType.NUMBER:
        field_type = str(layout_field.field_type)
        msg = (
            f'The "{handle}" field is a {field_type} field. '
            "Please specify a number field for the `reverseRadius` option."
        )
        raise ProximityConfigurationError(handle, msg, field_type=field_type)

    return ElementSite.content[layout_field.uid].as_float().label(REVERSE_RADIUS_LABEL)
