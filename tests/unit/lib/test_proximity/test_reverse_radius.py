"""Unit tests for reverse radius resolution."""

import re

import pytest
from sqlalchemy.dialects import postgresql

from address_proximity.lib.proximity.fields import AddressField, FieldLayout, FieldType, LayoutField
from address_proximity.lib.proximity.reverse_radius import (
    REVERSE_RADIUS_LABEL,
    ProximityConfigurationError,
    resolve_reverse_radius,
)


@pytest.fixture
def field() -> AddressField:
    layout = FieldLayout(
        [
            LayoutField("serviceRadius", "a1b2c3", FieldType.NUMBER),
            LayoutField("tagline", "d4e5f6", FieldType.PLAIN_TEXT),
        ]
    )
    return AddressField(id=7, handle="address", layout=layout)


class TestResolveReverseRadius:
    """Tests for resolve_reverse_radius."""

    def test_number_field(self, field: AddressField) -> None:
        label = resolve_reverse_radius(field, "serviceRadius")
        assert label.name == REVERSE_RADIUS_LABEL
        sql = str(label.compile(dialect=postgresql.dialect()))
        assert "element_sites.content" in sql

    def test_missing_field(self, field: AddressField) -> None:
        with pytest.raises(ProximityConfigurationError, match='"radius" field does not exist') as exc_info:
            resolve_reverse_radius(field, "radius")
        assert exc_info.value.handle == "radius"
        assert exc_info.value.field_type is None

    def test_wrong_field_type(self, field: AddressField) -> None:
        expected = (
            'The "tagline" field is a plain_text field. Please specify a number field for the `reverseRadius` option.'
        )
        with pytest.raises(ProximityConfigurationError, match=re.escape(expected)) as exc_info:
            resolve_reverse_radius(field, "tagline")
        assert exc_info.value.field_type == "plain_text"

    def test_is_value_error(self) -> None:
        assert issubclass(ProximityConfigurationError, ValueError)

    def test_layout_lookup(self, field: AddressField) -> None:
        assert field.layout.get_field("serviceRadius").uid == "a1b2c3"
        assert field.layout.get_field("nope") is None
