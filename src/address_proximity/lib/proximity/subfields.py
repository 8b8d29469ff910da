"""Subfield filter builder."""

from collections.abc import Collection, Mapping
from typing import Any

from loguru import logger
from sqlalchemy import ColumnElement, and_, or_

from address_proximity.models.address import Address

# Camel-case subfield handles stored under snake_case columns
SUBFIELD_COLUMNS = {"countryCode": "country_code", "placeId": "place_id"}


def subfield_column_name(handle: str) -> str:
    """Map a subfield handle to its address column name."""
    return SUBFIELD_COLUMNS.get(handle, handle)


def _as_value_list(value: Any) -> list[Any] | None:
    """Force a subfield value into a list, or None when it cannot be filtered on."""
    if isinstance(value, str | int | float) and not isinstance(value, bool):
        return [value]
    if isinstance(value, list | tuple):
        return list(value)
    return None


def subfield_predicates(
    subfields: Mapping[str, Any],
    whitelist: Collection[str],
) -> list[ColumnElement[bool]]:
    """Build one predicate per filterable subfield.

    Args:
        subfields: Subfield handle → a value or a list of acceptable values.
        whitelist: Subfield handles that may be filtered on. ``countryCode``
            and ``placeId`` may be given in either spelling.

    Returns:
        Predicates in input order. Each matches any of its subfield's values.
    """
    predicates: list[ColumnElement[bool]] = []
    allowed = {subfield_column_name(handle) for handle in whitelist}

    for subfield, value in subfields.items():
        name = subfield_column_name(subfield)
        column = Address.__table__.c.get(name) if name in allowed else None
        if column is None:
            logger.debug(f"Ignoring unknown subfield {subfield!r}")
            continue

        values = _as_value_list(value)
        if not values:
            continue

        matches = [column == v for v in values]
        predicates.append(matches[0] if len(matches) == 1 else or_(*matches))

    return predicates


def build_subfield_filter(
    subfields: Mapping[str, Any],
    whitelist: Collection[str],
) -> ColumnElement[bool] | None:
    """Combine per-subfield predicates with AND.

    Returns:
        The combined predicate, or None if no subfield survived validation.
    """
    predicates = subfield_predicates(subfields, whitelist)
    if not predicates:
        return None
    if len(predicates) == 1:
        return predicates[0]
    return and_(*predicates)
