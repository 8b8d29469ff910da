"""Haversine great-circle distance as a SQL expression."""

from sqlalchemy import ColumnElement, Float, case, func, literal

EARTH_RADIUS_MILES = 3959
EARTH_RADIUS_KM = 6371


def earth_radius(units: str) -> int:
    """Get the radius of Earth as measured in the specified units.

    Miles are the default for any unit spelling other than ``km``/``kilometers``.
    """
    if units in ("km", "kilometers"):
        return EARTH_RADIUS_KM
    return EARTH_RADIUS_MILES


def haversine_distance(
    lat: float,
    lng: float,
    lat_column: ColumnElement,
    lng_column: ColumnElement,
    units: str,
) -> ColumnElement[float]:
    """Build the distance between a fixed point and a row's coordinate columns.

    Args:
        lat: Latitude of the search origin.
        lng: Longitude of the search origin.
        lat_column: Column (or expression) holding each row's latitude.
        lng_column: Column (or expression) holding each row's longitude.
        units: Distance units; selects the Earth radius.

    Returns:
        Expression yielding the distance in ``units``; NULL when either
        row coordinate is NULL.
    """
    origin_lat = func.radians(lat)
    cosine = func.cos(origin_lat) * func.cos(func.radians(lat_column)) * func.cos(
        func.radians(lng_column) - func.radians(lng)
    ) + func.sin(origin_lat) * func.sin(func.radians(lat_column))

    # Rounding can push the cosine of a zero-length or antipodal arc just past +/-1.0; NULL passes through
    clamped = case((cosine > 1.0, literal(1.0)), (cosine < -1.0, literal(-1.0)), else_=cosine)
    return literal(earth_radius(units), Float) * func.acos(clamped)
