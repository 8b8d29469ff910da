"""Geospatial proximity search over stored, geocoded address records."""
