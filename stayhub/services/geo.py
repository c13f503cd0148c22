"""Great-circle distance helpers for radius search."""

from math import asin, cos, degrees, pi, radians, sin, sqrt

from sqlalchemy import Float, func

EARTH_RADIUS_KM = 6371.0

_DEGREES_TO_RADIANS = pi / 180


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in kilometres between two points given in decimal degrees."""
    dlat = radians(lat2 - lat1)
    dlon = radians(lon2 - lon1)
    a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * asin(min(1.0, sqrt(a)))


def bounding_box(lat: float, lon: float, radius_km: float) -> tuple[float, float, float, float]:
    """Return (min_lat, max_lat, min_lon, max_lon) enclosing a radius around a point.

    Used as a cheap SQL pre-filter before the exact haversine check.
    """
    lat_delta = degrees(radius_km / EARTH_RADIUS_KM)
    cos_lat = cos(radians(lat))
    if cos_lat < 1e-6:
        lon_delta = 180.0
    else:
        lon_delta = min(180.0, degrees(radius_km / (EARTH_RADIUS_KM * cos_lat)))
    return lat - lat_delta, lat + lat_delta, lon - lon_delta, lon + lon_delta


def within_radius_clause(lat_column, lon_column, lat: float, lon: float, radius_km: float):
    """SQL condition: the point in ``lat_column``/``lon_column`` is within ``radius_km``.

    Same great-circle distance as :func:`haversine_km`, but the haversine term
    is compared against a threshold computed here, so the database only needs
    ``sin`` and ``cos``.
    """
    if radius_km >= pi * EARTH_RADIUS_KM:
        return lat_column.is_not(None)
    threshold = sin(radius_km / (2 * EARTH_RADIUS_KM)) ** 2

    lat_rad = radians(lat)
    half_dlat = func.sin((lat_column * _DEGREES_TO_RADIANS - lat_rad) / 2, type_=Float)
    half_dlon = func.sin((lon_column * _DEGREES_TO_RADIANS - radians(lon)) / 2, type_=Float)
    cos_lat = func.cos(lat_column * _DEGREES_TO_RADIANS, type_=Float)
    term = half_dlat * half_dlat + cos(lat_rad) * cos_lat * half_dlon * half_dlon
    return term <= threshold
