# geo_utils.py
# Pure geographic / formatting helper functions.
# No side effects, no imports from other project modules except models.

import math

from .models import Coord


EARTH_RADIUS_M = 6_371_000.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points in metres.

    Args:
        lat1, lon1: Origin in decimal degrees.
        lat2, lon2: Destination in decimal degrees.

    Returns:
        Distance in metres.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def offset_coord(origin: Coord, d_lat: float, d_lon: float) -> Coord:
    """Shift a coordinate by a fixed number of degrees."""
    return Coord(round(origin.lat + d_lat, 6), round(origin.lon + d_lon, 6))


def format_distance(meters: float) -> str:
    """Whole metres below one kilometre, one-decimal kilometres above."""
    if meters >= 1000:
        return f"{meters / 1000.0:.1f} km"
    return f"{int(meters)} m"
