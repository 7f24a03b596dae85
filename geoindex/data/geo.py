"""
Haversine distance and splitting-plane bounds for the spatial index.
"""
import math
from typing import NamedTuple

# Earth radius in miles
EARTH_RADIUS_MILES = 3961
# Greater than the max great-circle distance between two points on Earth
MAX_DISTANCE_MILES = 13000

LAT_AXIS = 0
LNG_AXIS = 1


class Coordinate(NamedTuple):
    lat: float
    lng: float


def haversine_distance_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Return great-circle distance between two points in miles.
    Arguments in degrees. NaN if any argument is NaN or infinite, so the
    point never compares closer than anything.
    """
    if not all(math.isfinite(v) for v in (lat1, lng1, lat2, lng2)):
        return math.nan
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlng / 2) ** 2
    # Rounding (or out-of-range input) can push a outside [0, 1]
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def haversine(a: Coordinate, b: Coordinate) -> float:
    """Distance in miles between two coordinates."""
    return haversine_distance_miles(a[0], a[1], b[0], b[1])


def is_well_formed(coordinate: Coordinate) -> bool:
    lat, lng = coordinate
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def plane_distance_miles(query: Coordinate, split: Coordinate, axis: int) -> float:
    """
    Lower bound (miles) on the distance from query to any point lying on the
    other side of the splitting line through split on the given axis.

    Only meaningful for well-formed coordinates. On the longitude axis the
    far half wraps around the antimeridian, so the gap is the shorter of the
    two ways round, and past 90 degrees the nearest far point may be a pole.
    """
    if axis == LAT_AXIS:
        return EARTH_RADIUS_MILES * math.radians(abs(query[0] - split[0]))

    q_lng, s_lng = query[1], split[1]
    if q_lng < s_lng:
        # far half is [s_lng, 180]
        gap = min(s_lng - q_lng, q_lng + 180.0)
    elif q_lng > s_lng:
        # far half is [-180, s_lng]
        gap = min(q_lng - s_lng, 180.0 - q_lng)
    else:
        return 0.0
    gap = min(max(gap, 0.0), 90.0)
    x = math.sin(math.radians(gap)) * math.cos(math.radians(query[0]))
    return EARTH_RADIUS_MILES * math.asin(min(1.0, max(0.0, x)))
