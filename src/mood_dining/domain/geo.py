"""Geographic helpers: haversine distance, formatting and offsets."""

import math

from mood_dining.domain.models.coordinate import Coordinate

EARTH_RADIUS_METERS = 6_371_000
METERS_PER_DEGREE_LATITUDE = 111_000


def haversine_distance(a: Coordinate, b: Coordinate) -> int:
    """Great-circle distance between two coordinates, rounded to whole meters."""
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = math.radians(b.latitude - a.latitude)
    dlng = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return round(EARTH_RADIUS_METERS * c)


def format_distance(meters: int) -> str:
    """Format a distance for display, e.g. ``850m`` or ``1.2km``."""
    if meters < 1000:
        return f"{meters}m"
    return f"{meters / 1000:.1f}km"


def offset_coordinate(origin: Coordinate, bearing_degrees: float, meters: float) -> Coordinate:
    """Move ``meters`` away from ``origin`` along a compass bearing.

    Uses a flat approximation (1 degree of latitude is about 111 km), which is
    good enough for placing synthetic routing destinations a few km away.
    """
    bearing = math.radians(bearing_degrees)
    north = math.cos(bearing) * meters
    east = math.sin(bearing) * meters
    latitude = origin.latitude + north / METERS_PER_DEGREE_LATITUDE
    longitude = origin.longitude + east / (
        METERS_PER_DEGREE_LATITUDE * math.cos(math.radians(origin.latitude))
    )
    return Coordinate(latitude=latitude, longitude=longitude)
