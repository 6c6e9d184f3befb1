"""Demo NearbyPlaceSearch."""

from mood_dining.adapters.demo.demo_data import DEMO_STATIONS, shift
from mood_dining.domain.geo import haversine_distance
from mood_dining.domain.models import Coordinate, PlaceResult
from mood_dining.domain.ports import TRANSIT_STATION_CATEGORY


class DemoPlaceSearch:
    """Returns the demo stations within the radius, nearest first."""

    async def search(
        self, center: Coordinate, radius_meters: int, category: str
    ) -> list[PlaceResult]:
        if category != TRANSIT_STATION_CATEGORY:
            return []

        places = [
            PlaceResult(
                id=station_id,
                name=name,
                coordinate=shift(center, lat_offset, lng_offset),
                categories=frozenset({TRANSIT_STATION_CATEGORY}),
            )
            for station_id, name, lat_offset, lng_offset in DEMO_STATIONS
        ]
        in_range = [
            place
            for place in places
            if haversine_distance(center, place.coordinate) <= radius_meters
        ]
        return sorted(in_range, key=lambda place: haversine_distance(center, place.coordinate))
