"""Demo RestaurantSearch."""

import logging

from mood_dining.adapters.demo.demo_data import (
    DEMO_RESTAURANT_TEMPLATES,
    dishes_from_query,
    stable_hash,
)
from mood_dining.adapters.google_api.place_search import build_maps_link
from mood_dining.domain.geo import haversine_distance, offset_coordinate
from mood_dining.domain.models import Coordinate, RestaurantHit

logger = logging.getLogger(__name__)


class DemoRestaurantSearch:
    """Generates two restaurants per dish of the query around the search center.

    Rating, price tier and position are derived from the dish and the center,
    so a station always yields the same restaurants. Results are sorted by
    distance from the user, like the live search.
    """

    async def search_restaurants(
        self,
        center: Coordinate,
        radius_meters: int,
        query: str,
        user_location: Coordinate | None = None,
    ) -> list[RestaurantHit]:
        reference = user_location or center
        hits = []
        for dish in dishes_from_query(query):
            for suffix, categories in DEMO_RESTAURANT_TEMPLATES:
                name = f"{dish}{suffix}"
                seed = stable_hash(name, round(center.latitude, 4), round(center.longitude, 4))
                location = offset_coordinate(
                    center,
                    bearing_degrees=seed % 360,
                    meters=radius_meters * (20 + (seed >> 9) % 71) / 100,
                )
                place_id = f"demo_{seed:08x}"
                hits.append(
                    RestaurantHit(
                        id=place_id,
                        name=name,
                        rating=round(3.5 + ((seed >> 3) % 15) / 10, 1),
                        price_tier=1 + (seed >> 5) % 4,
                        categories=categories,
                        address_text=f"{location.latitude:.4f}, {location.longitude:.4f}",
                        distance_from_user=haversine_distance(reference, location),
                        external_map_link=build_maps_link(name, place_id),
                    )
                )

        hits.sort(key=lambda hit: hit.distance_from_user or 0)
        logger.debug(f"Demo search '{query}' returned {len(hits)} restaurants")
        return hits
