"""Restaurant search port."""

from typing import Protocol

from mood_dining.domain.models.coordinate import Coordinate
from mood_dining.domain.models.restaurant_hit import RestaurantHit


class RestaurantSearch(Protocol):
    """Port for searching restaurants matching a query around a point."""

    async def search_restaurants(
        self,
        center: Coordinate,
        radius_meters: int,
        query: str,
        user_location: Coordinate | None = None,
    ) -> list[RestaurantHit]:
        """Search restaurants around ``center``.

        Distances on the returned hits are measured from ``user_location``
        (or ``center`` when not given).
        """
        ...
