"""Nearby place search port."""

from typing import Protocol

from mood_dining.domain.models.coordinate import Coordinate
from mood_dining.domain.models.place_result import PlaceResult

TRANSIT_STATION_CATEGORY = "train_station"


class NearbyPlaceSearch(Protocol):
    """Port for finding places of a category around a point.

    An empty list means "nothing there"; a failed call raises an
    ``UpstreamCallError``.
    """

    async def search(
        self, center: Coordinate, radius_meters: int, category: str
    ) -> list[PlaceResult]:
        """Search places of ``category`` within ``radius_meters`` of ``center``."""
        ...
