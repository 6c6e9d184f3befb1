"""Domain layer - core models, errors and ports."""

from mood_dining.domain.models import (
    Coordinate,
    RestaurantHit,
    SearchMode,
    SearchRequest,
    Station,
)
from mood_dining.domain.ports import (
    MoodToTags,
    NearbyPlaceSearch,
    RestaurantSearch,
    TransitRouting,
)

__all__ = [
    "Coordinate",
    "MoodToTags",
    "NearbyPlaceSearch",
    "RestaurantHit",
    "RestaurantSearch",
    "SearchMode",
    "SearchRequest",
    "Station",
    "TransitRouting",
]
