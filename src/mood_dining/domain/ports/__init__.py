"""Ports (interfaces) for the ports-and-adapters architecture."""

from mood_dining.domain.ports.mood_to_tags import MoodToTags
from mood_dining.domain.ports.nearby_place_search import (
    TRANSIT_STATION_CATEGORY,
    NearbyPlaceSearch,
)
from mood_dining.domain.ports.restaurant_search import RestaurantSearch
from mood_dining.domain.ports.transit_routing import TransitRouting

__all__ = [
    "TRANSIT_STATION_CATEGORY",
    "MoodToTags",
    "NearbyPlaceSearch",
    "RestaurantSearch",
    "TransitRouting",
]
