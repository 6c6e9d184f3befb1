"""Google Maps Platform adapters."""

from mood_dining.adapters.google_api.http_client import GoogleMapsHttpClient
from mood_dining.adapters.google_api.place_search import (
    GooglePlaceSearch,
    GoogleRestaurantSearch,
)
from mood_dining.adapters.google_api.transit_routing import GoogleTransitRouting

__all__ = [
    "GoogleMapsHttpClient",
    "GooglePlaceSearch",
    "GoogleRestaurantSearch",
    "GoogleTransitRouting",
]
