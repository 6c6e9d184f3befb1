"""In-memory collaborators for running without API keys."""

from mood_dining.adapters.demo.demo_place_search import DemoPlaceSearch
from mood_dining.adapters.demo.demo_restaurant_search import DemoRestaurantSearch
from mood_dining.adapters.demo.demo_transit_routing import DemoTransitRouting

__all__ = ["DemoPlaceSearch", "DemoRestaurantSearch", "DemoTransitRouting"]
