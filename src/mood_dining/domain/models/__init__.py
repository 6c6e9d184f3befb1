"""Domain models for mood-driven restaurant search."""

from mood_dining.domain.models.coordinate import Coordinate
from mood_dining.domain.models.error_details import ErrorDetails
from mood_dining.domain.models.mood_tags import MoodTags
from mood_dining.domain.models.place_result import PlaceResult
from mood_dining.domain.models.restaurant_hit import RestaurantHit
from mood_dining.domain.models.search_request import SearchMode, SearchRequest
from mood_dining.domain.models.search_stage import SearchStage
from mood_dining.domain.models.station import Station
from mood_dining.domain.models.transit_leg import TransitLeg, TransitStop

__all__ = [
    "Coordinate",
    "ErrorDetails",
    "MoodTags",
    "PlaceResult",
    "RestaurantHit",
    "SearchMode",
    "SearchRequest",
    "SearchStage",
    "Station",
    "TransitLeg",
    "TransitStop",
]
