"""Application services (use cases) for restaurant search."""

from mood_dining.application.services.mood_search_service import (
    MoodSearchResult,
    MoodSearchService,
)
from mood_dining.application.services.result_aggregator import ResultAggregator
from mood_dining.application.services.search_mode_orchestrator import SearchModeOrchestrator
from mood_dining.application.services.station_locator import StationLocator
from mood_dining.application.services.station_range_expander import StationRangeExpander
from mood_dining.application.services.station_restaurant_fanout import (
    StationRestaurantFanout,
)

__all__ = [
    "MoodSearchResult",
    "MoodSearchService",
    "ResultAggregator",
    "SearchModeOrchestrator",
    "StationLocator",
    "StationRangeExpander",
    "StationRestaurantFanout",
]
