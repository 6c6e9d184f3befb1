"""Contracts offered by the application layer to adapters."""

from mood_dining.domain.contracts.mood_conversion import MoodConversion
from mood_dining.domain.contracts.search_runner import SearchRunner
from mood_dining.domain.contracts.station_finders import NearestStationFinder, StationRangeFinder

__all__ = [
    "MoodConversion",
    "NearestStationFinder",
    "SearchRunner",
    "StationRangeFinder",
]
