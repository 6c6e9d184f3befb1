"""Adapters layer - external system integrations."""

from mood_dining.adapters.config import AppConfig
from mood_dining.adapters.gemini_api import GeminiMoodConverter, KeywordMoodConverter
from mood_dining.adapters.google_api import (
    GooglePlaceSearch,
    GoogleRestaurantSearch,
    GoogleTransitRouting,
)

__all__ = [
    "AppConfig",
    "GeminiMoodConverter",
    "GooglePlaceSearch",
    "GoogleRestaurantSearch",
    "GoogleTransitRouting",
    "KeywordMoodConverter",
]
