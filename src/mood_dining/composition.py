"""Wiring of collaborators and services, shared by the server and the CLI."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mood_dining.adapters.api_rate_limiter import ApiRateLimiter
from mood_dining.adapters.demo import DemoPlaceSearch, DemoRestaurantSearch, DemoTransitRouting
from mood_dining.adapters.gemini_api import GeminiMoodConverter, KeywordMoodConverter
from mood_dining.adapters.google_api import (
    GoogleMapsHttpClient,
    GooglePlaceSearch,
    GoogleRestaurantSearch,
    GoogleTransitRouting,
)
from mood_dining.application.retry import RetryPolicy
from mood_dining.application.services import (
    MoodSearchService,
    ResultAggregator,
    SearchModeOrchestrator,
    StationLocator,
    StationRangeExpander,
    StationRestaurantFanout,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

    from mood_dining.adapters.config import AppConfig
    from mood_dining.domain.ports import (
        MoodToTags,
        NearbyPlaceSearch,
        RestaurantSearch,
        TransitRouting,
    )


@dataclass
class Collaborators:
    place_search: "NearbyPlaceSearch"
    routing: "TransitRouting | None"
    restaurant_search: "RestaurantSearch"
    mood_converter: "MoodToTags"


@dataclass
class Services:
    mood_search: MoodSearchService
    orchestrator: SearchModeOrchestrator
    locator: StationLocator
    expander: StationRangeExpander


def build_collaborators(config: "AppConfig", session: "ClientSession") -> Collaborators:
    """Create the external collaborators, or their demo stand-ins.

    Demo collaborators are used when ``USE_DEMO_DATA`` is set or no Google
    Places key is configured. Routing is left out without a Directions key,
    which makes station expansion use the radial search only.
    """
    if config.demo_mode:
        logger.info("Using demo data instead of Google APIs")
        return Collaborators(
            place_search=DemoPlaceSearch(),
            routing=DemoTransitRouting(),
            restaurant_search=DemoRestaurantSearch(),
            mood_converter=KeywordMoodConverter(),
        )

    places_key = config.google_places_api_key or ""
    places_client = GoogleMapsHttpClient(
        places_key,
        session=session,
        rate_limiter=ApiRateLimiter("google_places", config.google_api_min_delay_seconds),
        timeout_seconds=config.http_timeout_seconds,
    )

    routing: GoogleTransitRouting | None = None
    if config.google_directions_api_key:
        directions_client = GoogleMapsHttpClient(
            config.google_directions_api_key,
            session=session,
            rate_limiter=ApiRateLimiter("google_directions", config.google_api_min_delay_seconds),
            timeout_seconds=config.http_timeout_seconds,
        )
        routing = GoogleTransitRouting(directions_client, config.google_directions_api_key)
    else:
        logger.info("No Directions API key configured, station expansion uses radial search")

    mood_converter: GeminiMoodConverter | KeywordMoodConverter
    if config.gemini_api_key:
        mood_converter = GeminiMoodConverter(
            config.gemini_api_key,
            session=session,
            model=config.gemini_model,
            rate_limiter=ApiRateLimiter("gemini", config.gemini_min_delay_seconds),
            timeout_seconds=config.http_timeout_seconds,
        )
    else:
        logger.info("No Gemini API key configured, using keyword mood conversion")
        mood_converter = KeywordMoodConverter()

    return Collaborators(
        place_search=GooglePlaceSearch(places_client),
        routing=routing,
        restaurant_search=GoogleRestaurantSearch(places_client, places_key),
        mood_converter=mood_converter,
    )


def build_services(config: "AppConfig", collaborators: Collaborators) -> Services:
    retry_policy = RetryPolicy(
        max_attempts=config.retry_max_attempts,
        base_delay_seconds=config.retry_base_delay_seconds,
    )
    locator = StationLocator(
        collaborators.place_search,
        retry_policy=retry_policy,
        search_radius_meters=config.station_search_radius_meters,
    )
    expander = StationRangeExpander(
        collaborators.place_search,
        routing=collaborators.routing,
        retry_policy=retry_policy,
        range_step_meters=config.station_range_step_meters,
    )
    orchestrator = SearchModeOrchestrator(
        collaborators.restaurant_search,
        locator,
        expander,
        StationRestaurantFanout(collaborators.restaurant_search, retry_policy=retry_policy),
        aggregator=ResultAggregator(max_results=config.max_results),
        retry_policy=retry_policy,
        per_station_radius_meters=config.per_station_radius_meters,
    )
    mood_search = MoodSearchService(
        collaborators.mood_converter, orchestrator, retry_policy=retry_policy
    )
    return Services(
        mood_search=mood_search,
        orchestrator=orchestrator,
        locator=locator,
        expander=expander,
    )
