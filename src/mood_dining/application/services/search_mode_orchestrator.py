"""Top-level search use case: radius search or station-range search."""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from mood_dining.application.retry import RetryPolicy
from mood_dining.application.services.result_aggregator import ResultAggregator
from mood_dining.application.services.station_restaurant_fanout import (
    DEFAULT_PER_STATION_RADIUS_METERS,
    build_query,
)
from mood_dining.domain.errors import (
    InvalidRequest,
    UpstreamCallError,
    UpstreamUnavailable,
)
from mood_dining.domain.models import RestaurantHit, SearchMode, SearchRequest, SearchStage
from mood_dining.domain.models.search_request import (
    MAX_RADIUS_METERS,
    MAX_STATION_COUNT,
    MIN_RADIUS_METERS,
    MIN_STATION_COUNT,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from mood_dining.application.services.station_locator import StationLocator
    from mood_dining.application.services.station_range_expander import StationRangeExpander
    from mood_dining.application.services.station_restaurant_fanout import (
        StationRestaurantFanout,
    )
    from mood_dining.domain.ports import RestaurantSearch

StageListener = Callable[[SearchStage], None]


def validate_request(request: SearchRequest) -> int:
    """Check the request preconditions.

    Returns:
        The validated radius in meters (radius mode) or station count.

    Raises:
        InvalidRequest: The origin, radius or station count is out of bounds.
    """
    if not request.origin.is_valid():
        raise InvalidRequest(
            "origin is not a valid coordinate",
            latitude=request.origin.latitude,
            longitude=request.origin.longitude,
        )

    if request.mode is SearchMode.RADIUS:
        radius = request.radius_meters
        if radius is None or not MIN_RADIUS_METERS <= radius <= MAX_RADIUS_METERS:
            raise InvalidRequest(
                f"radius_meters must be between {MIN_RADIUS_METERS} and {MAX_RADIUS_METERS}",
                radius_meters=radius,
            )
        return radius
    if request.mode is SearchMode.STATION_RANGE:
        count = request.station_count
        if count is None or not MIN_STATION_COUNT <= count <= MAX_STATION_COUNT:
            raise InvalidRequest(
                f"station_count must be between {MIN_STATION_COUNT} and {MAX_STATION_COUNT}",
                station_count=count,
            )
        return count
    raise InvalidRequest(f"Unknown search mode: {request.mode}")


class SearchModeOrchestrator:
    """Runs a search request through the pipeline selected by its mode."""

    def __init__(
        self,
        restaurant_search: "RestaurantSearch",
        locator: "StationLocator",
        expander: "StationRangeExpander",
        fanout: "StationRestaurantFanout",
        aggregator: ResultAggregator | None = None,
        retry_policy: RetryPolicy | None = None,
        per_station_radius_meters: int = DEFAULT_PER_STATION_RADIUS_METERS,
    ) -> None:
        self._restaurant_search = restaurant_search
        self._locator = locator
        self._expander = expander
        self._fanout = fanout
        self._aggregator = aggregator or ResultAggregator()
        self._retry_policy = retry_policy or RetryPolicy()
        self._per_station_radius_meters = per_station_radius_meters

    async def run(
        self, request: SearchRequest, on_stage: StageListener | None = None
    ) -> list[RestaurantHit]:
        """Run one search and return at most 20 distinct hits.

        Raises:
            InvalidRequest: The request violates its bounds.
            NoStationFound: Station-range mode found no station near the origin.
            UpstreamUnavailable: A required collaborator failed completely.
        """
        bound = validate_request(request)

        if request.mode is SearchMode.RADIUS:
            return await self._run_radius(request, bound)

        def enter(stage: SearchStage) -> None:
            logger.debug(f"Station-range search stage: {stage.value}")
            if on_stage is not None:
                on_stage(stage)

        try:
            return await self._run_station_range(request, bound, enter)
        except Exception:
            enter(SearchStage.FAILED)
            raise

    async def _run_radius(self, request: SearchRequest, radius: int) -> list[RestaurantHit]:
        """Single search around the origin; keeps the collaborator's order."""
        query = build_query(request.query_tags, request.query_text)
        try:
            hits = await self._retry_policy.call(
                lambda: self._restaurant_search.search_restaurants(
                    request.origin, radius, query, request.origin
                ),
                description="radius restaurant search",
            )
        except UpstreamCallError as e:
            raise UpstreamUnavailable(
                f"Restaurant search failed: {e}", stage="radius_search"
            ) from e
        return self._aggregator.collapse(hits)

    async def _run_station_range(
        self, request: SearchRequest, station_count: int, enter: StageListener
    ) -> list[RestaurantHit]:
        enter(SearchStage.LOCATING)
        start = await self._locator.locate_nearest(request.origin)

        enter(SearchStage.EXPANDING)
        stations = await self._expander.expand(start, station_count)
        logger.info(
            f"Searching around {len(stations)} station(s): {', '.join(s.name for s in stations)}"
        )

        enter(SearchStage.FANNING_OUT)
        hits = await self._fanout.search_around(
            stations,
            request.query_tags,
            per_station_radius_meters=self._per_station_radius_meters,
            query_text=request.query_text,
            user_location=request.origin,
        )

        enter(SearchStage.AGGREGATING)
        results = self._aggregator.aggregate(hits, request.query_tags)

        enter(SearchStage.DONE)
        return results
