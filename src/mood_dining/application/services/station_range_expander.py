"""Service that expands a starting station into a range of nearby stations."""

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from mood_dining.application.retry import RetryPolicy
from mood_dining.domain.errors import (
    InvalidRequest,
    NoRouteFound,
    PartialStationFailure,
    RoutingUnavailable,
    UpstreamCallError,
)
from mood_dining.domain.geo import haversine_distance, offset_coordinate
from mood_dining.domain.models import Coordinate, Station, TransitStop
from mood_dining.domain.models.search_request import MAX_STATION_COUNT, MIN_STATION_COUNT
from mood_dining.domain.ports.nearby_place_search import TRANSIT_STATION_CATEGORY

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from mood_dining.domain.models import PlaceResult
    from mood_dining.domain.ports import NearbyPlaceSearch, TransitRouting

# North, east, south, west
PROBE_BEARINGS = (0.0, 90.0, 180.0, 270.0)
STATION_RANGE_STEP_METERS = 2000


class StationRangeExpander:
    """Finds up to N further stations outward from a starting station.

    Routed expansion traces transit routes towards synthetic destinations
    around the start and collects the stops along them. When routing is not
    configured, fails everywhere or yields nothing, a radial place search
    around the start is used instead.
    """

    def __init__(
        self,
        place_search: "NearbyPlaceSearch",
        routing: "TransitRouting | None" = None,
        retry_policy: RetryPolicy | None = None,
        range_step_meters: int = STATION_RANGE_STEP_METERS,
    ) -> None:
        """Initialize the expander.

        Args:
            place_search: Place search used by the radial fallback.
            routing: Transit routing for routed expansion, None if not configured.
            retry_policy: Retry policy wrapped around every external call.
            range_step_meters: Search radius added per requested station.
        """
        self._place_search = place_search
        self._routing = routing
        self._retry_policy = retry_policy or RetryPolicy()
        self._range_step_meters = range_step_meters

    async def expand(self, start: Station, station_count: int) -> list[Station]:
        """Return ``start`` followed by up to ``station_count`` stations ordered by distance.

        Never returns an empty list: if no other station can be found the
        result is ``[start]``.

        Raises:
            InvalidRequest: ``station_count`` is outside the supported range.
        """
        if not MIN_STATION_COUNT <= station_count <= MAX_STATION_COUNT:
            raise InvalidRequest(
                f"station_count must be between {MIN_STATION_COUNT} and {MAX_STATION_COUNT}",
                station_count=station_count,
            )

        search_radius = station_count * self._range_step_meters

        if self._routing is None:
            logger.info("Transit routing not configured, using radial station search")
        else:
            candidates = await self._routed_candidates(self._routing, start, search_radius)
            nearest = self._nearest_candidates(start, candidates, station_count)
            if nearest:
                logger.debug(f"Routed expansion from {start.name} found {len(nearest)} station(s)")
                return [start, *nearest]
            logger.info(f"Routed expansion from {start.name} found nothing, using radial search")

        return await self._radial_fallback(start, station_count, search_radius)

    async def _routed_candidates(
        self, routing: "TransitRouting", start: Station, search_radius: int
    ) -> list[Station]:
        """Probe all directions concurrently and collect the stops on each route.

        Results are merged in bearing order, not completion order.
        """
        destinations = [
            offset_coordinate(start.coordinate, bearing, search_radius)
            for bearing in PROBE_BEARINGS
        ]
        results = await asyncio.gather(
            *(
                self._probe_direction(routing, start, bearing, destination)
                for bearing, destination in zip(PROBE_BEARINGS, destinations, strict=True)
            )
        )

        failed = sum(1 for result in results if result is None)
        if failed:
            failure = PartialStationFailure(
                f"{failed} of {len(results)} routing probes failed",
                stage="expanding",
                station_id=start.id,
                station_name=start.name,
            )
            logger.warning(f"{failure.code}: {failure.message} (start: {start.name})")

        candidates: list[Station] = []
        for stations in results:
            if stations:
                candidates.extend(stations)
        return candidates

    async def _probe_direction(
        self,
        routing: "TransitRouting",
        start: Station,
        bearing: float,
        destination: Coordinate,
    ) -> list[Station] | None:
        """Route towards one synthetic destination.

        Returns None when the probe failed, so that one failing direction only
        removes its own contribution.
        """
        try:
            legs = await self._retry_policy.call(
                lambda: routing.route(start.coordinate, destination),
                description=f"routing probe {bearing:.0f}deg from {start.name}",
            )
        except NoRouteFound:
            logger.debug(f"No transit route {bearing:.0f}deg from {start.name}")
            return []
        except RoutingUnavailable as e:
            logger.warning(f"Transit routing unavailable (stage=expanding): {e}")
            return None
        except Exception as e:
            logger.warning(
                f"Routing probe {bearing:.0f}deg failed "
                f"(stage=expanding, station_id={start.id}, station={start.name}): {e}"
            )
            return None

        stops: list[TransitStop] = []
        for leg in legs:
            stops.append(leg.departure_stop)
            stops.append(leg.arrival_stop)
        return [self._station_from_stop(start, stop) for stop in stops]

    @staticmethod
    def _station_from_stop(start: Station, stop: TransitStop) -> Station:
        return Station(
            id=stop.id,
            name=stop.name,
            coordinate=stop.coordinate,
            distance_from_origin=haversine_distance(start.coordinate, stop.coordinate),
        )

    @staticmethod
    def _nearest_candidates(
        start: Station, candidates: Iterable[Station], station_count: int
    ) -> list[Station]:
        """Drop duplicates and the start itself, then keep the nearest ones."""
        seen = {start.identity}
        unique: list[Station] = []
        for station in candidates:
            if station.identity in seen:
                continue
            seen.add(station.identity)
            unique.append(station)

        unique.sort(key=lambda s: s.distance_from_origin)
        return unique[:station_count]

    async def _radial_fallback(
        self, start: Station, station_count: int, search_radius: int
    ) -> list[Station]:
        """Search stations within ``search_radius`` of the start."""
        try:
            places = await self._retry_policy.call(
                lambda: self._place_search.search(
                    start.coordinate, search_radius, TRANSIT_STATION_CATEGORY
                ),
                description=f"radial station search around {start.name}",
            )
        except UpstreamCallError as e:
            logger.warning(
                f"Radial station search failed "
                f"(stage=expanding, station_id={start.id}, station={start.name}): {e}"
            )
            return [start]

        candidates = [self._station_from_place(start, place) for place in places]
        return [start, *self._nearest_candidates(start, candidates, station_count)]

    @staticmethod
    def _station_from_place(start: Station, place: "PlaceResult") -> Station:
        return Station(
            id=place.id,
            name=place.name,
            coordinate=place.coordinate,
            distance_from_origin=haversine_distance(start.coordinate, place.coordinate),
        )
