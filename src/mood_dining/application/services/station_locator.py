"""Service that finds the transit station nearest to a coordinate."""

import logging
from typing import TYPE_CHECKING

from mood_dining.application.retry import RetryPolicy
from mood_dining.domain.errors import NoStationFound, UpstreamCallError, UpstreamUnavailable
from mood_dining.domain.geo import haversine_distance
from mood_dining.domain.models import Coordinate, Station
from mood_dining.domain.ports.nearby_place_search import TRANSIT_STATION_CATEGORY

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from mood_dining.domain.ports import NearbyPlaceSearch

DEFAULT_STATION_SEARCH_RADIUS_METERS = 2000


class StationLocator:
    """Locates the nearest transit station using a nearby place search."""

    def __init__(
        self,
        place_search: "NearbyPlaceSearch",
        retry_policy: RetryPolicy | None = None,
        search_radius_meters: int = DEFAULT_STATION_SEARCH_RADIUS_METERS,
    ) -> None:
        self._place_search = place_search
        self._retry_policy = retry_policy or RetryPolicy()
        self._search_radius_meters = search_radius_meters

    async def locate_nearest(self, origin: Coordinate) -> Station:
        """Find the nearest transit station to ``origin``.

        The first result is taken as the nearest (the collaborator ranks by
        proximity), but its distance is computed here so that
        ``distance_from_origin`` always matches the haversine distance.

        Raises:
            NoStationFound: The place search returned no stations.
            UpstreamUnavailable: The place search failed after retries.
        """
        try:
            places = await self._retry_policy.call(
                lambda: self._place_search.search(
                    origin, self._search_radius_meters, TRANSIT_STATION_CATEGORY
                ),
                description="nearest station search",
            )
        except UpstreamCallError as e:
            raise UpstreamUnavailable(
                f"Station search failed: {e}",
                stage="locating",
                latitude=origin.latitude,
                longitude=origin.longitude,
            ) from e

        if not places:
            logger.info(
                f"No station within {self._search_radius_meters}m of "
                f"({origin.latitude}, {origin.longitude})"
            )
            raise NoStationFound(
                "No transit station found near the given location",
                latitude=origin.latitude,
                longitude=origin.longitude,
            )

        nearest = places[0]
        station = Station(
            id=nearest.id,
            name=nearest.name,
            coordinate=nearest.coordinate,
            distance_from_origin=haversine_distance(origin, nearest.coordinate),
        )
        logger.debug(f"Nearest station: {station.name} ({station.distance_from_origin}m)")
        return station
