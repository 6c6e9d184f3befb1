"""Service that searches restaurants around each station of a range."""

import asyncio
import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from mood_dining.application.retry import RetryPolicy
from mood_dining.domain.errors import PartialStationFailure, UpstreamUnavailable
from mood_dining.domain.models import Coordinate, RestaurantHit, Station

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mood_dining.domain.ports import RestaurantSearch

DEFAULT_PER_STATION_RADIUS_METERS = 500


def build_query(query_tags: "Sequence[str]", query_text: str = "") -> str:
    """Build the restaurant search query from the mood conversion output."""
    if query_text.strip():
        return query_text.strip()
    return " ".join(tag for tag in query_tags if tag.strip())


class StationRestaurantFanout:
    """Issues one restaurant search per station and concatenates the results."""

    def __init__(
        self,
        restaurant_search: "RestaurantSearch",
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self._restaurant_search = restaurant_search
        self._retry_policy = retry_policy or RetryPolicy()

    async def search_around(
        self,
        stations: "Sequence[Station]",
        query_tags: "Sequence[str]",
        per_station_radius_meters: int = DEFAULT_PER_STATION_RADIUS_METERS,
        query_text: str = "",
        user_location: Coordinate | None = None,
    ) -> list[RestaurantHit]:
        """Search around every distinct station, tolerating individual failures.

        Searches run concurrently; the concatenated result follows the order
        of ``stations``, and every hit carries the name of its station.

        Raises:
            UpstreamUnavailable: Every station search failed.
        """
        unique_stations: list[Station] = []
        processed: set[str] = set()
        for station in stations:
            if station.identity in processed:
                logger.debug(f"Skipping repeated station {station.name}")
                continue
            processed.add(station.identity)
            unique_stations.append(station)

        if not unique_stations:
            return []

        query = build_query(query_tags, query_text)
        results = await asyncio.gather(
            *(
                self._search_station(station, query, per_station_radius_meters, user_location)
                for station in unique_stations
            )
        )

        failed = [s for s, hits in zip(unique_stations, results, strict=True) if hits is None]
        if len(failed) == len(unique_stations):
            raise UpstreamUnavailable(
                "Restaurant search failed for every station",
                stage="fanning_out",
                stations=[s.name for s in failed],
            )
        if failed:
            failure = PartialStationFailure(
                f"{len(failed)} of {len(unique_stations)} station searches failed",
                stage="fanning_out",
                stations=[s.name for s in failed],
            )
            logger.warning(f"{failure.code}: {failure.message}: {failure.context['stations']}")

        all_hits: list[RestaurantHit] = []
        for hits in results:
            if hits:
                all_hits.extend(hits)
        return all_hits

    async def _search_station(
        self,
        station: Station,
        query: str,
        radius_meters: int,
        user_location: Coordinate | None,
    ) -> list[RestaurantHit] | None:
        """Search one station; returns None if the search failed."""
        try:
            hits = await self._retry_policy.call(
                lambda: self._restaurant_search.search_restaurants(
                    station.coordinate, radius_meters, query, user_location
                ),
                description=f"restaurant search near {station.name}",
            )
        except Exception as e:
            logger.warning(
                f"Restaurant search failed "
                f"(stage=fanning_out, station_id={station.id}, station={station.name}): {e}"
            )
            return None

        return [replace(hit, origin_station_name=station.name) for hit in hits]
