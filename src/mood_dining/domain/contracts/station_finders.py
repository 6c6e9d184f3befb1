"""Station lookup contracts."""

from typing import Protocol

from mood_dining.domain.models.coordinate import Coordinate
from mood_dining.domain.models.station import Station


class NearestStationFinder(Protocol):
    """Finds the transit station nearest to a point."""

    async def locate_nearest(self, origin: Coordinate) -> Station:
        ...


class StationRangeFinder(Protocol):
    """Lists a start station followed by up to N nearby stations."""

    async def expand(self, start: Station, station_count: int) -> list[Station]:
        ...
