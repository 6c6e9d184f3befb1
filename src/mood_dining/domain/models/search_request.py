"""Search request domain model."""

from dataclasses import dataclass
from enum import Enum

from mood_dining.domain.models.coordinate import Coordinate

MIN_STATION_COUNT = 1
MAX_STATION_COUNT = 5
DEFAULT_STATION_COUNT = 2

MIN_RADIUS_METERS = 500
MAX_RADIUS_METERS = 5000
DEFAULT_RADIUS_METERS = 1000


class SearchMode(str, Enum):
    """How the search area is determined."""

    RADIUS = "radius"
    STATION_RANGE = "station"


@dataclass(frozen=True)
class SearchRequest:
    """A single user search, read-only through the pipeline."""

    mode: SearchMode
    origin: Coordinate
    query_tags: tuple[str, ...] = ()
    radius_meters: int | None = None
    station_count: int | None = None
    query_text: str = ""  # free-text query from mood conversion, optional
