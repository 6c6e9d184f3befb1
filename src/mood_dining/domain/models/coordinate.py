"""Coordinate domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A WGS84 position in decimal degrees."""

    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """Check that latitude and longitude are within their ranges."""
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0
