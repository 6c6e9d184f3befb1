"""Station domain model."""

from dataclasses import dataclass

from mood_dining.domain.models.coordinate import Coordinate


@dataclass(frozen=True)
class Station:
    """Represents a transit station discovered during one search."""

    id: str
    name: str
    coordinate: Coordinate
    distance_from_origin: int = 0  # meters, from whatever point the finder measured

    @property
    def identity(self) -> str:
        """Key used for deduplication.

        Falls back to name and coordinate when the upstream API gave no id,
        which happens for transit stops reported by routing responses.
        """
        if self.id:
            return self.id
        return f"{self.name}_{self.coordinate.latitude}_{self.coordinate.longitude}"
