"""Place search result domain model."""

from dataclasses import dataclass, field

from mood_dining.domain.models.coordinate import Coordinate


@dataclass(frozen=True)
class PlaceResult:
    """A place returned by a nearby place search, in the collaborator's order."""

    id: str
    name: str
    coordinate: Coordinate
    rating: float | None = None
    price_tier: int | None = None
    categories: frozenset[str] = field(default_factory=frozenset)
    address_text: str = ""
    photo_refs: tuple[str, ...] = ()
