"""Restaurant hit domain model."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RestaurantHit:
    """A single restaurant returned by a restaurant search."""

    id: str
    name: str
    rating: float = 0.0  # 0 means unknown
    price_tier: int = 0  # 0 means unknown, otherwise 1..4
    categories: frozenset[str] = field(default_factory=frozenset)
    address_text: str = ""
    photo_refs: tuple[str, ...] = ()
    distance_from_user: int | None = None
    origin_station_name: str | None = None
    external_map_link: str = ""

    @property
    def identity(self) -> str:
        """Key used for deduplication."""
        return self.id
