"""Transit leg domain models returned by routing collaborators."""

from dataclasses import dataclass

from mood_dining.domain.models.coordinate import Coordinate


@dataclass(frozen=True)
class TransitStop:
    """A stop where a transit leg departs or arrives."""

    name: str
    coordinate: Coordinate
    id: str = ""


@dataclass(frozen=True)
class TransitLeg:
    """One ride on a transit vehicle between two stops."""

    departure_stop: TransitStop
    arrival_stop: TransitStop
    line_name: str = ""
