"""Demo TransitRouting."""

from mood_dining.adapters.demo.demo_data import DEMO_LINE_NAMES, DEMO_LINES, direction_of
from mood_dining.domain.models import Coordinate, TransitLeg, TransitStop

# Fraction of the way to the destination where the near stop sits
NEAR_STOP_FRACTION = 0.4


def _between(origin: Coordinate, destination: Coordinate, fraction: float) -> Coordinate:
    return Coordinate(
        latitude=origin.latitude + (destination.latitude - origin.latitude) * fraction,
        longitude=origin.longitude + (destination.longitude - origin.longitude) * fraction,
    )


class DemoTransitRouting:
    """Answers every route with one ride along the line of its direction."""

    async def route(self, origin: Coordinate, destination: Coordinate) -> list[TransitLeg]:
        direction = direction_of(origin, destination)
        (near_id, near_name), (far_id, far_name) = DEMO_LINES[direction]
        return [
            TransitLeg(
                departure_stop=TransitStop(
                    name=near_name,
                    coordinate=_between(origin, destination, NEAR_STOP_FRACTION),
                    id=near_id,
                ),
                arrival_stop=TransitStop(name=far_name, coordinate=destination, id=far_id),
                line_name=DEMO_LINE_NAMES[direction],
            )
        ]
