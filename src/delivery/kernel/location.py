"""Location value object: a cell on the fixed delivery grid.

"No location" is ``None``; a ``Location`` instance is always a valid cell.
"""

import random

from protean.exceptions import ValidationError
from protean.fields import Integer

from delivery.domain import delivery
from delivery.errors import require_value

MIN_X = 1
MAX_X = 10
MIN_Y = 1
MAX_Y = 10

# Process-wide default; callers that need reproducible draws pass their own.
_default_rng = random.Random()


def is_unset(location) -> bool:
    """True when no location was given."""
    return location is None


@delivery.value_object
class Location:
    """A grid coordinate, ``MIN_X..MAX_X`` by ``MIN_Y..MAX_Y`` inclusive.

    Equality is by coordinate pair. Distances are Manhattan distances since
    couriers move along grid axes only.
    """

    x: Integer(required=True, min_value=MIN_X, max_value=MAX_X)
    y: Integer(required=True, min_value=MIN_Y, max_value=MAX_Y)

    @classmethod
    def random(cls, rng: random.Random | None = None) -> "Location":
        """Draw a location uniformly from the grid."""
        rng = rng or _default_rng
        x = rng.randint(MIN_X, MAX_X)
        y = rng.randint(MIN_Y, MAX_Y)
        try:
            return cls(x=x, y=y)
        except ValidationError as exc:
            raise RuntimeError(f"Random location fell outside the grid: x={x}, y={y}") from exc

    def distance_to(self, other: "Location") -> int:
        """Manhattan distance to ``other``."""
        require_value("location", other)
        return abs(self.x - other.x) + abs(self.y - other.y)
