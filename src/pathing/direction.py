"""
Direction Module - The 8 compass directions and their classification.
"""

from enum import Enum
from typing import Dict, Tuple

from .point import Point


class DegenerateMovementError(ValueError):
    """
    Raised when a movement has no displacement (from == to).

    A stationary pair has no compass direction, so it is rejected
    instead of being mapped onto an arbitrary one.
    """

    def __init__(self, origin: Point, target: Point, step_number: int = 0):
        self.origin = origin
        self.target = target
        self.step_number = step_number
        where = f" at step {step_number}" if step_number else ""
        super().__init__(
            f"Zero-length movement{where}: {origin} -> {target} has no direction"
        )


class Direction(Enum):
    """
    Compass direction of a single move.

    North is increasing y, east is increasing x.
    """
    N = "N"
    NE = "NE"
    E = "E"
    SE = "SE"
    S = "S"
    SW = "SW"
    W = "W"
    NW = "NW"

    @property
    def vector(self) -> Tuple[int, int]:
        """Unit vector (dx, dy) for this direction."""
        return _VECTORS[self]

    @property
    def arrow(self) -> str:
        """Arrow glyph used by the steps list."""
        return _ARROWS[self]


_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.N: (0, 1),
    Direction.NE: (1, 1),
    Direction.E: (1, 0),
    Direction.SE: (1, -1),
    Direction.S: (0, -1),
    Direction.SW: (-1, -1),
    Direction.W: (-1, 0),
    Direction.NW: (-1, 1),
}

_ARROWS: Dict[Direction, str] = {
    Direction.N: "↑",
    Direction.NE: "↗",
    Direction.E: "→",
    Direction.SE: "↘",
    Direction.S: "↓",
    Direction.SW: "↙",
    Direction.W: "←",
    Direction.NW: "↖",
}

# Sign pair (sign_dx, sign_dy) -> direction; (0, 0) is deliberately absent
_SIGN_TABLE: Dict[Tuple[int, int], Direction] = {
    vector: direction for direction, vector in _VECTORS.items()
}


def _sign(value: int) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def classify_direction(origin: Point, target: Point) -> Direction:
    """
    Classify the displacement from origin to target into one of 8 directions.

    Each coordinate delta is reduced to its sign and the resulting pair is
    looked up in the octant table.

    Args:
        origin: Starting point
        target: End point

    Returns:
        Direction of the displacement

    Raises:
        DegenerateMovementError: If origin == target
    """
    sign_pair = (_sign(target.x - origin.x), _sign(target.y - origin.y))
    if sign_pair == (0, 0):
        raise DegenerateMovementError(origin, target)
    return _SIGN_TABLE[sign_pair]
