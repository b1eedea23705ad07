"""
Movement Module - One directional transition between consecutive waypoints.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from .direction import DegenerateMovementError, Direction, classify_direction
from .point import Point


@dataclass(frozen=True)
class Movement:
    """
    A decomposed transition from one waypoint to the next.

    Attributes:
        origin: Waypoint the movement starts from
        target: Waypoint the movement ends at
        direction: Compass classification of target - origin
        step_number: 1-based position in the decomposed sequence
    """
    origin: Point
    target: Point
    direction: Direction
    step_number: int

    @property
    def dx(self) -> int:
        """Signed x displacement."""
        return self.target.x - self.origin.x

    @property
    def dy(self) -> int:
        """Signed y displacement."""
        return self.target.y - self.origin.y

    @property
    def cache_key(self) -> str:
        """Stable identity used to cache derived text for this movement."""
        return (
            f"{self.origin.x},{self.origin.y}-{self.target.x},{self.target.y}"
            f"-{self.direction.value}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.origin.to_dict(),
            "to": self.target.to_dict(),
            "direction": self.direction.value,
            "stepNumber": self.step_number,
        }

    def __str__(self) -> str:
        return f"Step {self.step_number}: {self.direction.value} {self.origin} -> {self.target}"


def decompose_movements(waypoints: Sequence[Point]) -> List[Movement]:
    """
    Decompose a waypoint list into one Movement per consecutive pair.

    Output order matches the visiting order and step numbers run 1..n-1.

    Args:
        waypoints: Points in visiting order

    Returns:
        List of Movement objects (empty for fewer than 2 waypoints)

    Raises:
        DegenerateMovementError: If two consecutive waypoints are equal
    """
    if len(waypoints) <= 1:
        return []

    movements: List[Movement] = []
    for step_number in range(1, len(waypoints)):
        origin = waypoints[step_number - 1]
        target = waypoints[step_number]
        try:
            direction = classify_direction(origin, target)
        except DegenerateMovementError:
            raise DegenerateMovementError(origin, target, step_number) from None

        movements.append(Movement(
            origin=origin,
            target=target,
            direction=direction,
            step_number=step_number,
        ))

    return movements
