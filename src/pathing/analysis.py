"""
Analysis Module - Educational breakdown of a single movement.
"""

from dataclasses import dataclass
from enum import Enum

from .movement import Movement


class MovementType(Enum):
    """
    Shape of a movement's displacement.

    DIAGONAL: both axes change by the same amount
    LINEAR: only one axis changes
    MIXED: some diagonal steps followed by straight steps
    """
    DIAGONAL = "diagonal"
    LINEAR = "linear"
    MIXED = "mixed"


@dataclass(frozen=True)
class EducationalContext:
    """
    Numbers behind one movement's step count.

    Attributes:
        dx: Absolute x delta
        dy: Absolute y delta
        chebyshev_distance: max(dx, dy)
        movement_type: Classification of the displacement
        formula: Human-readable formula, e.g. "max(|3|, |1|) = 3"
    """
    dx: int
    dy: int
    chebyshev_distance: int
    movement_type: MovementType
    formula: str

    @property
    def diagonal_steps(self) -> int:
        """Steps that advance both axes at once."""
        return min(self.dx, self.dy)

    @property
    def straight_steps(self) -> int:
        """Steps that advance only the longer axis."""
        return abs(self.dx - self.dy)


def build_educational_context(movement: Movement) -> EducationalContext:
    """
    Break a movement down into the quantities used to explain it.

    Args:
        movement: Movement to analyse

    Returns:
        EducationalContext for the movement
    """
    dx = abs(movement.dx)
    dy = abs(movement.dy)
    distance = max(dx, dy)

    if dx == dy and dx > 0:
        movement_type = MovementType.DIAGONAL
    elif dx == 0 or dy == 0:
        movement_type = MovementType.LINEAR
    else:
        movement_type = MovementType.MIXED

    return EducationalContext(
        dx=dx,
        dy=dy,
        chebyshev_distance=distance,
        movement_type=movement_type,
        formula=f"max(|{dx}|, |{dy}|) = {distance}",
    )
