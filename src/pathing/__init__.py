"""
Pathing Package - Chebyshev distance and movement decomposition.

Pure, stateless functions over ordered waypoint lists. Nothing in this
package validates input or performs I/O; callers pass already-validated
non-negative integer points (see src.validation).

Public API:
    - Point: Immutable grid coordinate
    - Direction: The 8 compass directions
    - Movement: One transition between consecutive waypoints
    - chebyshev_distance(): Moves between two points
    - minimum_steps(): Total moves for a waypoint list
    - classify_direction(): Compass direction of a displacement
    - decompose_movements(): Movements for a waypoint list
    - BoardLayout: Board dimensions and cell roles for display
    - build_educational_context(): Breakdown of a single movement

Usage:
    from src.pathing import Point, minimum_steps, decompose_movements

    waypoints = [Point(0, 0), Point(1, 2), Point(3, 1)]
    total = minimum_steps(waypoints)            # 4
    for movement in decompose_movements(waypoints):
        print(movement.step_number, movement.direction.value)
"""

from .point import Point
from .direction import Direction, DegenerateMovementError, classify_direction
from .distance import chebyshev_distance, minimum_steps
from .movement import Movement, decompose_movements
from .board import BoardLayout, CellInfo, CellRole, MAX_RENDERED_SIZE, MIN_BOARD_SIZE
from .analysis import EducationalContext, MovementType, build_educational_context

__all__ = [
    # Data structures
    "Point",
    "Direction",
    "Movement",
    # Distance engine
    "chebyshev_distance",
    "minimum_steps",
    # Movement decomposer
    "classify_direction",
    "decompose_movements",
    "DegenerateMovementError",
    # Display helpers
    "BoardLayout",
    "CellInfo",
    "CellRole",
    "MIN_BOARD_SIZE",
    "MAX_RENDERED_SIZE",
    # Analysis
    "EducationalContext",
    "MovementType",
    "build_educational_context",
]
