"""
Path Session Module - Orchestrates input, calculation and persistence.

Holds everything the window displays about the current path: the raw
input text, the validated waypoints, the total step count, the decomposed
movements and the last error. The pathing functions are stateless and are
called again on every calculation.

For the distance and decomposition logic, see the src.pathing package.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from src.pathing import (
    DegenerateMovementError, Movement, Point, decompose_movements, minimum_steps
)
from src.storage import CoordinateStore
from src.validation import WaypointValidationError, parse_waypoints

logger = logging.getLogger(__name__)


__all__ = [
    "PathSuccess",
    "PathFailure",
    "PathResult",
    "calculate_path",
    "PathSession",
    "EXAMPLE_WAYPOINTS",
]


# Loaded by the "Load example" button
EXAMPLE_WAYPOINTS: List[Point] = [Point(0, 0), Point(1, 2), Point(1, 3)]

UNEXPECTED_ERROR = "errors.unexpected"


@dataclass(frozen=True)
class PathSuccess:
    """
    Validated input and its computed path.

    Attributes:
        coordinates: Waypoints in visiting order
        total_steps: Minimum moves to visit them in order
        movements: One movement per consecutive pair
    """
    coordinates: List[Point]
    total_steps: int
    movements: List[Movement] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class PathFailure:
    """
    Input that could not be calculated.

    Attributes:
        error: i18n message key
        details: Optional extra context for logs and tooltips
    """
    error: str
    details: Optional[str] = None

    @property
    def success(self) -> bool:
        return False


PathResult = Union[PathSuccess, PathFailure]


def format_coordinates(points: Sequence[Point]) -> str:
    """Pretty-print points as the JSON accepted by the input box."""
    return json.dumps([p.to_dict() for p in points], indent=2)


def calculate_path(coordinates_json: str) -> PathResult:
    """
    Validate raw JSON input and compute its path.

    Steps:
        1. Parse and validate the text into waypoints
        2. Compute the minimum step count
        3. Decompose into movements

    Args:
        coordinates_json: JSON list of {"x", "y"} objects

    Returns:
        PathSuccess or PathFailure with an i18n error key
    """
    try:
        coordinates = parse_waypoints(coordinates_json)
    except WaypointValidationError as e:
        logger.info(f"Rejected input: {e}")
        return PathFailure(error=e.message_key, details=e.details)

    try:
        total_steps = minimum_steps(coordinates)
        movements = decompose_movements(coordinates)
    except DegenerateMovementError as e:
        # parse_waypoints rejects consecutive duplicates, so this is a bug
        logger.exception("Degenerate movement after validation")
        return PathFailure(error=UNEXPECTED_ERROR, details=str(e))

    logger.info(f"Path calculated: {len(coordinates)} waypoints, {total_steps} steps, "
                f"{len(movements)} movements")
    return PathSuccess(coordinates=coordinates, total_steps=total_steps, movements=movements)


class PathSession:
    """
    Current path state for the visualizer window.

    State transitions:
        set_coordinates_json(): input edited, error cleared
        calculate(): success replaces the path and persists it,
                     failure keeps the previous path and sets error
        load_saved(): restores the last persisted path into the input
    """

    def __init__(self, store: Optional[CoordinateStore] = None):
        """
        Initialize an empty session.

        Args:
            store: Where successful paths are persisted (None disables persistence)
        """
        self._store = store

        self.coordinates_json: str = "[]"
        self.coordinates: List[Point] = []
        self.total_steps: int = 0
        self.movements: List[Movement] = []
        self.error: Optional[str] = None
        self.error_details: Optional[str] = None

    @property
    def has_path(self) -> bool:
        """True if at least one waypoint has been calculated."""
        return len(self.coordinates) > 0

    def set_coordinates_json(self, text: str) -> None:
        """
        Replace the raw input text.

        Args:
            text: JSON text as typed by the user
        """
        self.coordinates_json = text
        self.error = None
        self.error_details = None

    def load_example(self) -> None:
        """Put the example waypoints into the input box."""
        self.set_coordinates_json(format_coordinates(EXAMPLE_WAYPOINTS))

    def calculate(self) -> PathResult:
        """
        Calculate the path for the current input.

        Returns:
            The PathResult that was applied to the session
        """
        result = calculate_path(self.coordinates_json)

        if isinstance(result, PathSuccess):
            self.coordinates = result.coordinates
            self.total_steps = result.total_steps
            self.movements = result.movements
            self.error = None
            self.error_details = None
            if self._store is not None:
                self._store.save(self.coordinates)
        else:
            self.error = result.error
            self.error_details = result.details

        return result

    def load_saved(self) -> bool:
        """
        Restore the last persisted path.

        Returns:
            True if a non-empty saved path was restored
        """
        if self._store is None:
            return False

        saved = self._store.load()
        if not saved:
            return False

        self.set_coordinates_json(format_coordinates(saved))
        result = self.calculate()
        if isinstance(result, PathFailure):
            logger.warning(f"Saved coordinates could not be recalculated: {result.error}")
            return False

        logger.info(f"Restored {len(saved)} saved coordinates")
        return True

    def movement(self, step_number: int) -> Optional[Movement]:
        """
        Get a movement by its 1-based step number.

        Returns:
            Movement, or None if out of range
        """
        if 1 <= step_number <= len(self.movements):
            return self.movements[step_number - 1]
        return None

    def sequence_text(self) -> str:
        """Waypoints joined with arrows, e.g. "(0,0) → (1,2)"."""
        return " → ".join(str(p) for p in self.coordinates)
