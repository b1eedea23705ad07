"""
Coordinate Store - Persists the last calculated waypoint list.
"""

import json
import logging
from pathlib import Path
from typing import List, Sequence

from src.pathing import Point
from src.validation import WaypointValidationError, validate_coordinates

logger = logging.getLogger(__name__)


class CoordinateStore:
    """
    JSON-file storage for the most recent waypoint list.

    Never raises to callers: a failed save returns False and a failed or
    corrupt load returns an empty list, both with a logged warning.
    """

    def __init__(self, path: Path):
        """
        Args:
            path: JSON file to read and write
        """
        self.path = Path(path)

    def save(self, points: Sequence[Point]) -> bool:
        """
        Persist a waypoint list.

        Args:
            points: Waypoints to save

        Returns:
            True if the file was written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump([p.to_dict() for p in points], f, indent=2)
            logger.debug(f"Saved {len(points)} coordinates to {self.path}")
            return True
        except (OSError, TypeError) as e:
            logger.warning(f"Failed to save coordinates: {e}")
            return False

    def load(self) -> List[Point]:
        """
        Load the last saved waypoint list.

        Returns:
            Saved points, or an empty list if nothing valid is stored
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            points = validate_coordinates(data, allow_empty=True)
        except (OSError, json.JSONDecodeError, WaypointValidationError) as e:
            logger.warning(f"Ignoring stored coordinates in {self.path}: {e}")
            return []

        logger.debug(f"Loaded {len(points)} coordinates from {self.path}")
        return points
