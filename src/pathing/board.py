"""
Board Layout Module - Grid dimensions and cell roles for displaying a path.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .point import Point


# Smallest board shown, also used when there are no waypoints
MIN_BOARD_SIZE = 8

# Largest board drawn cell by cell; bigger paths are reported as text only
MAX_RENDERED_SIZE = 64


class CellRole(Enum):
    """Display role of an occupied cell."""
    START = "start"
    INTERMEDIATE = "intermediate"
    END = "end"


@dataclass(frozen=True)
class CellInfo:
    """
    Occupied cell on the board.

    Attributes:
        order: 1-based visiting order of the first visit to this cell
        role: START, INTERMEDIATE or END
    """
    order: int
    role: CellRole


@dataclass(frozen=True)
class BoardLayout:
    """
    Immutable board layout derived from a waypoint list.

    The board always leaves one empty row/column of padding past the
    largest coordinate and is never smaller than MIN_BOARD_SIZE.

    Attributes:
        width: Number of columns
        height: Number of rows
        cells: Occupied cells keyed by (x, y)
        waypoints: Waypoints the layout was built from
    """
    width: int
    height: int
    cells: Dict[Tuple[int, int], CellInfo] = field(default_factory=dict)
    waypoints: Tuple[Point, ...] = ()

    @classmethod
    def from_waypoints(cls, waypoints: Sequence[Point]) -> 'BoardLayout':
        """
        Build a layout for the given waypoints.

        Args:
            waypoints: Points in visiting order

        Returns:
            BoardLayout instance
        """
        if not waypoints:
            return cls(width=MIN_BOARD_SIZE, height=MIN_BOARD_SIZE)

        max_x = max(p.x for p in waypoints)
        max_y = max(p.y for p in waypoints)
        width = max(max_x + 2, MIN_BOARD_SIZE)
        height = max(max_y + 2, MIN_BOARD_SIZE)

        last = len(waypoints) - 1
        cells: Dict[Tuple[int, int], CellInfo] = {}
        for index, point in enumerate(waypoints):
            key = point.as_tuple()
            if key in cells:
                continue
            if index == 0:
                role = CellRole.START
            elif index == last:
                role = CellRole.END
            else:
                role = CellRole.INTERMEDIATE
            cells[key] = CellInfo(order=index + 1, role=role)

        return cls(width=width, height=height, cells=cells, waypoints=tuple(waypoints))

    @property
    def renderable(self) -> bool:
        """True if the board is small enough to draw every cell."""
        return self.width <= MAX_RENDERED_SIZE and self.height <= MAX_RENDERED_SIZE

    def get_cell(self, x: int, y: int) -> Optional[CellInfo]:
        """
        Get the occupied cell at (x, y).

        Returns:
            CellInfo or None if the cell is empty
        """
        return self.cells.get((x, y))

    def rows_top_down(self) -> List[int]:
        """Row indices in display order (highest y first)."""
        return list(range(self.height - 1, -1, -1))

    def to_display(self, x: int, y: int) -> Tuple[int, int]:
        """
        Convert grid coordinates to (column, display_row).

        Display row 0 is the top of the board.
        """
        return x, self.height - 1 - y
