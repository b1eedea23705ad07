"""
Board View Module for Chebyshev Path Visualizer

QPainter widget that draws the board grid, the waypoints and the path,
highlighting the selected step.
"""

import logging
from typing import List, Optional

from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QPointF, QRectF
from PyQt5.QtGui import QPainter, QColor, QPen, QBrush, QFont

from src.pathing import BoardLayout, CellRole, Movement

# Configure module logger
logger = logging.getLogger(__name__)


# Color constants - cells
EMPTY_FILL = QColor(249, 250, 251)
GRID_BORDER = QColor(229, 231, 235)
ROLE_FILLS = {
    CellRole.START: QColor(34, 197, 94),         # Green
    CellRole.INTERMEDIATE: QColor(59, 130, 246),  # Blue
    CellRole.END: QColor(239, 68, 68),            # Red
}

# Color constants - path
PATH_COLOR = QColor(37, 99, 235, 160)           # Semi-transparent blue
SELECTED_COLOR = QColor(255, 200, 0, 230)       # Bright yellow

PATH_THICKNESS = 3
SELECTED_THICKNESS = 5
MIN_CELL_PX = 12


class BoardView(QWidget):
    """
    Widget that renders a BoardLayout and its movements.

    The cell size follows the widget size; rows are drawn with the highest
    y at the top.
    """

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._layout: BoardLayout = BoardLayout.from_waypoints([])
        self._movements: List[Movement] = []
        self._selected_step: Optional[int] = None

        self.setMinimumSize(240, 240)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    def set_path(self, layout: BoardLayout, movements: List[Movement]):
        """
        Set the board to draw.

        Args:
            layout: Board layout
            movements: Movements drawn as lines
        """
        self._layout = layout
        self._movements = list(movements)
        self._selected_step = None
        self.update()  # Trigger repaint

    def set_selected_step(self, step_number: Optional[int]):
        """Highlight one movement, or None to clear."""
        self._selected_step = step_number
        self.update()

    @property
    def layout_info(self) -> BoardLayout:
        return self._layout

    def _cell_size(self) -> float:
        return max(
            MIN_CELL_PX,
            min(self.width() / self._layout.width, self.height() / self._layout.height)
        )

    def _cell_center(self, x: int, y: int, cell: float) -> QPointF:
        col, row = self._layout.to_display(x, y)
        return QPointF(col * cell + cell / 2, row * cell + cell / 2)

    def paintEvent(self, event):
        """Paint grid, path and waypoint labels."""
        layout = self._layout
        if not layout.renderable:
            # Window shows a text notice instead
            return
        cell = self._cell_size()

        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        # Grid
        painter.setPen(QPen(GRID_BORDER))
        for y in layout.rows_top_down():
            for x in range(layout.width):
                col, row = layout.to_display(x, y)
                info = layout.get_cell(x, y)
                fill = ROLE_FILLS[info.role] if info else EMPTY_FILL
                painter.setBrush(QBrush(fill))
                painter.drawRect(QRectF(col * cell, row * cell, cell, cell))

        # Path lines
        for movement in self._movements:
            selected = movement.step_number == self._selected_step
            pen = QPen(SELECTED_COLOR if selected else PATH_COLOR)
            pen.setWidth(SELECTED_THICKNESS if selected else PATH_THICKNESS)
            painter.setPen(pen)
            painter.drawLine(
                self._cell_center(movement.origin.x, movement.origin.y, cell),
                self._cell_center(movement.target.x, movement.target.y, cell),
            )

        # Visiting order labels
        font = QFont()
        font.setBold(True)
        font.setPointSize(max(7, int(cell / 3)))
        painter.setFont(font)
        painter.setPen(QPen(Qt.white))
        for (x, y), info in layout.cells.items():
            col, row = layout.to_display(x, y)
            painter.drawText(
                QRectF(col * cell, row * cell, cell, cell),
                Qt.AlignCenter,
                str(info.order),
            )

        painter.end()
