"""
Board Snapshot Utilities

Functions for saving a rendered board image and managing snapshot output.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from src.pathing import BoardLayout, CellRole, MAX_RENDERED_SIZE, Movement

logger = logging.getLogger(__name__)


# Snapshot settings
SNAPSHOT_DIR = Path("./snapshots")
MAX_SNAPSHOTS = 10

# Rendering
CELL_SIZE = 40
MARGIN = 24

BACKGROUND_COLOR = "#ffffff"
GRID_COLOR = "#e5e7eb"
EMPTY_COLOR = "#f9fafb"
PATH_COLOR = "#2563eb"

ROLE_COLORS = {
    CellRole.START: "#22c55e",         # Green
    CellRole.INTERMEDIATE: "#3b82f6",  # Blue
    CellRole.END: "#ef4444",           # Red
}


def get_role_color(role: Optional[CellRole]) -> str:
    """
    Get color code for a cell role.

    Args:
        role: Cell role, or None for an empty cell

    Returns:
        Hex color code string
    """
    if role is None:
        return EMPTY_COLOR
    return ROLE_COLORS[role]


def _cell_center(layout: BoardLayout, x: int, y: int) -> Tuple[int, int]:
    col, row = layout.to_display(x, y)
    return (MARGIN + col * CELL_SIZE + CELL_SIZE // 2,
            MARGIN + row * CELL_SIZE + CELL_SIZE // 2)


def render_board(layout: BoardLayout, movements: Sequence[Movement]) -> Image.Image:
    """
    Render a board layout with its path.

    Annotations include:
    - Grid cells, coloured by role (start, intermediate, end)
    - Visiting order number in each occupied cell
    - A line for each movement

    Args:
        layout: Board layout to draw
        movements: Movements drawn as connecting lines

    Returns:
        RGB PIL Image

    Raises:
        ValueError: If the board is larger than MAX_RENDERED_SIZE
    """
    if not layout.renderable:
        raise ValueError(
            f"Board {layout.width}x{layout.height} exceeds {MAX_RENDERED_SIZE}x{MAX_RENDERED_SIZE} cells"
        )

    width = MARGIN * 2 + layout.width * CELL_SIZE
    height = MARGIN * 2 + layout.height * CELL_SIZE
    image = Image.new("RGB", (width, height), BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)

    try:
        font = ImageFont.truetype("arial.ttf", 14)
    except OSError:
        font = ImageFont.load_default()

    for y in layout.rows_top_down():
        for x in range(layout.width):
            col, row = layout.to_display(x, y)
            left = MARGIN + col * CELL_SIZE
            top = MARGIN + row * CELL_SIZE
            cell = layout.get_cell(x, y)
            draw.rectangle(
                [left, top, left + CELL_SIZE - 1, top + CELL_SIZE - 1],
                fill=get_role_color(cell.role if cell else None),
                outline=GRID_COLOR,
            )

    for movement in movements:
        start = _cell_center(layout, movement.origin.x, movement.origin.y)
        end = _cell_center(layout, movement.target.x, movement.target.y)
        draw.line([start, end], fill=PATH_COLOR, width=3)

    for (x, y), cell in layout.cells.items():
        cx, cy = _cell_center(layout, x, y)
        draw.text((cx - 4, cy - 7), str(cell.order), fill="white", font=font)

    return image


def save_board_snapshot(
    layout: BoardLayout,
    movements: Sequence[Movement],
    path: str
) -> None:
    """
    Save a rendered board image as PNG.

    Args:
        layout: Board layout to draw
        movements: Movements of the current path
        path: Output file path

    Raises:
        ValueError: If the board is too large to render
    """
    image = render_board(layout, movements)

    # Ensure snapshot directory exists
    SNAPSHOT_DIR.mkdir(parents=True, exist_ok=True)
    Path(path).parent.mkdir(parents=True, exist_ok=True)

    image.save(path, "PNG")
    logger.info(f"Board snapshot saved: {path}")

    # Cleanup old snapshots
    _cleanup_snapshots()


def _cleanup_snapshots() -> None:
    """Remove old snapshots, keeping only the most recent MAX_SNAPSHOTS."""
    if not SNAPSHOT_DIR.exists():
        return

    # Get all snapshots sorted by modification time
    snapshot_files = sorted(
        SNAPSHOT_DIR.glob("board_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    # Remove old files
    for old_file in snapshot_files[MAX_SNAPSHOTS:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Could not remove old snapshot {old_file}: {e}")
