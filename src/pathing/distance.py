"""
Distance Module - Chebyshev distance and minimum step count.

A piece that may step into any of its 8 neighbours covers one unit on both
axes with a diagonal move, so the fewest moves between two cells is the
larger of the two absolute deltas. This is a closed form, no search needed.
"""

from typing import Sequence

from .point import Point


def chebyshev_distance(origin: Point, target: Point) -> int:
    """
    Minimum number of 8-directional moves between two cells.

    Args:
        origin: Starting point
        target: End point

    Returns:
        max(|dx|, |dy|); 0 when the points are equal
    """
    return max(abs(target.x - origin.x), abs(target.y - origin.y))


def minimum_steps(waypoints: Sequence[Point]) -> int:
    """
    Total minimum moves to visit the waypoints in the given order.

    Example:
        [(0,0), (1,2), (3,1)] -> max(1,2) + max(2,1) = 4

    Args:
        waypoints: Points in visiting order

    Returns:
        Sum of Chebyshev distances over consecutive pairs
    """
    if len(waypoints) <= 1:
        return 0

    total = 0
    for i in range(1, len(waypoints)):
        total += chebyshev_distance(waypoints[i - 1], waypoints[i])
    return total
