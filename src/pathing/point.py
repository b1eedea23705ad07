"""
Point Module - Immutable grid coordinate.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Point:
    """
    A cell on the integer grid.

    Points compare and hash by value. Both coordinates are expected to be
    non-negative integers; enforcing that is the job of the input layer
    (see src.validation), not of this class.

    Attributes:
        x: Column, increasing to the east
        y: Row, increasing to the north
    """
    x: int
    y: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Point':
        """
        Create a Point from a {"x": ..., "y": ...} mapping.

        Args:
            data: Mapping with integer x and y entries

        Returns:
            Point instance
        """
        return cls(x=data["x"], y=data["y"])

    @classmethod
    def from_tuple(cls, pair: Tuple[int, int]) -> 'Point':
        """Create a Point from an (x, y) tuple."""
        return cls(x=pair[0], y=pair[1])

    def to_dict(self) -> Dict[str, int]:
        """Serialize to the JSON object shape used for input and storage."""
        return {"x": self.x, "y": self.y}

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"
