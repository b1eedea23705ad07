"""
Validation Module for Chebyshev Path Visualizer

Turns raw user text into a validated waypoint list. The pathing core
assumes clean input, so every rejection happens here.
"""

import json
import logging
from typing import Any, List, Optional

from pydantic import BaseModel, Field, StrictInt, TypeAdapter, ValidationError

from src.i18n import DEFAULT_LANGUAGE, translate
from src.pathing import Point

logger = logging.getLogger(__name__)


# i18n message keys reported to the UI
INVALID_JSON = "errors.validation.invalidJson"
INVALID_COORDINATE = "errors.validation.invalidCoordinate"
AT_LEAST_ONE = "errors.validation.atLeastOne"
DUPLICATE_CONSECUTIVE = "errors.validation.duplicateConsecutive"


class WaypointValidationError(ValueError):
    """
    Raised when user input cannot be turned into waypoints.

    Attributes:
        message_key: i18n key describing the failure
        details: Optional extra text (e.g. which entry failed)
    """

    def __init__(self, message_key: str, details: Optional[str] = None):
        self.message_key = message_key
        self.details = details
        text = message_key if not details else f"{message_key}: {details}"
        super().__init__(text)


class CoordinateModel(BaseModel):
    """Schema for one {"x": int, "y": int} entry. Extra keys are ignored."""
    x: StrictInt = Field(ge=0)
    y: StrictInt = Field(ge=0)

    def to_point(self) -> Point:
        return Point(x=self.x, y=self.y)


_COORDINATE_LIST = TypeAdapter(List[CoordinateModel])


def validate_coordinates(data: Any, allow_empty: bool = False) -> List[Point]:
    """
    Validate already-decoded JSON data as a waypoint list.

    Args:
        data: Decoded JSON value
        allow_empty: Accept an empty list (used when loading stored data)

    Returns:
        List of Points in input order

    Raises:
        WaypointValidationError: If the structure or any value is invalid
    """
    try:
        models = _COORDINATE_LIST.validate_python(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise WaypointValidationError(INVALID_COORDINATE, location or None) from e

    if not models and not allow_empty:
        raise WaypointValidationError(AT_LEAST_ONE)

    return [model.to_point() for model in models]


def parse_waypoints(text: str) -> List[Point]:
    """
    Parse and validate user-entered JSON into waypoints.

    Rules:
        - Text must be valid JSON
        - Value must be a non-empty list of {"x", "y"} objects
        - x and y must be non-negative integers
        - Two consecutive waypoints must differ

    Args:
        text: Raw JSON text

    Returns:
        List of Points in visiting order

    Raises:
        WaypointValidationError: With the i18n key for the first failure
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise WaypointValidationError(INVALID_JSON) from e

    points = validate_coordinates(data)

    for i in range(1, len(points)):
        if points[i] == points[i - 1]:
            raise WaypointValidationError(
                DUPLICATE_CONSECUTIVE, f"{points[i - 1]} [#{i}, #{i + 1}]"
            )

    logger.debug(f"Parsed {len(points)} waypoints")
    return points


def is_valid_json(text: str) -> bool:
    """Cheap syntax check used for the live input indicator."""
    if not text.strip():
        return False
    try:
        json.loads(text)
    except json.JSONDecodeError:
        return False
    return True


def describe_error(message_key: str, language: str = DEFAULT_LANGUAGE,
                   details: Optional[str] = None) -> str:
    """
    User-facing text for a validation error.

    Messages with a {details} placeholder (e.g. the repeated point and its
    positions) include the details; the others ignore them.
    """
    return translate(message_key, language, details=details or "")
