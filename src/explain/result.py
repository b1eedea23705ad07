"""
Explanation Result Dataclasses

Outcome of an explanation request: either the text or an error message.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ExplanationSuccess:
    """Explanation text for a movement."""
    explanation: str
    cached: bool  # True if served from the cache

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class ExplanationFailure:
    """Explanation could not be produced."""
    error: str

    @property
    def success(self) -> bool:
        return False


ExplanationResult = Union[ExplanationSuccess, ExplanationFailure]
