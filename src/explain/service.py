"""
Step Explanation Service

Cache-first lookup of a movement explanation, generating and caching it
on a miss.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.pathing import Movement
from src.storage import ExplanationCache, build_cache_key
from .base import ExplanationClient, ExplanationError
from .result import ExplanationFailure, ExplanationResult, ExplanationSuccess

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExplanationRequest:
    """
    One movement explained in one language.

    Results are routed by key, so an answer for another movement or another
    language never replaces the one currently on screen. The step number is
    not part of the key: the same movement in a recalculated path has the
    same explanation.

    Attributes:
        movement: Movement to explain
        language: Language code for the answer
    """
    movement: Movement
    language: str

    @property
    def key(self) -> str:
        """Same format as the explanation cache key, e.g. "0,0-1,2-NE-en"."""
        return build_cache_key(self.movement, self.language)

    @property
    def step_number(self) -> int:
        return self.movement.step_number


def is_current_request(result_key: str, current: Optional[ExplanationRequest]) -> bool:
    """
    Check whether a finished request still matches what is on screen.

    Args:
        result_key: Key of the request that produced the result
        current: Request for the current selection, or None if nothing is selected

    Returns:
        True if the result should be displayed
    """
    return current is not None and current.key == result_key


def get_step_explanation(
    movement: Movement,
    language: str,
    cache: ExplanationCache,
    client: ExplanationClient,
) -> ExplanationResult:
    """
    Get the explanation for one movement.

    Args:
        movement: Movement to explain
        language: Language code
        cache: Explanation cache consulted first
        client: Client used on a cache miss

    Returns:
        ExplanationSuccess (cached flag set on a hit) or ExplanationFailure
    """
    cached = cache.get(movement, language)
    if cached:
        logger.debug(f"Cache hit for step {movement.step_number} ({language})")
        return ExplanationSuccess(explanation=cached, cached=True)

    try:
        explanation = client.generate(movement, language)
    except ExplanationError as e:
        logger.warning(f"Explanation failed for step {movement.step_number}: {e}")
        return ExplanationFailure(error=str(e))

    cache.put(movement, language, explanation)
    logger.info(f"Explanation generated for step {movement.step_number} via {client.name}")
    return ExplanationSuccess(explanation=explanation, cached=False)
