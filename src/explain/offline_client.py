"""
Offline Explanation Client

Builds explanations locally from the movement's educational context.
Needs no network access or credentials.
"""

from src.i18n import translate
from src.pathing import Movement, MovementType, build_educational_context
from .base import ExplanationClient


class OfflineClient(ExplanationClient):
    """Template-based explanations in the supported UI languages."""

    def __init__(self, **config):
        # Networked-client options are accepted and ignored
        pass

    @property
    def name(self) -> str:
        return "offline"

    def generate(self, movement: Movement, language: str) -> str:
        context = build_educational_context(movement)

        if context.movement_type == MovementType.DIAGONAL:
            text = translate("explanation.diagonal", language,
                             dx=context.dx, sum=context.dx + context.dy)
        elif context.movement_type == MovementType.LINEAR:
            text = translate("explanation.linear", language,
                             distance=context.chebyshev_distance)
        else:
            text = translate("explanation.mixed", language,
                             diagonal=context.diagonal_steps,
                             straight=context.straight_steps,
                             distance=context.chebyshev_distance)

        return f"{text} {context.formula}"
