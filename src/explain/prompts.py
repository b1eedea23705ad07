"""
Prompt templates for the text-generation service.
"""

from typing import Dict

from src.pathing import Movement

PROMPT_TEMPLATES: Dict[str, str] = {
    "en": (
        "You must respond ONLY in English. Explain in simple, educational terms why "
        "moving from ({fx},{fy}) to ({tx},{ty}) in direction {direction} is optimal for "
        "Chebyshev distance. Give a direct, concise answer without thinking process. "
        "Maximum 40 words."
    ),
    "es": (
        "Debes responder ÚNICAMENTE en español. Explica de forma simple y educativa por "
        "qué moverse de ({fx},{fy}) a ({tx},{ty}) en dirección {direction} es óptimo para "
        "la distancia Chebyshev. Da una respuesta directa y concisa sin proceso de "
        "pensamiento. Máximo 40 palabras."
    ),
}


def build_prompt(movement: Movement, language: str) -> str:
    """
    Build the prompt for one movement.

    Unknown languages use the English template.
    """
    template = PROMPT_TEMPLATES.get(language, PROMPT_TEMPLATES["en"])
    return template.format(
        fx=movement.origin.x,
        fy=movement.origin.y,
        tx=movement.target.x,
        ty=movement.target.y,
        direction=movement.direction.value,
    )
