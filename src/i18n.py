"""
Translation Module for Chebyshev Path Visualizer

Key/value lookup for UI strings in the supported languages. Missing keys
fall back to English, then to the key itself.
"""

import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "app.title": "Chebyshev Path Visualizer",
        "app.intro": "On a board where you can move in 8 directions, the minimum "
                     "distance between two points is max(|dx|, |dy|).",
        "language.label": "Language:",
        "coordinateInput.title": "Coordinates",
        "coordinateInput.placeholder": '[{"x": 0, "y": 0}, {"x": 1, "y": 2}]',
        "coordinateInput.loadExample": "Load example",
        "coordinateInput.calculate": "Calculate",
        "coordinateInput.validation.validJson": "Valid JSON",
        "coordinateInput.validation.invalidJson": "Invalid JSON",
        "board.title": "Board",
        "board.size": "{width} x {height}",
        "board.saveImage": "Save board image",
        "board.noCoordinates": "No coordinates yet. Enter a list and press Calculate.",
        "board.tooLarge": "The board is larger than {size} x {size} cells, so it is not drawn. "
                          "The analysis and the steps below are complete.",
        "board.analysis.totalCoordinates": "Total coordinates",
        "board.analysis.minSteps": "Minimum steps",
        "board.analysis.sequence": "Sequence",
        "steps.title": "Steps",
        "steps.step": "Step",
        "explanation.title": "Explanation",
        "explanation.hint": "Select a step to see why it is optimal.",
        "explanation.loading": "Generating explanation...",
        "explanation.error": "Could not get an explanation",
        "explanation.cached": "(from cache)",
        "explanation.diagonal": "This diagonal movement changes x and y by {dx} at the same "
                                "time, so it needs only {dx} step(s) instead of {sum} "
                                "separate moves.",
        "explanation.linear": "This straight movement changes only one coordinate, so it "
                              "needs exactly {distance} step(s) along a single axis.",
        "explanation.mixed": "This movement combines {diagonal} diagonal step(s) with "
                             "{straight} straight step(s), {distance} steps in total.",
        "errors.validation.invalidJson": "The input is not valid JSON.",
        "errors.validation.invalidCoordinate": "Every coordinate needs non-negative integer x and y.",
        "errors.validation.atLeastOne": "Enter at least one coordinate.",
        "errors.validation.duplicateConsecutive": "Two consecutive coordinates are identical: {details}. "
                                                  "Staying in place is not a move, so remove the repeated "
                                                  "point. Returning to a point later in the list is allowed.",
        "errors.unexpected": "An unexpected error occurred.",
        "status.saved": "Saved {path}",
    },
    "es": {
        "app.title": "Visualizador de Rutas Chebyshev",
        "app.intro": "En un tablero donde puedes moverte en 8 direcciones, la distancia "
                     "mínima entre dos puntos es max(|dx|, |dy|).",
        "language.label": "Idioma:",
        "coordinateInput.title": "Coordenadas",
        "coordinateInput.loadExample": "Cargar ejemplo",
        "coordinateInput.calculate": "Calcular",
        "coordinateInput.validation.validJson": "JSON válido",
        "coordinateInput.validation.invalidJson": "JSON inválido",
        "board.title": "Tablero",
        "board.saveImage": "Guardar imagen del tablero",
        "board.noCoordinates": "Aún no hay coordenadas. Escribe una lista y pulsa Calcular.",
        "board.tooLarge": "El tablero supera {size} x {size} celdas y no se dibuja. "
                          "El análisis y los pasos de abajo están completos.",
        "board.analysis.totalCoordinates": "Coordenadas totales",
        "board.analysis.minSteps": "Pasos mínimos",
        "board.analysis.sequence": "Secuencia",
        "steps.title": "Pasos",
        "steps.step": "Paso",
        "explanation.title": "Explicación",
        "explanation.hint": "Selecciona un paso para ver por qué es óptimo.",
        "explanation.loading": "Generando explicación...",
        "explanation.error": "No se pudo obtener una explicación",
        "explanation.cached": "(desde caché)",
        "explanation.diagonal": "Este movimiento diagonal cambia x e y en {dx} a la vez, así "
                                "que solo necesita {dx} paso(s) en lugar de {sum} "
                                "movimientos separados.",
        "explanation.linear": "Este movimiento recto cambia solo una coordenada, así que "
                              "necesita exactamente {distance} paso(s) sobre un eje.",
        "explanation.mixed": "Este movimiento combina {diagonal} paso(s) diagonal(es) con "
                             "{straight} paso(s) recto(s), {distance} pasos en total.",
        "errors.validation.invalidJson": "La entrada no es JSON válido.",
        "errors.validation.invalidCoordinate": "Cada coordenada necesita x e y enteros no negativos.",
        "errors.validation.atLeastOne": "Introduce al menos una coordenada.",
        "errors.validation.duplicateConsecutive": "Dos coordenadas consecutivas son idénticas: {details}. "
                                                  "Quedarse en el mismo sitio no es un movimiento, así que "
                                                  "elimina el punto repetido. Volver a un punto más adelante "
                                                  "en la lista sí está permitido.",
        "errors.unexpected": "Ocurrió un error inesperado.",
        "status.saved": "Guardado {path}",
    },
}

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "es": "Español",
}


def supported_languages() -> List[str]:
    """Language codes with a translation table."""
    return list(TRANSLATIONS.keys())


def normalize_language(language: str) -> str:
    """
    Reduce a language tag to a supported code.

    "es-MX" -> "es"; unknown languages map to DEFAULT_LANGUAGE.
    """
    code = (language or "").split("-")[0].lower()
    if code in TRANSLATIONS:
        return code
    logger.debug(f"Unsupported language '{language}', using {DEFAULT_LANGUAGE}")
    return DEFAULT_LANGUAGE


def translate(key: str, language: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """
    Look up a UI string.

    Args:
        key: Translation key, e.g. "steps.title"
        language: Language code
        **kwargs: Values for {placeholders} in the string

    Returns:
        Translated text, English text, or the key if neither exists
    """
    table = TRANSLATIONS.get(normalize_language(language), {})
    text = table.get(key)
    if text is None:
        text = TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key)
    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, IndexError):
            logger.warning(f"Missing placeholder values for '{key}'")
    return text
