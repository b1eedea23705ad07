"""
Explanation Module for Chebyshev Path Visualizer

Pluggable clients that explain why a movement is optimal.

Usage:
    from src.explain import create_client, get_step_explanation

    client = create_client("groq")          # or "offline"
    result = get_step_explanation(movement, "en", cache, client)
    if result.success:
        print(result.explanation)

Custom clients:
    register_client("mine", MyClient)
"""

# Public API - Result types
from .result import (
    ExplanationSuccess,
    ExplanationFailure,
    ExplanationResult,
)

# Public API - Base class and errors
from .base import ExplanationClient, ExplanationError, MissingApiKeyError

# Public API - Factory functions
from .factory import (
    create_client,
    register_client,
    available_clients,
)

# Public API - Clients
from .groq_client import GroqClient, strip_reasoning
from .offline_client import OfflineClient

# Prompting and use case
from .prompts import build_prompt, PROMPT_TEMPLATES
from .service import ExplanationRequest, get_step_explanation, is_current_request

__all__ = [
    # Result types
    "ExplanationSuccess",
    "ExplanationFailure",
    "ExplanationResult",
    # Base class
    "ExplanationClient",
    "ExplanationError",
    "MissingApiKeyError",
    # Factory
    "create_client",
    "register_client",
    "available_clients",
    # Clients
    "GroqClient",
    "OfflineClient",
    "strip_reasoning",
    # Functions
    "build_prompt",
    "get_step_explanation",
    "ExplanationRequest",
    "is_current_request",
    "PROMPT_TEMPLATES",
]
