"""
Explanation Client Base Interface

Abstract base class defining the explanation client contract.
"""

from abc import ABC, abstractmethod

from src.pathing import Movement


class ExplanationError(RuntimeError):
    """Raised when a client cannot produce an explanation."""


class MissingApiKeyError(ExplanationError):
    """Raised when a networked client is created without credentials."""


class ExplanationClient(ABC):
    """
    Abstract base class for explanation clients.

    All implementations must inherit from this class and implement
    generate() to turn a movement into a short explanation.
    """

    @abstractmethod
    def generate(self, movement: Movement, language: str) -> str:
        """
        Explain why a movement is optimal.

        Args:
            movement: Movement to explain
            language: Language code for the answer ("en", "es")

        Returns:
            Explanation text, stripped of surrounding whitespace

        Raises:
            ExplanationError: If no explanation could be produced
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Client identifier.

        Returns:
            String name identifying this client type (e.g., "groq", "offline")
        """
        pass

    def close(self) -> None:
        """
        Release any held resources.

        Default implementation does nothing.
        """
        pass
