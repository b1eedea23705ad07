"""
Groq Explanation Client

Requests explanations from Groq's OpenAI-compatible chat completions API.
Reasoning models wrap their chain of thought in <think> tags; only the
final answer is returned.
"""

import logging
import re
from typing import Any, Dict, Optional

import httpx

from src.pathing import Movement
from src.settings import get_api_key, API_KEY_ENV
from .base import ExplanationClient, ExplanationError, MissingApiKeyError
from .prompts import build_prompt

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "deepseek-r1-distill-llama-70b"
DEFAULT_TIMEOUT_SEC = 30.0

# Generation parameters
MAX_TOKENS = 1024
TEMPERATURE = 0.6

_THINK_BLOCK = re.compile(r"<think>.*?</think>", re.DOTALL | re.IGNORECASE)


def strip_reasoning(text: str) -> str:
    """
    Remove <think>...</think> blocks and surrounding whitespace.

    An unterminated <think> block drops everything after the tag.
    """
    cleaned = _THINK_BLOCK.sub("", text)
    open_tag = cleaned.lower().find("<think>")
    if open_tag != -1:
        cleaned = cleaned[:open_tag]
    return cleaned.strip()


class GroqClient(ExplanationClient):
    """
    Explanation client backed by the Groq API.

    Example:
        client = GroqClient(api_key="gsk_...")
        text = client.generate(movement, "en")
        client.close()
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        base_url: str = DEFAULT_BASE_URL,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Groq API key (default: GROQ_API_KEY environment variable)
            model: Model id
            timeout: Request timeout in seconds
            base_url: API root, without trailing slash
            http_client: Preconfigured httpx client (tests inject a mock transport)

        Raises:
            MissingApiKeyError: If no API key is available
        """
        self._api_key = api_key or get_api_key()
        if not self._api_key:
            raise MissingApiKeyError(f"{API_KEY_ENV} environment variable is required")

        self.model = model
        self.base_url = base_url.rstrip('/')
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)
        logger.info(f"Groq client initialized, model: {self.model}")

    @property
    def name(self) -> str:
        return "groq"

    def generate(self, movement: Movement, language: str) -> str:
        """
        Generate an explanation for a movement.

        Args:
            movement: Movement to explain
            language: Language code for the answer

        Returns:
            Final answer text without reasoning blocks

        Raises:
            ExplanationError: On transport errors, HTTP errors or an unusable response
        """
        payload = self._build_payload(build_prompt(movement, language))

        try:
            response = self._client.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Groq request failed with HTTP {e.response.status_code}")
            raise ExplanationError(
                f"Text generation service returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Groq request failed: {e}")
            raise ExplanationError(f"Could not reach text generation service: {e}") from e
        except ValueError as e:
            raise ExplanationError("Text generation service returned invalid JSON") from e

        text = strip_reasoning(self._extract_content(data))
        if not text:
            raise ExplanationError("Text generation service returned an empty answer")

        logger.debug(f"Explanation generated for {movement}")
        return text

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }

    @staticmethod
    def _extract_content(data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ExplanationError("Unexpected response from text generation service") from e
        return content if isinstance(content, str) else ""
