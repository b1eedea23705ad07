"""
Tests for explanation clients, prompts and the cached explanation use case

HTTP calls are served by httpx.MockTransport; nothing leaves the process.

Usage:
    python -m pytest tests/test_explain.py
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.explain import (
    ExplanationClient,
    ExplanationError,
    ExplanationFailure,
    ExplanationRequest,
    ExplanationSuccess,
    GroqClient,
    MissingApiKeyError,
    OfflineClient,
    available_clients,
    build_prompt,
    create_client,
    get_step_explanation,
    is_current_request,
    register_client,
    strip_reasoning,
)
from src.explain import factory
from src.explain.groq_client import DEFAULT_BASE_URL, MAX_TOKENS, TEMPERATURE
from src.pathing import Direction, Movement, Point
from src.settings import API_KEY_ENV
from src.storage import ExplanationCache


MOVEMENT = Movement(Point(0, 0), Point(1, 2), Direction.NE, 1)


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _groq_with(handler, **kwargs):
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return GroqClient(api_key="test-key", http_client=http_client, **kwargs)


class StubClient(ExplanationClient):
    """Counts calls and returns a fixed answer or raises."""

    def __init__(self, answer="stub answer", error=None):
        self.answer = answer
        self.error = error
        self.calls = 0

    @property
    def name(self):
        return "stub"

    def generate(self, movement, language):
        self.calls += 1
        if self.error:
            raise self.error
        return self.answer


# --- Prompts ---

def test_build_prompt_english():
    prompt = build_prompt(MOVEMENT, "en")
    assert "ONLY in English" in prompt
    assert "(0,0)" in prompt and "(1,2)" in prompt
    assert "NE" in prompt
    assert "40 words" in prompt


def test_build_prompt_spanish():
    prompt = build_prompt(MOVEMENT, "es")
    assert "español" in prompt
    assert "40 palabras" in prompt


def test_build_prompt_unknown_language_uses_english():
    assert build_prompt(MOVEMENT, "fr") == build_prompt(MOVEMENT, "en")


# --- Reasoning stripping ---

def test_strip_reasoning():
    assert strip_reasoning("<think>hmm\nlet me see</think>\n  Answer.") == "Answer."
    assert strip_reasoning("Plain answer ") == "Plain answer"
    assert strip_reasoning("<think>a</think>One <THINK>b</THINK>two") == "One two"


# --- Groq client ---

def test_groq_request_payload():
    captured = {}

    def handler(request):
        captured["url"] = str(request.url)
        captured["auth"] = request.headers.get("Authorization")
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("Because diagonal moves cover both axes."))

    client = _groq_with(handler, model="test-model")
    text = client.generate(MOVEMENT, "en")

    assert text == "Because diagonal moves cover both axes."
    assert captured["url"] == f"{DEFAULT_BASE_URL}/chat/completions"
    assert captured["auth"] == "Bearer test-key"
    body = captured["body"]
    assert body["model"] == "test-model"
    assert body["max_tokens"] == MAX_TOKENS
    assert body["temperature"] == TEMPERATURE
    assert body["messages"][0]["role"] == "user"
    assert body["messages"][0]["content"] == build_prompt(MOVEMENT, "en")


def test_groq_strips_think_block():
    def handler(request):
        return httpx.Response(200, json=_completion("<think>reasoning</think>Final."))

    assert _groq_with(handler).generate(MOVEMENT, "en") == "Final."


def test_groq_http_error():
    def handler(request):
        return httpx.Response(429, json={"error": {"message": "rate limited"}})

    with pytest.raises(ExplanationError, match="429"):
        _groq_with(handler).generate(MOVEMENT, "en")


def test_groq_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExplanationError):
        _groq_with(handler).generate(MOVEMENT, "en")


def test_groq_unexpected_body():
    def handler(request):
        return httpx.Response(200, json={"choices": []})

    with pytest.raises(ExplanationError):
        _groq_with(handler).generate(MOVEMENT, "en")


def test_groq_empty_answer():
    def handler(request):
        return httpx.Response(200, json=_completion("<think>only thinking</think>"))

    with pytest.raises(ExplanationError):
        _groq_with(handler).generate(MOVEMENT, "en")


def test_groq_missing_api_key(monkeypatch):
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    with pytest.raises(MissingApiKeyError):
        GroqClient()


def test_groq_reads_key_from_environment(monkeypatch):
    monkeypatch.setenv(API_KEY_ENV, "env-key")
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=_completion("ok"))

    client = GroqClient(http_client=httpx.Client(transport=httpx.MockTransport(handler)))
    client.generate(MOVEMENT, "en")
    assert seen["auth"] == "Bearer env-key"


# --- Offline client ---

def test_offline_client_languages():
    client = OfflineClient()
    english = client.generate(MOVEMENT, "en")
    spanish = client.generate(MOVEMENT, "es")

    assert client.name == "offline"
    assert "max(|1|, |2|) = 2" in english
    assert english != spanish


def test_offline_client_diagonal_and_linear():
    client = OfflineClient()
    diagonal = Movement(Point(0, 0), Point(2, 2), Direction.NE, 1)
    linear = Movement(Point(0, 0), Point(0, 5), Direction.N, 1)

    assert "diagonal" in client.generate(diagonal, "en")
    assert "5 step(s)" in client.generate(linear, "en")


# --- Factory ---

def test_factory_creates_clients(monkeypatch):
    monkeypatch.setenv(API_KEY_ENV, "factory-key")
    assert isinstance(create_client("offline"), OfflineClient)

    groq = create_client("groq", model="m")
    assert isinstance(groq, GroqClient)
    assert groq.model == "m"
    groq.close()


def test_factory_unknown_client():
    with pytest.raises(ValueError, match="Unknown client type"):
        create_client("nope")


def test_factory_missing_key(monkeypatch):
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    with pytest.raises(MissingApiKeyError):
        create_client("groq")


def test_register_client(monkeypatch):
    monkeypatch.setattr(factory, "_CLIENT_REGISTRY", dict(factory._CLIENT_REGISTRY))
    monkeypatch.setattr(factory, "_CLIENT_CACHE", {})

    register_client("stub", StubClient)
    assert "stub" in available_clients()
    assert isinstance(create_client("stub"), StubClient)

    with pytest.raises(TypeError):
        register_client("bad", dict)


# --- Use case ---

def test_get_step_explanation_miss_then_hit(tmp_path):
    cache = ExplanationCache(tmp_path / "explanations.json")
    client = StubClient("Generated.")

    first = get_step_explanation(MOVEMENT, "en", cache, client)
    assert isinstance(first, ExplanationSuccess)
    assert first.success
    assert first.explanation == "Generated."
    assert not first.cached

    second = get_step_explanation(MOVEMENT, "en", cache, client)
    assert second.cached
    assert second.explanation == "Generated."
    assert client.calls == 1


def test_get_step_explanation_language_is_part_of_key(tmp_path):
    cache = ExplanationCache(tmp_path / "explanations.json")
    client = StubClient()

    get_step_explanation(MOVEMENT, "en", cache, client)
    result = get_step_explanation(MOVEMENT, "es", cache, client)

    assert not result.cached
    assert client.calls == 2


def test_get_step_explanation_failure_not_cached(tmp_path):
    cache = ExplanationCache(tmp_path / "explanations.json")
    client = StubClient(error=ExplanationError("service down"))

    result = get_step_explanation(MOVEMENT, "en", cache, client)

    assert isinstance(result, ExplanationFailure)
    assert not result.success
    assert result.error == "service down"
    assert len(cache) == 0


# --- Request routing ---

def test_request_key_matches_cache_key():
    request = ExplanationRequest(MOVEMENT, "es")
    assert request.key == "0,0-1,2-NE-es"
    assert request.step_number == 1


def test_result_for_other_language_is_not_current():
    """Switching language while a request runs drops the old-language answer."""
    english = ExplanationRequest(MOVEMENT, "en")
    spanish = ExplanationRequest(MOVEMENT, "es")

    assert is_current_request(spanish.key, spanish)
    assert not is_current_request(english.key, spanish)


def test_result_for_other_movement_with_same_step_is_not_current():
    """A recalculated path reuses step numbers for different movements."""
    old_step_one = ExplanationRequest(MOVEMENT, "en")
    new_step_one = ExplanationRequest(Movement(Point(5, 5), Point(5, 9), Direction.N, 1), "en")

    assert old_step_one.step_number == new_step_one.step_number
    assert old_step_one.key != new_step_one.key
    assert not is_current_request(old_step_one.key, new_step_one)


def test_same_movement_in_new_path_is_current():
    request = ExplanationRequest(MOVEMENT, "en")
    renumbered = ExplanationRequest(Movement(MOVEMENT.origin, MOVEMENT.target, MOVEMENT.direction, 4), "en")
    assert is_current_request(request.key, renumbered)


def test_nothing_selected_drops_every_result():
    assert not is_current_request(ExplanationRequest(MOVEMENT, "en").key, None)
