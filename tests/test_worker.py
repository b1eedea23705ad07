"""
Tests for the explanation worker thread

The worker body is run synchronously via run(); signal emissions are
recorded with direct connections.

Usage:
    python -m pytest tests/test_worker.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

QtCore = pytest.importorskip("PyQt5.QtCore")

from src.explain import ExplanationClient, ExplanationError, ExplanationRequest
from src.explanation_worker import ExplanationWorker
from src.pathing import Direction, Movement, Point
from src.storage import ExplanationCache


MOVEMENT = Movement(Point(2, 2), Point(4, 2), Direction.E, 3)


class FixedClient(ExplanationClient):

    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error

    @property
    def name(self):
        return "fixed"

    def generate(self, movement, language):
        if self.error:
            raise self.error
        return self.answer


@pytest.fixture(scope="module")
def qt_app():
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


def _run(worker):
    ready, errors = [], []
    worker.explanation_ready.connect(lambda *args: ready.append(args))
    worker.error_occurred.connect(lambda *args: errors.append(args))
    worker.run()
    return ready, errors


def test_worker_emits_explanation(qt_app, tmp_path):
    cache = ExplanationCache(tmp_path / "explanations.json")
    worker = ExplanationWorker(ExplanationRequest(MOVEMENT, "en"), cache, FixedClient("Two steps east."))

    ready, errors = _run(worker)

    assert ready == [("2,2-4,2-E-en", "Two steps east.", False)]
    assert errors == []
    assert worker.request_key == "2,2-4,2-E-en"


def test_worker_reports_cache_hit(qt_app, tmp_path):
    cache = ExplanationCache(tmp_path / "explanations.json")
    cache.put(MOVEMENT, "es", "Dos pasos.")
    worker = ExplanationWorker(ExplanationRequest(MOVEMENT, "es"), cache, FixedClient(error=AssertionError("unused")))

    ready, errors = _run(worker)

    assert ready == [("2,2-4,2-E-es", "Dos pasos.", True)]
    assert errors == []


def test_worker_emits_client_failure(qt_app, tmp_path):
    cache = ExplanationCache(tmp_path / "explanations.json")
    worker = ExplanationWorker(ExplanationRequest(MOVEMENT, "en"), cache,
                               FixedClient(error=ExplanationError("HTTP 500")))

    ready, errors = _run(worker)

    assert ready == []
    assert errors == [("2,2-4,2-E-en", "HTTP 500")]


def test_worker_survives_unexpected_exception(qt_app, tmp_path):
    cache = ExplanationCache(tmp_path / "explanations.json")
    worker = ExplanationWorker(ExplanationRequest(MOVEMENT, "en"), cache,
                               FixedClient(error=KeyError("boom")))

    ready, errors = _run(worker)

    assert ready == []
    assert len(errors) == 1
    assert errors[0][0] == "2,2-4,2-E-en"
