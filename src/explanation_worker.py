"""
Explanation Worker Module for Chebyshev Path Visualizer

Provides a background QThread worker that fetches one step explanation.
Communicates with the UI via Qt signals for thread-safe updates.
"""

import logging

from PyQt5.QtCore import QThread, pyqtSignal

from src.explain import (
    ExplanationClient, ExplanationRequest, ExplanationSuccess, get_step_explanation
)
from src.storage import ExplanationCache


# Configure module logger
logger = logging.getLogger(__name__)


class ExplanationWorker(QThread):
    """
    Background worker thread for a single explanation request.

    The network call to the text-generation service can take seconds, so
    it runs off the UI thread. Each worker handles one request and exits.
    Results carry the request key so the UI can drop answers for a movement
    or language that is no longer selected.

    Signals:
        explanation_ready(str, str, bool): request key, text, served from cache
        error_occurred(str, str): request key, error message

    Example:
        worker = ExplanationWorker(ExplanationRequest(movement, "en"), cache, client)
        worker.explanation_ready.connect(window.show_explanation)
        worker.error_occurred.connect(window.show_explanation_error)
        worker.start()
    """

    # Signals for UI updates (thread-safe)
    explanation_ready = pyqtSignal(str, str, bool)
    error_occurred = pyqtSignal(str, str)

    def __init__(self, request: ExplanationRequest,
                 cache: ExplanationCache, client: ExplanationClient):
        """
        Initialize the worker.

        Args:
            request: Movement and language to explain
            cache: Explanation cache
            client: Client used on a cache miss
        """
        super().__init__()
        self.request = request
        self._cache = cache
        self._client = client

    @property
    def request_key(self) -> str:
        return self.request.key

    def run(self):
        """
        Worker body. Called when thread starts.

        Emits exactly one of explanation_ready or error_occurred.
        """
        logger.debug(f"Explanation worker started for {self.request_key}")

        try:
            result = get_step_explanation(
                self.request.movement, self.request.language, self._cache, self._client
            )
        except Exception as e:
            logger.exception("Error in explanation worker")
            self.error_occurred.emit(self.request_key, str(e))
            return

        if isinstance(result, ExplanationSuccess):
            self.explanation_ready.emit(self.request_key, result.explanation, result.cached)
        else:
            self.error_occurred.emit(self.request_key, result.error)
