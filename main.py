"""
Chebyshev Path Visualizer - Entry Point

Launches the visualizer window and wires it to the path session,
persistence and explanation workers.

Example:
    python main.py
    python main.py --language es
    python main.py --provider offline  # No network, template explanations
"""

import sys
import logging
import argparse
from datetime import datetime
from typing import Dict, Optional

from PyQt5.QtWidgets import QApplication

from src.explain import ExplanationClient, ExplanationRequest, MissingApiKeyError, create_client
from src.explanation_worker import ExplanationWorker
from src.i18n import normalize_language, translate
from src.path_session import PathSession
from src.pathing import BoardLayout, MAX_RENDERED_SIZE
from src.settings import data_path, load_settings, save_settings
from src.snapshot import SNAPSHOT_DIR, save_board_snapshot
from src.storage import CoordinateStore, ExplanationCache
from src.visualizer_ui import VisualizerWindow


logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False):
    """Log to both console and visualizer.log."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("visualizer.log", mode='w', encoding='utf-8')  # File output
        ]
    )


class Application:
    """
    Main application controller.

    Owns the path session, the explanation cache and client, and the
    explanation workers, connecting them to the window's signals.
    """

    def __init__(self, language: Optional[str] = None, provider: Optional[str] = None):
        """
        Initialize the application.

        Args:
            language: UI language (overrides saved setting)
            provider: Explanation provider name (overrides saved setting)
        """
        self.window: Optional[VisualizerWindow] = None
        self.workers: Dict[str, ExplanationWorker] = {}  # Keyed by request key

        # Load persistent settings
        self.settings = load_settings()
        if language:
            self.settings["language"] = normalize_language(language)
        self.language = normalize_language(self.settings["language"])

        self.session = PathSession(CoordinateStore(data_path(self.settings, "coordinates.json")))
        self.cache = ExplanationCache(
            data_path(self.settings, "explanations.json"),
            ttl_seconds=float(self.settings["cache_ttl_hours"]) * 3600,
        )
        self.client = self._create_client(provider or self.settings["explanation_provider"])

    def _create_client(self, provider: str) -> ExplanationClient:
        """Create the explanation client, falling back to offline without credentials."""
        config = {}
        if provider == "groq":
            config = {
                "model": self.settings["groq_model"],
                "timeout": float(self.settings["request_timeout_sec"]),
            }
        try:
            return create_client(provider, **config)
        except MissingApiKeyError as e:
            logger.warning(f"{e} - using offline explanations")
            return create_client("offline")

    def setup(self):
        """Set up the UI and connect signals."""
        self.window = VisualizerWindow(language=self.language)

        # Connect UI signals to handlers
        self.window.calculate_requested.connect(self._on_calculate)
        self.window.example_requested.connect(self._on_example)
        self.window.step_selected.connect(self._on_step_selected)
        self.window.language_changed.connect(self._on_language_changed)
        self.window.snapshot_requested.connect(self._on_snapshot)
        self.window.shutdown_requested.connect(self._on_shutdown)

        # Restore last session
        if self.session.load_saved():
            self.window.set_input_text(self.session.coordinates_json)
            self._show_session_path()

        logger.info(f"Application initialized, explanations via: {self.client.name}")

    def _show_session_path(self):
        self.window.show_path(
            self.session.coordinates,
            self.session.total_steps,
            self.session.movements,
            BoardLayout.from_waypoints(self.session.coordinates),
        )

    def _on_calculate(self, text: str):
        """Handle Calculate button click."""
        self.session.set_coordinates_json(text)
        result = self.session.calculate()
        if result.success:
            self.window.show_error(None)
            self._show_session_path()
        else:
            self.window.show_error(result.error, result.details)

    def _on_example(self):
        """Handle Load example button click."""
        self.session.load_example()
        self.window.set_input_text(self.session.coordinates_json)
        self.window.show_error(None)

    def _on_step_selected(self, step_number: int):
        """Start an explanation worker for the selected step."""
        movement = self.session.movement(step_number)
        if movement is None:
            logger.warning(f"No movement for step {step_number}")
            return

        request = ExplanationRequest(movement, self.language)
        running = self.workers.get(request.key)
        if running is not None and running.isRunning():
            # Same movement and language: its result will match the selection
            logger.debug(f"Explanation for {request.key} already in progress")
            self.window.show_explanation_loading(request.key)
            return

        worker = ExplanationWorker(request, self.cache, self.client)
        worker.explanation_ready.connect(self.window.show_explanation)
        worker.error_occurred.connect(self._on_explanation_error)
        worker.finished.connect(lambda key=request.key: self._on_worker_finished(key))
        self.workers[request.key] = worker

        self.window.show_explanation_loading(request.key)
        worker.start()

    def _on_worker_finished(self, request_key: str):
        worker = self.workers.get(request_key)
        if worker is not None and not worker.isRunning():
            del self.workers[request_key]

    def _on_explanation_error(self, request_key: str, error: str):
        """Handle worker error."""
        logger.error(f"Explanation error for {request_key}: {error}")
        self.window.show_explanation_error(request_key, error)

    def _on_language_changed(self, language: str):
        """Handle language selection change from UI."""
        logger.info(f"Language changed to: {language}")
        self.language = language

        # Save to persistent settings
        self.settings["language"] = language
        save_settings(self.settings)

        # Re-request the open explanation in the new language
        if self.window.selected_step is not None:
            self._on_step_selected(self.window.selected_step)

    def _on_snapshot(self):
        """Handle Save board image button click."""
        if not self.session.has_path:
            logger.warning("No path to save")
            return

        layout = BoardLayout.from_waypoints(self.session.coordinates)
        if not layout.renderable:
            logger.warning(f"Board {layout.width}x{layout.height} too large for an image")
            self.window.set_status(translate("board.tooLarge", self.language, size=MAX_RENDERED_SIZE))
            return

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = SNAPSHOT_DIR / f"board_{timestamp}.png"
        try:
            save_board_snapshot(layout, self.session.movements, str(path))
        except OSError as e:
            logger.error(f"Failed to save board image: {e}")
            self.window.set_status(translate("errors.unexpected", self.language))
            return
        self.window.set_status(translate("status.saved", self.language, path=path))

    def _on_shutdown(self):
        """Handle window close."""
        logger.info("Shutdown requested")
        for worker in list(self.workers.values()):
            worker.wait(2000)  # 2 second timeout
        self.workers.clear()
        self.client.close()

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        self.window.show()
        return 0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Chebyshev Path Visualizer - Minimum steps on an 8-direction board"
    )
    parser.add_argument(
        "--language", "-l",
        default=None,
        help="UI language: en or es (default: saved setting)"
    )
    parser.add_argument(
        "--provider", "-p",
        default=None,
        help="Explanation provider: groq or offline (default: saved setting)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args()


def main():
    """Initialize and run the Chebyshev Path Visualizer application."""
    args = parse_args()
    configure_logging(args.debug)

    app = QApplication(sys.argv)

    application = Application(language=args.language, provider=args.provider)
    application.setup()
    application.run()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
