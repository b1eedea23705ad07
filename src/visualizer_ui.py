"""
Visualizer UI Module for Chebyshev Path Visualizer

Provides the PyQt5 main window: coordinate input, board, path analysis,
step list, explanation panel and language selector.
The window only displays state; the Application reacts to its signals.
"""

import logging
from typing import List, Optional

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QComboBox, QPlainTextEdit, QListWidget, QListWidgetItem, QGroupBox
)
from PyQt5.QtCore import Qt, QTimer, pyqtSignal
from PyQt5.QtGui import QFont

from src.board_view import BoardView
from src.explain import ExplanationRequest, is_current_request
from src.i18n import DEFAULT_LANGUAGE, LANGUAGE_NAMES, normalize_language, translate
from src.pathing import BoardLayout, MAX_RENDERED_SIZE, Movement, Point, build_educational_context
from src.validation import describe_error, is_valid_json

logger = logging.getLogger(__name__)


# Input validation debounce
VALIDATION_DEBOUNCE_MS = 300

VALID_COLOR = "#2e7d32"
INVALID_COLOR = "#d32f2f"
NEUTRAL_COLOR = "#333333"


class VisualizerWindow(QMainWindow):
    """
    Main window of the Chebyshev Path Visualizer.

    Emits signals for user actions and exposes setters the Application
    uses to display path, error and explanation state.
    """

    # Signals for user actions
    calculate_requested = pyqtSignal(str)  # Emits raw JSON text
    example_requested = pyqtSignal()
    step_selected = pyqtSignal(int)        # Emits 1-based step number
    language_changed = pyqtSignal(str)     # Emits language code
    snapshot_requested = pyqtSignal()
    shutdown_requested = pyqtSignal()

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        super().__init__()
        self._language = normalize_language(language)
        self._movements: List[Movement] = []
        self._coordinates: List[Point] = []
        self._total_steps = 0
        self._error_key: Optional[str] = None
        self._error_details: Optional[str] = None
        self._selected_movement: Optional[Movement] = None

        self._validation_timer = QTimer(self)
        self._validation_timer.setSingleShot(True)
        self._validation_timer.setInterval(VALIDATION_DEBOUNCE_MS)
        self._validation_timer.timeout.connect(self._update_validation_indicator)

        self._init_ui()
        self.retranslate()

    @property
    def language(self) -> str:
        return self._language

    def _init_ui(self):
        """Initialize the user interface components."""
        self.resize(1000, 680)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        root = QVBoxLayout()
        root.setSpacing(10)
        root.setContentsMargins(16, 16, 16, 16)
        central_widget.setLayout(root)

        # Header: intro and language selector
        header = QHBoxLayout()
        self.intro_label = QLabel()
        self.intro_label.setWordWrap(True)
        header.addWidget(self.intro_label, 1)

        self.language_label = QLabel()
        header.addWidget(self.language_label)
        self.language_combo = QComboBox()
        for code, name in LANGUAGE_NAMES.items():
            self.language_combo.addItem(name, code)
        self.language_combo.setCurrentIndex(self.language_combo.findData(self._language))
        self.language_combo.currentIndexChanged.connect(self._on_language_changed)
        header.addWidget(self.language_combo)
        root.addLayout(header)

        columns = QHBoxLayout()
        root.addLayout(columns, 1)

        # Left column: input and steps
        left = QVBoxLayout()
        columns.addLayout(left, 1)

        self.input_group = QGroupBox()
        input_layout = QVBoxLayout()
        self.input_group.setLayout(input_layout)

        self.input_edit = QPlainTextEdit()
        self.input_edit.setFont(QFont("Monospace", 9))
        self.input_edit.textChanged.connect(self._on_text_changed)
        input_layout.addWidget(self.input_edit)

        self.validation_label = QLabel()
        input_layout.addWidget(self.validation_label)

        buttons = QHBoxLayout()
        self.example_button = QPushButton()
        self.example_button.clicked.connect(self.example_requested.emit)
        buttons.addWidget(self.example_button)
        self.calculate_button = QPushButton()
        self.calculate_button.setMinimumHeight(35)
        self.calculate_button.clicked.connect(self._on_calculate_clicked)
        buttons.addWidget(self.calculate_button)
        input_layout.addLayout(buttons)

        self.error_label = QLabel()
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet(f"color: {INVALID_COLOR};")
        self.error_label.hide()
        input_layout.addWidget(self.error_label)
        left.addWidget(self.input_group)

        self.steps_group = QGroupBox()
        steps_layout = QVBoxLayout()
        self.steps_group.setLayout(steps_layout)
        self.steps_list = QListWidget()
        self.steps_list.currentRowChanged.connect(self._on_step_row_changed)
        steps_layout.addWidget(self.steps_list)
        left.addWidget(self.steps_group, 1)

        # Right column: board, analysis and explanation
        right = QVBoxLayout()
        columns.addLayout(right, 2)

        self.board_group = QGroupBox()
        board_layout = QVBoxLayout()
        self.board_group.setLayout(board_layout)
        self.board_view = BoardView()
        board_layout.addWidget(self.board_view, 1)
        self.empty_label = QLabel()
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setWordWrap(True)
        board_layout.addWidget(self.empty_label)

        self.coordinates_label = QLabel()
        self.min_steps_label = QLabel()
        self.sequence_label = QLabel()
        self.sequence_label.setWordWrap(True)
        info_font = QFont()
        info_font.setPointSize(9)
        for label in [self.coordinates_label, self.min_steps_label, self.sequence_label]:
            label.setFont(info_font)
            board_layout.addWidget(label)

        self.snapshot_button = QPushButton()
        self.snapshot_button.clicked.connect(self.snapshot_requested.emit)
        self.snapshot_button.setEnabled(False)  # Disabled until a path exists
        board_layout.addWidget(self.snapshot_button)
        right.addWidget(self.board_group, 1)

        self.explanation_group = QGroupBox()
        explanation_layout = QVBoxLayout()
        self.explanation_group.setLayout(explanation_layout)
        self.explanation_label = QLabel()
        self.explanation_label.setWordWrap(True)
        self.explanation_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        explanation_layout.addWidget(self.explanation_label)
        self.formula_label = QLabel()
        self.formula_label.setFont(QFont("Monospace", 9))
        explanation_layout.addWidget(self.formula_label)
        right.addWidget(self.explanation_group)

        self.status_label = QLabel()
        root.addWidget(self.status_label)

        self._apply_styles()

    def _apply_styles(self):
        """Apply clean, minimal styling to the window."""
        style = """
            QMainWindow {
                background-color: #f5f5f5;
            }
            QPushButton {
                background-color: #2563eb;
                color: white;
                border: none;
                border-radius: 5px;
                padding: 8px;
            }
            QPushButton:hover {
                background-color: #1d4ed8;
            }
            QPushButton:disabled {
                background-color: #cccccc;
                color: #666666;
            }
            QLabel {
                color: #333333;
            }
        """
        self.setStyleSheet(style)

    def _t(self, key: str, **kwargs) -> str:
        return translate(key, self._language, **kwargs)

    def retranslate(self):
        """Re-apply every visible string in the current language."""
        self.setWindowTitle(self._t("app.title"))
        self.intro_label.setText(self._t("app.intro"))
        self.language_label.setText(self._t("language.label"))
        self.input_group.setTitle(self._t("coordinateInput.title"))
        self.input_edit.setPlaceholderText(self._t("coordinateInput.placeholder"))
        self.example_button.setText(self._t("coordinateInput.loadExample"))
        self.calculate_button.setText(self._t("coordinateInput.calculate"))
        self.steps_group.setTitle(self._t("steps.title"))
        self.snapshot_button.setText(self._t("board.saveImage"))
        self.explanation_group.setTitle(self._t("explanation.title"))

        if self._error_key:
            self.error_label.setText(
                describe_error(self._error_key, self._language, self._error_details))
        self._update_validation_indicator()
        self._refresh_board_notice()
        self._refresh_analysis()
        self._refresh_steps()
        if self._selected_movement is None:
            self.explanation_label.setText(self._t("explanation.hint"))

    # --- Input ---

    def _on_text_changed(self):
        """Restart the validation debounce timer."""
        self._validation_timer.start()

    def _update_validation_indicator(self):
        text = self.input_edit.toPlainText()
        if not text.strip():
            self.validation_label.setText("")
            return

        if is_valid_json(text):
            self.validation_label.setText(self._t("coordinateInput.validation.validJson"))
            self.validation_label.setStyleSheet(f"color: {VALID_COLOR};")
        else:
            self.validation_label.setText(self._t("coordinateInput.validation.invalidJson"))
            self.validation_label.setStyleSheet(f"color: {INVALID_COLOR};")

    def _on_calculate_clicked(self):
        self.calculate_requested.emit(self.input_edit.toPlainText())

    def set_input_text(self, text: str):
        """
        Replace the input box content.

        Args:
            text: JSON text
        """
        self.input_edit.setPlainText(text)
        self._validation_timer.stop()
        self._update_validation_indicator()

    def input_text(self) -> str:
        return self.input_edit.toPlainText()

    def show_error(self, message_key: Optional[str], details: Optional[str] = None):
        """
        Show or clear the input error.

        Args:
            message_key: i18n key, or None to clear
            details: Extra context, shown in messages that name it and as tooltip
        """
        self._error_key = message_key
        self._error_details = details
        if message_key:
            self.error_label.setText(describe_error(message_key, self._language, details))
            self.error_label.setToolTip(details or "")
            self.error_label.show()
        else:
            self.error_label.hide()

    # --- Path ---

    def show_path(self, coordinates: List[Point], total_steps: int,
                  movements: List[Movement], layout: BoardLayout):
        """
        Display a calculated path.

        Args:
            coordinates: Waypoints in visiting order
            total_steps: Minimum step count
            movements: Decomposed movements
            layout: Board layout for the waypoints
        """
        self._coordinates = list(coordinates)
        self._total_steps = total_steps
        self._movements = list(movements)
        self._selected_movement = None

        self.board_view.set_path(layout, movements)
        self.board_view.setVisible(layout.renderable)
        self.snapshot_button.setEnabled(bool(coordinates) and layout.renderable)
        self._refresh_board_notice()

        self._refresh_analysis()
        self._refresh_steps()
        self.explanation_label.setText(self._t("explanation.hint"))
        self.formula_label.setText("")

    def _refresh_board_notice(self):
        board = self.board_view.layout_info
        if not board.renderable:
            self.empty_label.setText(self._t("board.tooLarge", size=MAX_RENDERED_SIZE))
            self.empty_label.setVisible(True)
        else:
            self.empty_label.setText(self._t("board.noCoordinates"))
            self.empty_label.setVisible(not self._coordinates)

    def _refresh_analysis(self):
        board = self.board_view.layout_info
        size = self._t("board.size", width=board.width, height=board.height)
        self.board_group.setTitle(f"{self._t('board.title')} ({size})")
        self.coordinates_label.setText(
            f"{self._t('board.analysis.totalCoordinates')}: {len(self._coordinates)}")
        self.min_steps_label.setText(
            f"{self._t('board.analysis.minSteps')}: {self._total_steps}")
        sequence = " → ".join(str(p) for p in self._coordinates)
        self.sequence_label.setText(
            f"{self._t('board.analysis.sequence')}: {sequence or '--'}")

    def _refresh_steps(self):
        current = self.steps_list.currentRow()
        self.steps_list.blockSignals(True)
        self.steps_list.clear()
        for movement in self._movements:
            text = (f"{self._t('steps.step')} {movement.step_number}: "
                    f"{movement.origin} {movement.direction.arrow} {movement.target}")
            item = QListWidgetItem(text)
            item.setData(Qt.UserRole, movement.step_number)
            self.steps_list.addItem(item)
        if 0 <= current < self.steps_list.count() and self._selected_movement is not None:
            self.steps_list.setCurrentRow(current)
        self.steps_list.blockSignals(False)

    def _on_step_row_changed(self, row: int):
        if row < 0 or row >= len(self._movements):
            return
        movement = self._movements[row]
        self._selected_movement = movement
        self.board_view.set_selected_step(movement.step_number)
        self.formula_label.setText(build_educational_context(movement).formula)
        self.step_selected.emit(movement.step_number)

    @property
    def selected_step(self) -> Optional[int]:
        """Step whose explanation is currently wanted."""
        if self._selected_movement is None:
            return None
        return self._selected_movement.step_number

    @property
    def current_request(self) -> Optional[ExplanationRequest]:
        """Explanation wanted on screen: the selected movement in the UI language."""
        if self._selected_movement is None:
            return None
        return ExplanationRequest(self._selected_movement, self._language)

    # --- Explanation ---

    def show_explanation_loading(self, request_key: str):
        if is_current_request(request_key, self.current_request):
            self.explanation_label.setText(self._t("explanation.loading"))

    def show_explanation(self, request_key: str, text: str, cached: bool = False):
        """
        Display an explanation if it belongs to the current selection.

        Results for another movement or another language are dropped.

        Args:
            request_key: Key of the request the explanation was generated for
            text: Explanation text
            cached: True if served from cache
        """
        if not is_current_request(request_key, self.current_request):
            logger.debug(f"Discarding explanation for {request_key}")
            return
        suffix = f" {self._t('explanation.cached')}" if cached else ""
        self.explanation_label.setText(f"{text}{suffix}")

    def show_explanation_error(self, request_key: str, error: str):
        if not is_current_request(request_key, self.current_request):
            return
        self.explanation_label.setText(f"{self._t('explanation.error')}: {error}")

    # --- Language / status ---

    def _on_language_changed(self, index: int):
        code = self.language_combo.itemData(index)
        if code and code != self._language:
            self.set_language(code)
            self.language_changed.emit(code)

    def set_language(self, language: str):
        """Switch UI language and refresh all strings."""
        self._language = normalize_language(language)
        combo_index = self.language_combo.findData(self._language)
        if combo_index >= 0 and combo_index != self.language_combo.currentIndex():
            self.language_combo.blockSignals(True)
            self.language_combo.setCurrentIndex(combo_index)
            self.language_combo.blockSignals(False)
        self.retranslate()

    def set_status(self, text: str):
        """Update the status bar label."""
        self.status_label.setText(text)
        self.status_label.setStyleSheet(f"color: {NEUTRAL_COLOR};")

    def closeEvent(self, event):
        """
        Handle window close event.

        Emits shutdown_requested so running explanation workers can finish.

        Args:
            event: QCloseEvent object
        """
        self.shutdown_requested.emit()
        event.accept()
