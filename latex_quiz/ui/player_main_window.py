"""Qt main window hosting one quiz session: difficulty, question loop, result."""

from __future__ import annotations

from enum import Enum, auto
import random

from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from latex_quiz.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION
from latex_quiz.constants.translations import DEFAULT_LANGUAGE, translate
from latex_quiz.constants.ui_constants import (
    LANGUAGE_BUTTON_LABELS,
    WINDOW_MIN_HEIGHT,
    WINDOW_MIN_WIDTH,
    WINDOW_TITLE,
)
from latex_quiz.core.models import Difficulty, SessionSnapshot, SessionState
from latex_quiz.core.question_store import QuestionStore
from latex_quiz.core.quiz_session import QuizSession
from latex_quiz.styling.styles import Styles
from latex_quiz.ui.components.difficulty_panel import DifficultyPanel
from latex_quiz.ui.components.question_panel import QuestionPanel
from latex_quiz.ui.components.result_panel import ResultPanel
from latex_quiz.ui.dialog_helpers import show_info
from latex_quiz.ui.qt_scheduler import QtScheduler


class PlayerMode(Enum):
    """Which panel the window is showing."""

    SELECT = auto()
    QUESTION = auto()
    RESULT = auto()


class PlayerMainWindow(QMainWindow):
    """Main Qt window that drives a QuizSession with a QTimer-based scheduler."""

    def __init__(
        self,
        question_store: QuestionStore,
        student_url: str | None = None,
        seed: int | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.setMinimumSize(WINDOW_MIN_WIDTH, WINDOW_MIN_HEIGHT)

        self.question_store = question_store
        self.student_url = student_url
        self._language = DEFAULT_LANGUAGE
        self._mode = PlayerMode.SELECT

        self.session = QuizSession(
            question_store.questions,
            QtScheduler(self),
            rng=random.Random(seed),
        )
        self.session.subscribe(self._render_snapshot)

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self.difficulty_panel.set_counts(question_store.count_by_difficulty())
        self._apply_language()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_top_row(root_layout)

        self.title_label = QLabel(self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        root_layout.addWidget(self.title_label)

        self.mode_stack = QStackedWidget(self)
        self.difficulty_panel = DifficultyPanel(on_select=self._handle_select_difficulty, parent=self)
        self.question_panel = QuestionPanel(
            on_input=self.session.update_input,
            on_submit=self._handle_submit,
            parent=self,
        )
        self.result_panel = ResultPanel(on_restart=self._handle_restart, parent=self)

        self.mode_stack.addWidget(self.difficulty_panel)
        self.mode_stack.addWidget(self.question_panel)
        self.mode_stack.addWidget(self.result_panel)
        root_layout.addWidget(self.mode_stack, stretch=1)

        if self.student_url:
            self.network_label = QLabel(f"Browser version: {self.student_url}", self)
            self.network_label.setStyleSheet(Styles.get_muted_label_style())
            root_layout.addWidget(self.network_label)

        self._set_mode(PlayerMode.SELECT)

    def _build_top_row(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()
        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.setStyleSheet(Styles.get_language_button_style())
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)
        button_row.addStretch()

        self.language_buttons: dict[str, QPushButton] = {}
        for language, label in LANGUAGE_BUTTON_LABELS.items():
            button = QPushButton(label, self)
            button.setStyleSheet(Styles.get_language_button_style())
            button.clicked.connect(lambda _checked=False, lang=language: self._handle_language(lang))
            button_row.addWidget(button)
            self.language_buttons[language] = button

        layout.addLayout(button_row)

    def _set_mode(self, mode: PlayerMode) -> None:
        self._mode = mode
        index_map = {
            PlayerMode.SELECT: 0,
            PlayerMode.QUESTION: 1,
            PlayerMode.RESULT: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _render_snapshot(self, snapshot: SessionSnapshot) -> None:
        if snapshot.state is SessionState.IDLE:
            self.question_panel.reset_state()
            self._set_mode(PlayerMode.SELECT)
        elif snapshot.state is SessionState.FINISHED:
            self.result_panel.show_snapshot(snapshot)
            self._set_mode(PlayerMode.RESULT)
        else:
            self.question_panel.show_snapshot(snapshot)
            self._set_mode(PlayerMode.QUESTION)

    def _handle_select_difficulty(self, difficulty: Difficulty) -> None:
        if self.session.state is not SessionState.IDLE:
            return
        self.session.start(difficulty)

    def _handle_submit(self) -> None:
        self.session.submit()

    def _handle_restart(self) -> None:
        self.session.restart()

    def _handle_language(self, language: str) -> None:
        self._language = language
        self._apply_language()

    def _apply_language(self) -> None:
        self.title_label.setText(translate(self._language, "title"))
        self.difficulty_panel.set_language(self._language)
        self.question_panel.set_language(self._language)
        self.result_panel.set_language(self._language)

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)
