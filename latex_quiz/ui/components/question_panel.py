"""Component that shows the current question and collects the answer."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from latex_quiz.constants.quiz_constants import ESCAPE_PREFIX
from latex_quiz.constants.translations import translate
from latex_quiz.constants.ui_constants import QUESTION_FONT_SIZE, QUESTION_VIEW_MIN_HEIGHT
from latex_quiz.core.models import AnswerOutcome, SessionSnapshot, SessionState
from latex_quiz.styling.styles import Styles
from latex_quiz.ui.question_renderer import render_question_document


class QuestionPanel(QWidget):
    """UI component for the question loop: progress, rendered markup, input and feedback."""

    def __init__(
        self,
        on_input: Callable[[str], str],
        on_submit: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_input = on_input
        self.on_submit = on_submit
        self._language = "en"
        self._snapshot: SessionSnapshot | None = None
        self._rendered_key: tuple[int, str | None] | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.progress_label = QLabel(self)
        self.progress_label.setAlignment(Qt.AlignCenter)
        self.progress_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.progress_label)

        self.question_view = QWebEngineView(self)
        self.question_view.setMinimumHeight(QUESTION_VIEW_MIN_HEIGHT)
        layout.addWidget(self.question_view, stretch=1)

        answer_frame = QFrame(self)
        answer_frame.setObjectName("answerFrame")
        answer_row = QHBoxLayout()
        answer_frame.setLayout(answer_row)

        prefix_label = QLabel(ESCAPE_PREFIX, answer_frame)
        prefix_label.setStyleSheet(Styles.get_muted_label_style())
        answer_row.addWidget(prefix_label)

        self.answer_edit = QLineEdit(answer_frame)
        self.answer_edit.textEdited.connect(self._handle_text_edited)
        self.answer_edit.returnPressed.connect(self._handle_submit)
        answer_row.addWidget(self.answer_edit, stretch=1)
        layout.addWidget(answer_frame)

        self.submit_button = QPushButton(self)
        self.submit_button.clicked.connect(self._handle_submit)
        layout.addWidget(self.submit_button)

        self.feedback_label = QLabel(self)
        self.feedback_label.setAlignment(Qt.AlignCenter)
        self.feedback_label.setWordWrap(True)
        layout.addWidget(self.feedback_label)

        self._refresh_texts()

    def _handle_text_edited(self, text: str) -> None:
        sanitized = self.on_input(text)
        if sanitized != text:
            self.answer_edit.setText(sanitized)

    def _handle_submit(self) -> None:
        if self._snapshot is None or self._snapshot.state is not SessionState.IN_PROGRESS:
            return
        self.on_submit()

    def show_snapshot(self, snapshot: SessionSnapshot) -> None:
        self._snapshot = snapshot
        key = (snapshot.position, snapshot.markup)
        if key != self._rendered_key:
            self._rendered_key = key
            self.question_view.setHtml(render_question_document(snapshot.markup, QUESTION_FONT_SIZE))
        revealing = snapshot.state is SessionState.REVEALING
        self.answer_edit.setReadOnly(revealing)
        self.submit_button.setEnabled(not revealing)
        if self.answer_edit.text() != snapshot.user_input:
            self.answer_edit.setText(snapshot.user_input)
        if not revealing:
            self.answer_edit.setFocus()
        self._refresh_texts()

    def set_language(self, language: str) -> None:
        self._language = language
        self._refresh_texts()

    def _refresh_texts(self) -> None:
        self.answer_edit.setPlaceholderText(translate(self._language, "placeholder"))
        self.submit_button.setText(translate(self._language, "submit"))
        snapshot = self._snapshot
        if snapshot is None:
            self.progress_label.clear()
            self.feedback_label.clear()
            return
        self.progress_label.setText(
            f"{translate(self._language, 'question')} {snapshot.question_number} "
            f"{translate(self._language, 'of')} {snapshot.total}"
        )
        self._refresh_feedback(snapshot)

    def _refresh_feedback(self, snapshot: SessionSnapshot) -> None:
        if snapshot.outcome is AnswerOutcome.CORRECT:
            self.feedback_label.setStyleSheet(Styles.get_feedback_style(correct=True))
            self.feedback_label.setText(translate(self._language, "correct"))
        elif snapshot.outcome is AnswerOutcome.INCORRECT:
            answers = ", ".join(f"{ESCAPE_PREFIX}{answer}" for answer in snapshot.revealed_answers)
            self.feedback_label.setStyleSheet(Styles.get_feedback_style(correct=False))
            self.feedback_label.setText(
                f"{translate(self._language, 'incorrect')}\n"
                f"{translate(self._language, 'correctAnswer')}: {answers}"
            )
        else:
            self.feedback_label.clear()

    def reset_state(self) -> None:
        self._snapshot = None
        self._rendered_key = None
        self.answer_edit.clear()
        self.question_view.setHtml(render_question_document(None))
        self._refresh_texts()
