"""Component for choosing the difficulty of a new quiz."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from latex_quiz.constants.translations import translate
from latex_quiz.core.models import Difficulty
from latex_quiz.styling.styles import Styles


class DifficultyPanel(QWidget):
    """Shows one button per difficulty; empty difficulties are disabled."""

    def __init__(
        self,
        on_select: Callable[[Difficulty], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_select = on_select
        self._language = "en"
        self._counts: dict[Difficulty, int] = {difficulty: 0 for difficulty in Difficulty}
        self._buttons: dict[Difficulty, QPushButton] = {}

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.prompt_label = QLabel(self)
        self.prompt_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.prompt_label)

        for difficulty in Difficulty:
            button = QPushButton(self)
            button.setStyleSheet(Styles.get_difficulty_button_style(difficulty))
            button.clicked.connect(lambda _checked=False, d=difficulty: self.on_select(d))
            layout.addWidget(button)
            self._buttons[difficulty] = button

        layout.addStretch()
        self._refresh_texts()

    def set_counts(self, counts: dict[Difficulty, int]) -> None:
        self._counts = dict(counts)
        self._refresh_texts()

    def set_language(self, language: str) -> None:
        self._language = language
        self._refresh_texts()

    def _refresh_texts(self) -> None:
        self.prompt_label.setText(translate(self._language, "selectDifficulty"))
        for difficulty, button in self._buttons.items():
            label = translate(self._language, difficulty.value)
            available = self._counts.get(difficulty, 0) > 0
            if not available:
                label = f"{label} ({translate(self._language, 'noQuestions')})"
            button.setText(label)
            button.setEnabled(available)
