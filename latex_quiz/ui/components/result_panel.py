"""Component for the final score screen."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from latex_quiz.constants.translations import translate
from latex_quiz.core.models import SessionSnapshot
from latex_quiz.styling.styles import Styles


class ResultPanel(QWidget):
    """Shows the score, the celebratory tier and the restart button."""

    def __init__(self, on_restart: Callable[[], None], parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.on_restart = on_restart
        self._language = "en"
        self._snapshot: SessionSnapshot | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        self.indicator_label = QLabel(self)
        self.indicator_label.setAlignment(Qt.AlignCenter)
        self.indicator_label.setStyleSheet("font-size: 40pt;")
        layout.addWidget(self.indicator_label)

        self.score_label = QLabel(self)
        self.score_label.setAlignment(Qt.AlignCenter)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.score_label)

        self.tier_label = QLabel(self)
        self.tier_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.tier_label)

        self.restart_button = QPushButton(self)
        self.restart_button.setStyleSheet(Styles.get_secondary_button_style())
        self.restart_button.clicked.connect(lambda _checked=False: self.on_restart())
        layout.addWidget(self.restart_button)
        layout.addStretch()

        self._refresh_texts()

    def show_snapshot(self, snapshot: SessionSnapshot) -> None:
        self._snapshot = snapshot
        self._refresh_texts()

    def set_language(self, language: str) -> None:
        self._language = language
        self._refresh_texts()

    def _refresh_texts(self) -> None:
        self.restart_button.setText(translate(self._language, "back"))
        snapshot = self._snapshot
        if snapshot is None:
            return
        self.score_label.setText(
            f"{translate(self._language, 'score')}: {snapshot.score} / {snapshot.total}"
        )
        if snapshot.tier is None:
            self.indicator_label.clear()
            self.tier_label.clear()
            return
        self.indicator_label.setText(snapshot.tier.indicator)
        self.tier_label.setText(translate(self._language, f"tier_{snapshot.tier.value}"))
