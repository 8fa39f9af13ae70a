"""Qt UI components for the desktop player."""

from .dialog_helpers import show_error, show_info
from .player_main_window import PlayerMainWindow
from .qt_scheduler import QtScheduler
from .question_renderer import render_question_document

__all__ = [
    "PlayerMainWindow",
    "QtScheduler",
    "render_question_document",
    "show_error",
    "show_info",
]
