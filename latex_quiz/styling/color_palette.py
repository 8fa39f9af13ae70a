"""Color palette for the quiz player."""

from __future__ import annotations

from latex_quiz.core.models import Difficulty


class ColorPalette:
    """Centralized color definitions for the player window."""

    TEXT_PRIMARY = "#111827"
    TEXT_SECONDARY = "#6B7280"

    BACKGROUND_PRIMARY = "#FFFFFF"
    BORDER_PRIMARY = "#D1D5DB"

    BUTTON_PRIMARY_BG = "#3B82F6"
    BUTTON_SECONDARY_BG = "#6B7280"
    BUTTON_TEXT = "#FFFFFF"

    SUCCESS = "#16A34A"
    ERROR = "#DC2626"

    DIFFICULTY = {
        Difficulty.EASY: "#22C55E",
        Difficulty.MEDIUM: "#EAB308",
        Difficulty.HARD: "#EF4444",
    }
