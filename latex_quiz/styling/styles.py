"""Centralized Qt stylesheets for the player window."""

from latex_quiz.core.models import Difficulty

from .color_palette import ColorPalette


class Styles:
    """Helper class to generate Qt stylesheets from the color palette."""

    @staticmethod
    def get_main_window_style() -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY};
                color: {ColorPalette.TEXT_PRIMARY};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG};
                color: {ColorPalette.BUTTON_TEXT};
                border: none;
                border-radius: 6px;
                padding: 8px 16px;
            }}
            QPushButton:disabled {{
                background-color: {ColorPalette.BORDER_PRIMARY};
            }}
            QLineEdit {{
                border: none;
                padding: 4px;
                qproperty-alignment: AlignCenter;
            }}
            QFrame#answerFrame {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY};
                border-radius: 6px;
            }}
        """

    @staticmethod
    def get_difficulty_button_style(difficulty: Difficulty) -> str:
        return (
            f"background-color: {ColorPalette.DIFFICULTY[difficulty]};"
            f" color: {ColorPalette.BUTTON_TEXT}; font-size: 12pt;"
        )

    @staticmethod
    def get_language_button_style() -> str:
        return f"background: transparent; color: {ColorPalette.BUTTON_PRIMARY_BG}; padding: 2px 6px;"

    @staticmethod
    def get_secondary_button_style() -> str:
        return f"background-color: {ColorPalette.BUTTON_SECONDARY_BG};"

    @staticmethod
    def get_feedback_style(correct: bool) -> str:
        color = ColorPalette.SUCCESS if correct else ColorPalette.ERROR
        return f"color: {color}; font-weight: bold;"

    @staticmethod
    def get_muted_label_style() -> str:
        return f"color: {ColorPalette.TEXT_SECONDARY};"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
