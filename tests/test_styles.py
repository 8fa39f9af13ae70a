"""
Tests for latex_quiz.styling

Stylesheets are plain strings, so no Qt application is needed.
"""

from latex_quiz.core.models import Difficulty
from latex_quiz.styling import ColorPalette, Styles


def test_every_difficulty_has_a_button_color():
    assert set(ColorPalette.DIFFICULTY) == set(Difficulty)

    for difficulty in Difficulty:
        style = Styles.get_difficulty_button_style(difficulty)
        assert ColorPalette.DIFFICULTY[difficulty] in style
        assert ColorPalette.BUTTON_TEXT in style


def test_feedback_style_uses_success_and_error_colors():
    assert ColorPalette.SUCCESS in Styles.get_feedback_style(correct=True)
    assert ColorPalette.ERROR in Styles.get_feedback_style(correct=False)


def test_main_window_style_uses_the_palette():
    style = Styles.get_main_window_style()

    assert ColorPalette.BACKGROUND_PRIMARY in style
    assert ColorPalette.BORDER_PRIMARY in style
