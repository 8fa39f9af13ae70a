"""Question rendering utilities for the Qt player."""

from __future__ import annotations

from latex_quiz.constants.ui_constants import QUESTION_FONT_SIZE
from latex_quiz.core.latex_renderer import renderer


def render_question_document(markup: str | None, font_size: int = QUESTION_FONT_SIZE) -> str:
    """Render a bare LaTeX expression as an HTML page for QWebEngineView.

    Args:
        markup: The expression without ``$`` delimiters, or ``None`` for a blank page
        font_size: Font size in points for the rendered expression

    Returns:
        HTML string; broken markup shows the invalid-LaTeX fallback text
    """
    if markup is None:
        return renderer.wrap_document("", font_size=font_size)
    return renderer.render_document(markup, font_size=font_size)
