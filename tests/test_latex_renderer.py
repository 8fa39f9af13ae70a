"""Tests for latex_quiz.core.latex_renderer"""

import pytest

from latex_quiz.constants.quiz_constants import INVALID_LATEX_FALLBACK
from latex_quiz.core import latex_renderer
from latex_quiz.core.latex_renderer import LatexRenderer, renderer


def test_valid_markup_renders_mathml():
    fragment = renderer.render_fragment(r"\alpha")

    assert "<math" in fragment
    assert not renderer.is_fallback(fragment)


@pytest.mark.parametrize(("display_mode", "expected"), [(True, "block"), (False, "inline")])
def test_display_mode_is_forwarded(monkeypatch, display_mode, expected):
    seen = {}

    def fake_convert(markup, display):
        seen["display"] = display
        return "<math></math>"

    monkeypatch.setattr(latex_renderer, "convert", fake_convert)

    LatexRenderer().render_fragment(r"\beta", display_mode=display_mode)

    assert seen["display"] == expected


def test_converter_failure_returns_fallback(monkeypatch):
    def broken_convert(markup, display):
        raise IndexError("unbalanced braces")

    monkeypatch.setattr(latex_renderer, "convert", broken_convert)

    assert LatexRenderer().render_fragment(r"\frac{a") == INVALID_LATEX_FALLBACK


@pytest.mark.parametrize("markup", ["", "   ", None])
def test_empty_markup_returns_fallback(markup):
    assert renderer.render_fragment(markup) == INVALID_LATEX_FALLBACK


def test_document_marks_fallback_visibly(monkeypatch):
    monkeypatch.setattr(latex_renderer, "convert", lambda markup, display: 1 / 0)

    document = LatexRenderer().render_document(r"\oops", font_size=20)

    assert '<span class="fallback">Invalid LaTeX</span>' in document
    assert "font-size: 20pt" in document


@pytest.mark.parametrize("markup", [r"x^", r"\left("])
def test_malformed_markup_from_the_real_converter_returns_fallback(markup):
    assert LatexRenderer().render_fragment(markup) == INVALID_LATEX_FALLBACK
