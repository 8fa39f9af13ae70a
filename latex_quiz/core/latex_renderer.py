"""LaTeX rendering helpers shared by the Qt window and the browser player.

Markup is converted to MathML on the Python side so both front ends display
the exact same fragment and a syntax error can be detected before anything
reaches the screen. A broken expression never raises; it degrades to
``INVALID_LATEX_FALLBACK`` and the quiz carries on.
"""

from __future__ import annotations

from dataclasses import dataclass
import html
import logging

from latex2mathml.converter import convert

from latex_quiz.constants.quiz_constants import INVALID_LATEX_FALLBACK

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LatexRenderer:
    """Converts bare LaTeX expressions into MathML fragments or HTML documents."""

    fallback: str = INVALID_LATEX_FALLBACK

    def render_fragment(self, markup: str, display_mode: bool = True) -> str:
        """Render ``markup`` to MathML, or return the fallback text on failure."""

        sanitized = (markup or "").strip()
        if not sanitized:
            return self.fallback
        try:
            return convert(sanitized, display="block" if display_mode else "inline")
        except Exception:  # noqa: BLE001 - latex2mathml raises many unrelated types
            logger.warning("Could not render LaTeX %r", sanitized, exc_info=True)
            return self.fallback

    def is_fallback(self, fragment: str) -> bool:
        return fragment == self.fallback

    def wrap_document(self, body_html: str, title: str = "LaTeX Symbol Quiz", font_size: int = 28) -> str:
        """Wrap a fragment inside a minimal HTML document for QWebEngineView."""

        if self.is_fallback(body_html):
            body_html = f'<span class="fallback">{html.escape(body_html)}</span>'
        return f"""<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>{html.escape(title)}</title>
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; background: transparent; }}
      .question-math {{ font-size: {font_size}pt; text-align: center; }}
      .fallback {{ color: #d13438; font-size: 0.6em; }}
    </style>
  </head>
  <body>
    <div class=\"question-math\">{body_html}</div>
  </body>
</html>"""

    def render_document(self, markup: str, title: str = "LaTeX Symbol Quiz", font_size: int = 28) -> str:
        """Convenience wrapper to render markup and embed it in a page."""

        return self.wrap_document(self.render_fragment(markup), title=title, font_size=font_size)


renderer = LatexRenderer()
