"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "LaTeX Symbol Quiz"
WINDOW_MIN_WIDTH: int = 520
WINDOW_MIN_HEIGHT: int = 460
QUESTION_FONT_SIZE: int = 28
QUESTION_VIEW_MIN_HEIGHT: int = 160

LANGUAGE_BUTTON_LABELS: dict[str, str] = {
    "en": "EN",
    "ja": "日本語",
}

LOAD_ERROR_TITLE: str = "Question bank error"
