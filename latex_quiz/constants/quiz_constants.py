"""Quiz-related constants shared across UI, server and core layers."""

from pathlib import Path

MAX_QUESTIONS_PER_SESSION: int = 10
CORRECT_REVEAL_DELAY_MS: int = 1000
INCORRECT_REVEAL_DELAY_MS: int = 2000
STRIP_INPUT_WHITESPACE: bool = True

INVALID_LATEX_FALLBACK: str = "Invalid LaTeX"
ESCAPE_PREFIX: str = "\\"

DEFAULT_QUESTION_BANK_PATH: Path = Path(__file__).resolve().parent.parent / "data" / "quiz_data.csv"
BUILTIN_SOURCE: str = "builtin"
