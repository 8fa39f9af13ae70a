"""Loading and validation of the question bank.

CSV format (header row required, comma separated, standard double quotes for
fields containing commas or newlines):

    latex,answers,level
    $\\alpha$,alpha,easy
    $\\leq$,"leq, le",medium

Column aliases: ``markup``/``latex``, ``answers``/``correctAnswers`` and
``difficulty``/``level``. Markup must be wrapped in ``$...$``; the delimiters
are removed before storage. ``answers`` is a comma separated list of accepted
commands without the leading backslash.

Any structural problem raises :class:`QuestionBankParseError`; any row that
fails the schema raises :class:`QuestionBankValidationError` listing every
offending row. There is never a partial result.

The built-in bank is an alternative backend that goes through the same row
validation, so both sources honour one contract.
"""

from __future__ import annotations

from collections import Counter
import csv
from dataclasses import dataclass
from functools import lru_cache
import io
import logging
from pathlib import Path
import re
from typing import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from latex_quiz.constants.quiz_constants import BUILTIN_SOURCE, DEFAULT_QUESTION_BANK_PATH
from latex_quiz.core.models import Difficulty, QuestionRecord

logger = logging.getLogger(__name__)

_DELIMITED_MARKUP = re.compile(r"\$.*\$", re.DOTALL)

_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "markup": ("markup", "latex"),
    "answers": ("answers", "correctAnswers"),
    "difficulty": ("difficulty", "level"),
}


class QuestionBankError(Exception):
    """Base class for question bank loading failures."""


class QuestionBankParseError(QuestionBankError):
    """Raised when the tabular structure itself cannot be read."""


@dataclass(frozen=True, slots=True)
class RowError:
    """Schema violations found in a single data row."""

    row_number: int
    line_number: int
    messages: tuple[str, ...]

    def describe(self) -> str:
        return f"row {self.row_number} (line {self.line_number}): " + "; ".join(self.messages)


class QuestionBankValidationError(QuestionBankError):
    """Raised when one or more rows violate the question schema."""

    def __init__(self, row_errors: list[RowError]) -> None:
        self.row_errors = row_errors
        details = "\n".join(f"  - {error.describe()}" for error in row_errors)
        super().__init__(
            f"Question bank validation failed for {len(row_errors)} row(s):\n{details}"
        )


class QuestionRow(BaseModel):
    """Schema for one question row after column aliases are resolved."""

    model_config = ConfigDict(frozen=True)

    markup: str
    answers: tuple[str, ...]
    difficulty: Difficulty

    @field_validator("markup")
    @classmethod
    def _strip_delimiters(cls, value: str) -> str:
        if not _DELIMITED_MARKUP.fullmatch(value):
            raise ValueError("markup must be enclosed in $...$")
        bare = value[1:-1].strip()
        if not bare:
            raise ValueError("markup must not be empty")
        return bare

    @field_validator("answers", mode="before")
    @classmethod
    def _split_answers(cls, value: object) -> tuple[str, ...]:
        if isinstance(value, str):
            pieces: Iterable[object] = value.split(",")
        elif isinstance(value, (list, tuple)):
            pieces = value
        else:
            raise ValueError("answers must be a comma separated string")
        cleaned: list[str] = []
        for piece in pieces:
            answer = str(piece).strip()
            if answer and answer not in cleaned:
                cleaned.append(answer)
        if not cleaned:
            raise ValueError("at least one accepted answer is required")
        return tuple(cleaned)

    def to_record(self) -> QuestionRecord:
        return QuestionRecord(
            markup=self.markup,
            accepted_answers=self.answers,
            difficulty=self.difficulty,
        )


def load_questions_from_text(text: str) -> tuple[QuestionRecord, ...]:
    """Parse and validate CSV text into question records, preserving row order."""
    logger.debug("Parsing question bank (%d characters)", len(text))
    raw_rows = list(_read_rows(text))
    records = _validate_rows(raw_rows)
    logger.info("Loaded %d questions", len(records))
    return records


def load_questions_from_file(file_path: Path) -> tuple[QuestionRecord, ...]:
    text = Path(file_path).read_text(encoding="utf-8-sig")
    logger.info("Reading question bank from %s", file_path)
    return load_questions_from_text(text)


def builtin_questions() -> tuple[QuestionRecord, ...]:
    """Return the question list bundled with the application code."""
    rows = [
        (index, index, {"markup": markup, "answers": answers, "difficulty": level})
        for index, (markup, answers, level) in enumerate(_BUILTIN_ROWS, start=1)
    ]
    return _validate_rows(rows)


def _read_rows(text: str) -> Iterator[tuple[int, int, dict[str, str]]]:
    """Yield ``(row_number, line_number, fields)`` for every non-blank data row."""
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    try:
        header = _next_non_blank(reader)
        if header is None:
            raise QuestionBankParseError("Question bank is empty; a header row is required.")
        columns = _resolve_columns(header)

        row_number = 0
        for row in reader:
            if not row:
                continue
            row_number += 1
            if len(row) != len(header):
                raise QuestionBankParseError(
                    f"Line {reader.line_num}: expected {len(header)} fields, found {len(row)}."
                )
            yield row_number, reader.line_num, {
                name: row[index] for name, index in columns.items()
            }
    except csv.Error as exc:
        raise QuestionBankParseError(f"Line {reader.line_num}: {exc}") from exc


def _next_non_blank(reader: Iterator[list[str]]) -> list[str] | None:
    for row in reader:
        if row:
            return row
    return None


def _resolve_columns(header: list[str]) -> dict[str, int]:
    columns: dict[str, int] = {}
    for name, aliases in _COLUMN_ALIASES.items():
        index = next((header.index(alias) for alias in aliases if alias in header), None)
        if index is None:
            raise QuestionBankParseError(
                f"Header is missing a '{name}' column (accepted names: {', '.join(aliases)})."
            )
        columns[name] = index
    return columns


def _validate_rows(rows: Iterable[tuple[int, int, dict[str, str]]]) -> tuple[QuestionRecord, ...]:
    records: list[QuestionRecord] = []
    row_errors: list[RowError] = []
    for row_number, line_number, fields in rows:
        try:
            records.append(QuestionRow.model_validate(fields).to_record())
        except ValidationError as exc:
            messages = tuple(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            )
            row_error = RowError(row_number=row_number, line_number=line_number, messages=messages)
            logger.error("Invalid question %s", row_error.describe())
            row_errors.append(row_error)
    if row_errors:
        raise QuestionBankValidationError(row_errors)
    return tuple(records)


class QuestionStore:
    """Immutable, ordered collection of validated questions."""

    def __init__(self, questions: Iterable[QuestionRecord]) -> None:
        self._questions = tuple(questions)

    @property
    def questions(self) -> tuple[QuestionRecord, ...]:
        return self._questions

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[QuestionRecord]:
        return iter(self._questions)

    def filter_by_difficulty(self, difficulty: Difficulty) -> tuple[QuestionRecord, ...]:
        return tuple(q for q in self._questions if q.difficulty == difficulty)

    def count_by_difficulty(self) -> dict[Difficulty, int]:
        counts = Counter(q.difficulty for q in self._questions)
        return {difficulty: counts.get(difficulty, 0) for difficulty in Difficulty}

    def available_difficulties(self) -> list[Difficulty]:
        return [d for d, count in self.count_by_difficulty().items() if count > 0]


@lru_cache(maxsize=None)
def get_question_store(source: str | Path | None = None) -> QuestionStore:
    """Load a question bank once per process.

    ``None`` loads the packaged CSV, ``BUILTIN_SOURCE`` selects the built-in
    list and anything else is treated as a CSV path.
    """
    if source == BUILTIN_SOURCE:
        return QuestionStore(builtin_questions())
    path = DEFAULT_QUESTION_BANK_PATH if source is None else Path(source)
    return QuestionStore(load_questions_from_file(path))


_BUILTIN_ROWS: tuple[tuple[str, str, str], ...] = (
    (r"$\int$", "int", "easy"),
    (r"$\sum$", "sum", "easy"),
    (r"$\alpha$", "alpha", "easy"),
    (r"$\infty$", "infty", "easy"),
    (r"$\cdot$", "cdot", "easy"),
    (r"$\times$", "times", "easy"),
    (r"$\sqrt{x}$", "sqrt{x}", "medium"),
    (r"$\frac{a}{b}$", "frac{a}{b}", "medium"),
    (r"$\leq$", "le, leq", "medium"),
    (r"$\geq$", "ge, geq", "medium"),
    (r"$\rightarrow$", "rightarrow, to", "medium"),
    (r"$\leftarrow$", "leftarrow, gets", "medium"),
    (r"$a + \color{gray}{} + b$", "cdot", "hard"),
)
