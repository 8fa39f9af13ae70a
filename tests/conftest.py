"""Shared fixtures for the quiz test suite."""

from __future__ import annotations

import random

import pytest

from latex_quiz.core.models import Difficulty, QuestionRecord
from latex_quiz.core.question_store import QuestionStore
from latex_quiz.core.quiz_session import QuizSession
from latex_quiz.core.scheduler import ManualScheduler


def make_records(count: int, difficulty: Difficulty, prefix: str = "sym") -> list[QuestionRecord]:
    """Build ``count`` distinct questions whose only answer is ``<prefix><n>``."""
    return [
        QuestionRecord(
            markup=f"\\mathrm{{{prefix}{index}}}",
            accepted_answers=(f"{prefix}{index}",),
            difficulty=difficulty,
        )
        for index in range(count)
    ]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def mixed_store() -> QuestionStore:
    records = (
        make_records(12, Difficulty.EASY, prefix="easy")
        + make_records(4, Difficulty.MEDIUM, prefix="medium")
        + [
            QuestionRecord(
                markup=r"a \cdot b",
                accepted_answers=("cdot",),
                difficulty=Difficulty.HARD,
            )
        ]
    )
    return QuestionStore(records)


@pytest.fixture
def session(mixed_store: QuestionStore, scheduler: ManualScheduler) -> QuizSession:
    return QuizSession(mixed_store.questions, scheduler, rng=random.Random(1234))
