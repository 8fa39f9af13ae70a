"""Domain models for the LaTeX symbol quiz."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Difficulty(str, Enum):
    """Fixed three-valued classification tag on a question."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class AnswerOutcome(str, Enum):
    """Result of the question currently on screen."""

    UNANSWERED = "unanswered"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class SessionState(str, Enum):
    """States of a single play-through."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    REVEALING = "revealing"  # outcome shown, advance pending
    FINISHED = "finished"


class ScoreTier(str, Enum):
    """Celebratory bucket for the final score."""

    PERFECT = "perfect"
    GREAT = "great"
    GOOD = "good"
    FAIR = "fair"
    KEEP_TRYING = "keep_trying"

    @property
    def indicator(self) -> str:
        return _TIER_INDICATORS[self]

    @classmethod
    def for_score(cls, score: int, total: int) -> "ScoreTier":
        if total <= 0:
            return cls.KEEP_TRYING
        ratio = score / total
        if ratio == 1:
            return cls.PERFECT
        if ratio >= 0.75:
            return cls.GREAT
        if ratio > 0.5:
            return cls.GOOD
        if ratio > 0.25:
            return cls.FAIR
        return cls.KEEP_TRYING


_TIER_INDICATORS = {
    ScoreTier.PERFECT: "🏆",
    ScoreTier.GREAT: "🎉",
    ScoreTier.GOOD: "👍",
    ScoreTier.FAIR: "🙂",
    ScoreTier.KEEP_TRYING: "💪",
}


@dataclass(frozen=True, slots=True)
class QuestionRecord:
    """One quiz item: a bare LaTeX expression and the commands that produce it."""

    markup: str
    accepted_answers: tuple[str, ...]
    difficulty: Difficulty

    @property
    def primary_answer(self) -> str:
        return self.accepted_answers[0]

    def accepts(self, candidate: str) -> bool:
        return candidate in self.accepted_answers


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only view of a quiz session handed to the front ends."""

    state: SessionState
    difficulty: Difficulty | None
    position: int
    total: int
    question_number: int
    markup: str | None
    user_input: str
    score: int
    outcome: AnswerOutcome
    revealed_answers: tuple[str, ...]
    finished: bool
    tier: ScoreTier | None

    def to_dict(self) -> dict[str, object]:
        return {
            "state": self.state.value,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "position": self.position,
            "total": self.total,
            "question_number": self.question_number,
            "markup": self.markup,
            "user_input": self.user_input,
            "score": self.score,
            "outcome": self.outcome.value,
            "revealed_answers": list(self.revealed_answers),
            "finished": self.finished,
            "tier": self.tier.value if self.tier else None,
            "tier_indicator": self.tier.indicator if self.tier else None,
        }
