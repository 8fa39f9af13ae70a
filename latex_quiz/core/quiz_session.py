"""State machine for a single play-through of the quiz.

    IDLE --start--> IN_PROGRESS --submit--> REVEALING --delay--> IN_PROGRESS
                                                      \\--delay--> FINISHED
    any --restart--> IDLE

While REVEALING the outcome and accepted answers are on screen; input and
further submissions are ignored until the scheduled advance runs.
"""

from __future__ import annotations

import logging
import random
import re
from typing import Callable, Sequence

from latex_quiz.constants.quiz_constants import (
    CORRECT_REVEAL_DELAY_MS,
    INCORRECT_REVEAL_DELAY_MS,
    MAX_QUESTIONS_PER_SESSION,
    STRIP_INPUT_WHITESPACE,
)
from latex_quiz.core.models import (
    AnswerOutcome,
    Difficulty,
    QuestionRecord,
    ScoreTier,
    SessionSnapshot,
    SessionState,
)
from latex_quiz.core.scheduler import ScheduledCall, Scheduler

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class SessionStateError(RuntimeError):
    """Raised when a transition is requested from a state that does not allow it."""


class QuizSession:
    """Owns all per-play-through state; reads question records by reference only."""

    def __init__(
        self,
        questions: Sequence[QuestionRecord],
        scheduler: Scheduler,
        *,
        rng: random.Random | None = None,
        max_questions: int = MAX_QUESTIONS_PER_SESSION,
        correct_reveal_ms: int = CORRECT_REVEAL_DELAY_MS,
        incorrect_reveal_ms: int = INCORRECT_REVEAL_DELAY_MS,
        strip_whitespace: bool = STRIP_INPUT_WHITESPACE,
    ) -> None:
        if max_questions <= 0:
            raise ValueError("max_questions must be positive.")
        self._questions = tuple(questions)
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._max_questions = max_questions
        self._correct_reveal_ms = correct_reveal_ms
        self._incorrect_reveal_ms = incorrect_reveal_ms
        self._strip_whitespace = strip_whitespace
        self._listeners: list[Callable[[SessionSnapshot], None]] = []
        self._pending_reveal: ScheduledCall | None = None
        self._generation = 0
        self._reset_fields()

    def _reset_fields(self) -> None:
        self._state = SessionState.IDLE
        self._difficulty: Difficulty | None = None
        self._active_questions: tuple[QuestionRecord, ...] = ()
        self._position = 0
        self._user_input = ""
        self._score = 0
        self._outcome = AnswerOutcome.UNANSWERED
        self._revealed_answers: tuple[str, ...] = ()

    # --- Read-only state ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def difficulty(self) -> Difficulty | None:
        return self._difficulty

    @property
    def active_questions(self) -> tuple[QuestionRecord, ...]:
        return self._active_questions

    @property
    def position(self) -> int:
        return self._position

    @property
    def total(self) -> int:
        return len(self._active_questions)

    @property
    def user_input(self) -> str:
        return self._user_input

    @property
    def score(self) -> int:
        return self._score

    @property
    def outcome(self) -> AnswerOutcome:
        return self._outcome

    @property
    def revealed_answers(self) -> tuple[str, ...]:
        return self._revealed_answers

    @property
    def finished(self) -> bool:
        return self._state is SessionState.FINISHED

    @property
    def has_pending_reveal(self) -> bool:
        return self._pending_reveal is not None

    @property
    def current_question(self) -> QuestionRecord | None:
        if self._state in (SessionState.IN_PROGRESS, SessionState.REVEALING):
            return self._active_questions[self._position]
        return None

    def score_tier(self) -> ScoreTier | None:
        if not self.finished:
            return None
        return ScoreTier.for_score(self._score, self.total)

    # --- Transitions ---

    def start(self, difficulty: Difficulty | str) -> None:
        if self._state is not SessionState.IDLE:
            raise SessionStateError(f"Cannot start a quiz while {self._state.value}.")
        chosen = Difficulty(difficulty)
        matching = [q for q in self._questions if q.difficulty == chosen]
        count = min(self._max_questions, len(matching))

        self._difficulty = chosen
        self._active_questions = tuple(self._rng.sample(matching, count))
        self._position = 0
        self._score = 0
        if count == 0:
            logger.warning("No questions available for difficulty %s", chosen.value)
            self._state = SessionState.FINISHED
        else:
            self._state = SessionState.IN_PROGRESS
        logger.debug("Started %s quiz with %d questions", chosen.value, count)
        self._notify()

    def update_input(self, raw_text: str) -> str:
        """Store the sanitized entry; the leading backslash is shown as a fixed prefix."""
        if self._state is SessionState.REVEALING:
            return self._user_input
        self._require_state(SessionState.IN_PROGRESS, "update input")
        sanitized = raw_text.replace("\\", "")
        if self._strip_whitespace:
            sanitized = _WHITESPACE.sub("", sanitized)
        self._user_input = sanitized
        self._notify()
        return sanitized

    def submit(self) -> AnswerOutcome | None:
        """Check the current entry; returns ``None`` when the submission is ignored."""
        if self._state is SessionState.REVEALING:
            return None
        self._require_state(SessionState.IN_PROGRESS, "submit an answer")
        answer = self._user_input.strip()
        if not answer:
            return None

        question = self._active_questions[self._position]
        if question.accepts(answer):
            self._score += 1
            self._outcome = AnswerOutcome.CORRECT
            delay_ms = self._correct_reveal_ms
        else:
            self._outcome = AnswerOutcome.INCORRECT
            delay_ms = self._incorrect_reveal_ms
        self._revealed_answers = question.accepted_answers
        self._state = SessionState.REVEALING

        generation = self._generation
        self._pending_reveal = self._scheduler.call_later(
            delay_ms, lambda: self._advance_after_reveal(generation)
        )
        logger.debug(
            "Question %d/%d answered %s", self._position + 1, self.total, self._outcome.value
        )
        self._notify()
        return self._outcome

    def restart(self) -> None:
        if self._pending_reveal is not None:
            self._pending_reveal.cancel()
            self._pending_reveal = None
        self._generation += 1
        self._reset_fields()
        self._notify()

    def _advance_after_reveal(self, generation: int) -> None:
        if generation != self._generation or self._state is not SessionState.REVEALING:
            return
        self._pending_reveal = None
        self._user_input = ""
        self._outcome = AnswerOutcome.UNANSWERED
        self._revealed_answers = ()
        if self._position + 1 < self.total:
            self._position += 1
            self._state = SessionState.IN_PROGRESS
        else:
            self._position = self.total
            self._state = SessionState.FINISHED
            logger.info("Quiz finished with score %d/%d", self._score, self.total)
        self._notify()

    def _require_state(self, expected: SessionState, action: str) -> None:
        if self._state is not expected:
            raise SessionStateError(f"Cannot {action} while {self._state.value}.")

    # --- Observers ---

    def subscribe(self, listener: Callable[[SessionSnapshot], None]) -> None:
        self._listeners.append(listener)

    def snapshot(self) -> SessionSnapshot:
        question = self.current_question
        return SessionSnapshot(
            state=self._state,
            difficulty=self._difficulty,
            position=self._position,
            total=self.total,
            question_number=min(self._position + 1, self.total),
            markup=question.markup if question else None,
            user_input=self._user_input,
            score=self._score,
            outcome=self._outcome,
            revealed_answers=self._revealed_answers,
            finished=self.finished,
            tier=self.score_tier(),
        )

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
