"""Per-browser quiz sessions for the API server."""

from __future__ import annotations

from collections import OrderedDict
import logging
import random
from typing import Callable
from uuid import uuid4

from latex_quiz.constants.network_constants import MAX_ACTIVE_SESSIONS
from latex_quiz.core.question_store import QuestionStore
from latex_quiz.core.quiz_session import QuizSession
from latex_quiz.core.scheduler import Scheduler

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Creates sessions lazily and keeps at most ``max_sessions`` of them.

    All access happens on the server's event loop thread, so no locking is
    needed; the least recently used session is evicted first.
    """

    def __init__(
        self,
        store: QuestionStore,
        scheduler_factory: Callable[[], Scheduler],
        *,
        rng_factory: Callable[[], random.Random] = random.Random,
        max_sessions: int = MAX_ACTIVE_SESSIONS,
    ) -> None:
        if max_sessions <= 0:
            raise ValueError("max_sessions must be positive.")
        self._store = store
        self._scheduler_factory = scheduler_factory
        self._rng_factory = rng_factory
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, QuizSession] = OrderedDict()

    def get_or_create(self, session_id: str | None) -> tuple[str, QuizSession]:
        if session_id and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            return session_id, self._sessions[session_id]

        new_id = uuid4().hex
        session = QuizSession(
            self._store.questions,
            self._scheduler_factory(),
            rng=self._rng_factory(),
        )
        self._sessions[new_id] = session
        while len(self._sessions) > self._max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            evicted.restart()
            logger.debug("Evicted quiz session %s", evicted_id)
        return new_id, session

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions
