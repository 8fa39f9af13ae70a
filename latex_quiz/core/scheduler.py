"""Delayed-callback schedulers used for the reveal-then-advance step.

The quiz session never sleeps or spawns threads; it asks a scheduler to run
a callback later and keeps the returned handle so the call can be cancelled.
Each front end supplies the scheduler that matches its event loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
import heapq
import itertools
from typing import Callable, Protocol


class ScheduledCall(Protocol):
    """Handle for a pending delayed callback."""

    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay in milliseconds."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall: ...


@dataclass(slots=True)
class _ManualCall:
    deadline_ms: int
    callback: Callable[[], None]
    _cancelled: bool = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@dataclass(slots=True)
class ManualScheduler:
    """Deterministic scheduler driven by an explicit virtual clock."""

    now_ms: int = 0
    _queue: list[tuple[int, int, _ManualCall]] = field(default_factory=list)
    _counter: itertools.count = field(default_factory=itertools.count)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _ManualCall:
        if delay_ms < 0:
            raise ValueError("Delay must not be negative.")
        call = _ManualCall(deadline_ms=self.now_ms + delay_ms, callback=callback)
        heapq.heappush(self._queue, (call.deadline_ms, next(self._counter), call))
        return call

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward and run every call that became due.

        Returns the number of callbacks executed.
        """
        if delta_ms < 0:
            raise ValueError("Cannot move the clock backwards.")
        target = self.now_ms + delta_ms
        executed = 0
        while self._queue and self._queue[0][0] <= target:
            deadline, _, call = heapq.heappop(self._queue)
            self.now_ms = deadline
            if call.cancelled:
                continue
            call.callback()
            executed += 1
        self.now_ms = target
        return executed

    def run_all(self) -> int:
        """Run everything still queued, including calls scheduled by callbacks."""
        executed = 0
        while self._queue:
            executed += self.advance(max(0, self._queue[0][0] - self.now_ms))
        return executed


class _AsyncioCall:
    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler:
    """Runs callbacks on the asyncio event loop that is current at call time."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _AsyncioCall:
        loop = self._loop or asyncio.get_running_loop()
        return _AsyncioCall(loop.call_later(delay_ms / 1000, callback))
