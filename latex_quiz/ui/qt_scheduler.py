"""Scheduler backed by single-shot QTimers on the Qt event loop."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer


class _QtCall:
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.stop()
        self._timer.deleteLater()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class QtScheduler:
    """Runs delayed callbacks on the GUI thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _QtCall:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.setInterval(max(0, delay_ms))
        call = _QtCall(timer)

        def fire() -> None:
            timer.deleteLater()
            if not call.cancelled:
                callback()

        timer.timeout.connect(fire)
        timer.start()
        return call
