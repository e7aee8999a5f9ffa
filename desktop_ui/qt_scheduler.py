"""QTimer-backed scheduler for the game engine's deferred callbacks."""
import logging
from typing import Callable, Set

from PySide6.QtCore import QObject, QTimer

from memory_core.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class QtTimerHandle(TimerHandle):
    """Handle wrapping a single-shot QTimer."""

    def __init__(self, timer: QTimer, on_done: Callable[["QtTimerHandle"], None]) -> None:
        self._timer = timer
        self._on_done = on_done
        self._finished = False

    def _finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        self._on_done(self)
        self._timer.deleteLater()

    def cancel(self) -> None:
        if self._finished:
            return
        self._timer.stop()
        logger.debug("Timer cancelled")
        self._finish()

    @property
    def active(self) -> bool:
        return not self._finished and self._timer.isActive()


class QtScheduler(Scheduler):
    """
    Runs engine callbacks on the Qt event loop.

    Timers fire on the thread that owns them, which is the GUI thread for
    every caller in this package, so the engine never needs locking.
    """

    def __init__(self) -> None:
        # Parent object keeps timers alive independently of Python references
        self._owner = QObject()
        self._handles: Set[QtTimerHandle] = set()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = QTimer(self._owner)
        timer.setSingleShot(True)
        timer.setInterval(max(0, delay_ms))
        handle = QtTimerHandle(timer, self._handles.discard)

        def fire() -> None:
            handle._finish()
            callback()

        timer.timeout.connect(fire)
        self._handles.add(handle)
        timer.start()
        return handle

    def cancel_all(self) -> None:
        for handle in list(self._handles):
            handle.cancel()

    @property
    def pending_count(self) -> int:
        return len(self._handles)
