import sys
from typing import Callable, List

import pytest

from memory_core.scheduler import Scheduler, TimerHandle


class ManualTimer(TimerHandle):
    def __init__(self, due_ms: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class ManualScheduler(Scheduler):
    """Scheduler driven by explicit ``advance`` calls instead of a clock."""

    def __init__(self, honor_cancel: bool = True) -> None:
        self.now_ms = 0
        self.timers: List[ManualTimer] = []
        self.honor_cancel = honor_cancel

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        timer = ManualTimer(self.now_ms + delay_ms, callback)
        self.timers.append(timer)
        return timer

    def advance(self, ms: int) -> None:
        self.now_ms += ms
        for timer in list(self.timers):
            if timer.fired or timer.due_ms > self.now_ms:
                continue
            if timer.cancelled and self.honor_cancel:
                continue
            timer.fired = True
            timer.callback()

    @property
    def pending(self) -> List[ManualTimer]:
        return [t for t in self.timers if t.active]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def leaky_scheduler():
    """Scheduler whose cancel() has no effect, to exercise stale callbacks."""
    return ManualScheduler(honor_cancel=False)


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtCore import QCoreApplication
    return QCoreApplication.instance() or QCoreApplication(sys.argv)
