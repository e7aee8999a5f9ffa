"""
Deferred-callback seam between the game engine and the host event loop.

The engine never sleeps or touches a UI toolkit directly; it asks a
Scheduler for a one-shot callback and keeps the returned handle so the
callback can be cancelled.
"""
from abc import ABC, abstractmethod
from typing import Callable


class TimerHandle(ABC):
    """Token for a pending one-shot callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""

    @property
    @abstractmethod
    def active(self) -> bool:
        """True while the callback is still pending."""


class Scheduler(ABC):
    """Runs callbacks after a delay on the engine's own thread."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """
        Schedule a one-shot callback.

        Args:
            delay_ms: Delay in milliseconds
            callback: Function to run once the delay elapses

        Returns:
            Handle that can cancel the callback
        """
