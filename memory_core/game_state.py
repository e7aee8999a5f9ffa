"""
Match/flip state engine for the memory grid.

Owns the deck and the set of face-up, unresolved card indices. Tracks
flips, resolves pairs, reverts mismatches after a delay and resets the
board. No UI framework dependencies - the host supplies a Scheduler for
the deferred mismatch reversal and subscribes to change notifications.
"""
import logging
import random
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .data_models import Card
from .deck import DEFAULT_LABELS, build_deck
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

# Type alias for state change listeners
StateListener = Callable[[], None]

PAIR_SIZE = 2


class GameState:
    """
    Single-player matching game state.

    At most two cards are pending at any time. A matching pair stays
    face-up; a mismatched pair stays visible for ``mismatch_delay_ms``
    and is then turned back over. Every mutation fires one notification
    to the registered listeners; ignored flips fire none.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        size: int = 16,
        labels: Sequence[str] = DEFAULT_LABELS,
        mismatch_delay_ms: int = 1000,
        reshuffle_on_reset: bool = False,
        rng: Optional[random.Random] = None,
        cards: Optional[List[Card]] = None,
    ) -> None:
        """
        Initialize the engine and deal a deck.

        Args:
            scheduler: Runs the deferred mismatch reversal
            size: Number of cards when dealing a fresh deck
            labels: Labels available to the deck builder
            mismatch_delay_ms: How long a mismatched pair stays visible
            reshuffle_on_reset: If True, ``reset()`` deals a new permutation
            rng: Random source for shuffling
            cards: Explicit deck to use instead of dealing one
        """
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self.mismatch_delay_ms = mismatch_delay_ms
        self.reshuffle_on_reset = reshuffle_on_reset

        self._cards: List[Card] = cards if cards is not None else build_deck(size, labels, self._rng)
        self._revealed: List[int] = []
        self._matched: set[int] = set()
        self._moves = 0

        self._pending_timer: Optional[TimerHandle] = None
        self._generation = 0
        self._listeners: List[StateListener] = []

    def add_listener(self, callback: StateListener) -> None:
        """Register a callback fired after every state change"""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: StateListener) -> None:
        """Unregister a state change callback"""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify_listeners(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception as exc:
                logger.error("Listener error: %s", exc)

    def flip(self, index: int) -> bool:
        """
        Turn a face-down card face-up.

        Out-of-range indices, cards already face-up and flips while a
        pair is pending are ignored without notification.

        Args:
            index: Position of the card in the deck

        Returns:
            True if the card was flipped
        """
        if not 0 <= index < len(self._cards):
            logger.debug("Ignoring flip of out-of-range index %s", index)
            return False
        if self._cards[index].revealed:
            logger.debug("Ignoring flip of face-up card %d", index)
            return False
        if len(self._revealed) >= PAIR_SIZE:
            logger.debug("Ignoring flip of card %d while a pair is pending", index)
            return False

        self._cards[index].revealed = True
        self._revealed.append(index)
        pair_complete = len(self._revealed) == PAIR_SIZE
        generation = self._generation
        logger.debug("Flipped card %d (%s)", index, self._cards[index].front)
        # Listeners may flip or reset; only the flip that completed the pair resolves it
        self._notify_listeners()

        if pair_complete and generation == self._generation:
            self._resolve_pair()
        return True

    def _resolve_pair(self) -> None:
        first, second = self._revealed
        self._moves += 1

        if self._cards[first].front == self._cards[second].front:
            logger.debug("Match: cards %d and %d", first, second)
            self._matched.update((first, second))
            self._revealed.clear()
            self._notify_listeners()
            if self.is_complete:
                logger.info("Board cleared in %d moves", self._moves)
            return

        logger.debug("Mismatch: cards %d and %d, reverting in %d ms",
                     first, second, self.mismatch_delay_ms)
        generation = self._generation

        def revert() -> None:
            self._revert_mismatch(first, second, generation)

        self._pending_timer = self._scheduler.call_later(self.mismatch_delay_ms, revert)

    def _revert_mismatch(self, first: int, second: int, generation: int) -> None:
        if generation != self._generation or self._revealed != [first, second]:
            logger.debug("Dropping stale mismatch reversal for cards %d and %d", first, second)
            return

        self._pending_timer = None
        self._cards[first].revealed = False
        self._cards[second].revealed = False
        self._revealed.clear()
        self._notify_listeners()

    def reset(self, reshuffle: Optional[bool] = None) -> None:
        """
        Turn every card face-down and clear any pending pair.

        Args:
            reshuffle: Override ``reshuffle_on_reset`` for this call
        """
        if reshuffle is None:
            reshuffle = self.reshuffle_on_reset

        self.cancel_pending()
        self._generation += 1

        for card in self._cards:
            card.revealed = False
        self._revealed.clear()
        self._matched.clear()
        self._moves = 0

        if reshuffle:
            fronts = [card.front for card in self._cards]
            self._rng.shuffle(fronts)
            self._cards = [Card(front=front) for front in fronts]
            logger.debug("Reset with reshuffled deck")
        else:
            logger.debug("Reset")

        self._notify_listeners()

    def cancel_pending(self) -> None:
        """Cancel a pending mismatch reversal, if any."""
        if self._pending_timer is not None:
            self._pending_timer.cancel()
            self._pending_timer = None

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def cards(self) -> Tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def size(self) -> int:
        return len(self._cards)

    @property
    def revealed_indices(self) -> Tuple[int, ...]:
        """Indices that are face-up and awaiting resolution."""
        return tuple(self._revealed)

    @property
    def is_locked(self) -> bool:
        """True while a pair is pending and flips are blocked."""
        return len(self._revealed) >= PAIR_SIZE

    @property
    def has_pending_reversal(self) -> bool:
        return self._pending_timer is not None and self._pending_timer.active

    @property
    def matched_pairs(self) -> int:
        return len(self._matched) // PAIR_SIZE

    @property
    def moves(self) -> int:
        """Number of completed two-card attempts since the last reset."""
        return self._moves

    @property
    def is_complete(self) -> bool:
        return len(self._matched) == len(self._cards)

    def get_state_summary(self) -> dict[str, Any]:
        """
        Get summary of current game state for debugging.

        Returns:
            Dictionary with game state information
        """
        return {
            'size': len(self._cards),
            'revealed': list(self._revealed),
            'matched_pairs': self.matched_pairs,
            'moves': self._moves,
            'locked': self.is_locked,
            'pending_reversal': self.has_pending_reversal,
            'complete': self.is_complete,
            'listener_count': len(self._listeners),
        }
