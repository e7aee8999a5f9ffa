"""
Deck construction for the matching grid.

Builds the ordered list of cards for one session: every label appears
exactly twice, then the whole deck is randomly permuted.
"""
import logging
import random
from collections import Counter
from typing import List, Optional, Sequence

from .data_models import Card

logger = logging.getLogger(__name__)

DEFAULT_LABELS = ('A', 'B', 'C', 'D', 'E', 'F', 'G', 'H')


class DeckError(ValueError):
    """Raised when a deck cannot be built from the requested size and labels."""


def build_deck(
    size: int = 16,
    labels: Sequence[str] = DEFAULT_LABELS,
    rng: Optional[random.Random] = None,
) -> List[Card]:
    """
    Build a shuffled deck of paired cards.

    Args:
        size: Number of cards, must be even and positive
        labels: Candidate labels; the first ``size // 2`` distinct ones are used
        rng: Random source for shuffling, defaults to the module RNG

    Returns:
        List of face-down cards
    """
    if size <= 0 or size % 2:
        raise DeckError(f"Deck size must be a positive even number, got {size}")

    distinct = list(dict.fromkeys(labels))
    pairs = size // 2
    if len(distinct) < pairs:
        raise DeckError(
            f"Need {pairs} distinct labels for {size} cards, got {len(distinct)}"
        )

    fronts = [label for label in distinct[:pairs] for _ in range(2)]
    (rng or random).shuffle(fronts)

    logger.debug("Built deck of %d cards from %d labels", size, pairs)
    return [Card(front=front) for front in fronts]


def deck_from_fronts(fronts: Sequence[str]) -> List[Card]:
    """
    Build an unshuffled deck from an explicit front ordering.

    Useful for replaying a known layout. The ordering must still pair
    every label exactly twice.
    """
    counts = Counter(fronts)
    unpaired = sorted(label for label, count in counts.items() if count != 2)
    if unpaired:
        raise DeckError(f"Every label must appear exactly twice: {', '.join(unpaired)}")
    return [Card(front=front) for front in fronts]
