"""
Portable game core for Memory Match.

Card data model, deck construction and the match/flip GameState engine.
No UI framework dependencies.
"""
from .data_models import BACK_DESIGN, Card
from .deck import DEFAULT_LABELS, DeckError, build_deck
from .game_state import GameState
from .scheduler import Scheduler, TimerHandle

__all__ = [
    'BACK_DESIGN',
    'Card',
    'DEFAULT_LABELS',
    'DeckError',
    'build_deck',
    'GameState',
    'Scheduler',
    'TimerHandle',
]
