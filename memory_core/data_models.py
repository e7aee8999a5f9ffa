"""Core data structures for the Memory Match game.

Contains the fundamental data models used across different UI implementations.
"""
from dataclasses import dataclass

BACK_DESIGN = "Back Design"


@dataclass
class Card:
    """A single card on the board, identified by its position in the deck."""
    front: str
    back: str = BACK_DESIGN
    revealed: bool = False

    @property
    def display_text(self) -> str:
        """Text currently visible to the player."""
        return self.front if self.revealed else self.back
