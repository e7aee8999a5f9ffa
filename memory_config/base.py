"""
Abstract configuration interface.

Every frontend reads game and layout settings through this interface so
the core never needs to know where values come from.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Tuple

from memory_core.deck import DEFAULT_LABELS


class ConfigurationError(Exception):
    """Raised when configuration values are missing or inconsistent."""


class BaseConfiguration(ABC):
    """
    Settings shared by all platforms.

    Subclasses provide raw values; defaults here reproduce the classic
    4x4 board with a one second mismatch reveal.
    """

    @property
    def grid_columns(self) -> int:
        return 4

    @property
    def grid_rows(self) -> int:
        return 4

    @property
    def labels(self) -> Tuple[str, ...]:
        return DEFAULT_LABELS

    @property
    def mismatch_delay_ms(self) -> int:
        return 1000

    @property
    def flip_duration_ms(self) -> int:
        return 400

    @property
    def grid_spacing(self) -> int:
        return 10

    @property
    def grid_margin(self) -> int:
        return 8

    @property
    def reshuffle_on_reset(self) -> bool:
        return False

    @property
    def log_level(self) -> str:
        return "INFO"

    @property
    def window_title(self) -> str:
        return "Card Matching Game"

    @property
    def card_count(self) -> int:
        return self.grid_columns * self.grid_rows

    @property
    @abstractmethod
    def platform(self) -> str:
        """Short platform name used in log output."""

    def as_dict(self) -> dict[str, Any]:
        """
        Get every resolved setting, for validation and startup logging.

        Returns:
            Dictionary of setting name to value
        """
        return {
            'platform': self.platform,
            'grid_columns': self.grid_columns,
            'grid_rows': self.grid_rows,
            'labels': self.labels,
            'mismatch_delay_ms': self.mismatch_delay_ms,
            'flip_duration_ms': self.flip_duration_ms,
            'grid_spacing': self.grid_spacing,
            'grid_margin': self.grid_margin,
            'reshuffle_on_reset': self.reshuffle_on_reset,
            'log_level': self.log_level,
            'window_title': self.window_title,
        }

    def validate(self) -> None:
        """
        Check that the settings describe a playable board.

        Raises:
            ConfigurationError: If any value is out of range
        """
        # Resolve every setting so parse errors surface here rather than at first use
        self.as_dict()

        if self.grid_columns <= 0 or self.grid_rows <= 0:
            raise ConfigurationError(
                f"Grid must have positive dimensions, got {self.grid_columns}x{self.grid_rows}"
            )
        if self.card_count % 2:
            raise ConfigurationError(
                f"Grid {self.grid_columns}x{self.grid_rows} has an odd number of cells"
            )

        pairs = self.card_count // 2
        distinct = len(set(self.labels))
        if distinct < pairs:
            raise ConfigurationError(
                f"Need {pairs} distinct labels for a {self.grid_columns}x{self.grid_rows} grid, got {distinct}"
            )

        if self.mismatch_delay_ms < 0:
            raise ConfigurationError("Mismatch delay cannot be negative")
        if self.flip_duration_ms <= 0:
            raise ConfigurationError("Flip duration must be positive")

        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")
