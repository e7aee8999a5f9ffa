"""
Desktop configuration read from the environment.

Values come from ``MEMORY_*`` environment variables, optionally loaded
from a ``.env`` file in the working directory.
"""
import os
from typing import Optional, Tuple

from dotenv import load_dotenv

from .base import BaseConfiguration, ConfigurationError

ENV_PREFIX = "MEMORY_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class DesktopConfiguration(BaseConfiguration):
    """Configuration for the PySide6 desktop build."""

    def __init__(self, load_env_file: bool = True) -> None:
        if load_env_file:
            load_dotenv()

    @property
    def platform(self) -> str:
        return "desktop"

    def _get(self, name: str) -> Optional[str]:
        value = os.getenv(ENV_PREFIX + name)
        if value is None or not value.strip():
            return None
        return value.strip()

    def _get_int(self, name: str, default: int) -> int:
        value = self._get(name)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {value!r}") from None

    def _get_bool(self, name: str, default: bool) -> bool:
        value = self._get(name)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be a boolean, got {value!r}")

    @property
    def grid_columns(self) -> int:
        return self._get_int("GRID_COLUMNS", super().grid_columns)

    @property
    def grid_rows(self) -> int:
        return self._get_int("GRID_ROWS", super().grid_rows)

    @property
    def labels(self) -> Tuple[str, ...]:
        value = self._get("LABELS")
        if value is None:
            return super().labels
        return tuple(label.strip() for label in value.split(",") if label.strip())

    @property
    def mismatch_delay_ms(self) -> int:
        return self._get_int("MISMATCH_DELAY_MS", super().mismatch_delay_ms)

    @property
    def flip_duration_ms(self) -> int:
        return self._get_int("FLIP_DURATION_MS", super().flip_duration_ms)

    @property
    def reshuffle_on_reset(self) -> bool:
        return self._get_bool("RESHUFFLE_ON_RESET", super().reshuffle_on_reset)

    @property
    def log_level(self) -> str:
        return self._get("LOG_LEVEL") or super().log_level

    @property
    def window_title(self) -> str:
        return self._get("WINDOW_TITLE") or super().window_title
