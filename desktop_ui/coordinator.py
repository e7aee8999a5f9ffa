import logging
from typing import Optional

from PySide6.QtCore import QObject, Slot, Signal, Property

from memory_config.base import BaseConfiguration
from memory_core.game_state import GameState
from memory_core.ui_logic.grid_layout import GridDimensions, GridLayout
from desktop_ui.qt_models.card_model import CardModel
from desktop_ui.qt_scheduler import QtScheduler

logger = logging.getLogger(__name__)


class GameCoordinator(QObject):
    """
    Bridges the game engine to QML.

    Owns the Qt list model and board geometry, forwards taps and the
    reset action to the engine, and re-emits engine notifications as Qt
    signals. An injected game brings its own scheduler.
    """

    # Qt signals for property changes
    stateChanged = Signal()
    layoutChanged = Signal()
    gameCompleted = Signal(int)  # moves

    def __init__(
        self,
        config: BaseConfiguration,
        game: Optional[GameState] = None,
    ) -> None:
        super().__init__()
        self.config = config
        self.game = game or GameState(
            QtScheduler(),
            size=config.card_count,
            labels=config.labels,
            mismatch_delay_ms=config.mismatch_delay_ms,
            reshuffle_on_reset=config.reshuffle_on_reset,
        )
        self.scheduler = self.game.scheduler

        self.grid_layout = GridLayout(GridDimensions(
            columns=config.grid_columns,
            rows=config.grid_rows,
            margin=config.grid_margin,
            spacing=config.grid_spacing
        ))
        self.card_model = CardModel(self.game)
        self._was_complete = self.game.is_complete

        self.game.add_listener(self._on_state_change)
        logger.info("Game coordinator initialized (%dx%d, %s)",
                    config.grid_columns, config.grid_rows, config.platform)

    def _on_state_change(self) -> None:
        """Handle notifications from the game engine"""
        self.card_model.refresh()
        self.stateChanged.emit()

        complete = self.game.is_complete
        if complete and not self._was_complete:
            logger.info("Game completed in %d moves", self.game.moves)
            self.gameCompleted.emit(self.game.moves)
        self._was_complete = complete

    # Qt Properties for QML binding
    @Property(int, notify=stateChanged)
    def matchedPairs(self) -> int:
        return self.game.matched_pairs

    @Property(int, notify=stateChanged)
    def moves(self) -> int:
        return self.game.moves

    @Property(bool, notify=stateChanged)
    def isComplete(self) -> bool:
        return self.game.is_complete

    @Property(bool, notify=stateChanged)
    def isLocked(self) -> bool:
        """True while a mismatched pair is on display"""
        return self.game.is_locked

    @Property(int, constant=True)
    def totalPairs(self) -> int:
        return self.game.size // 2

    @Property(int, constant=True)
    def columns(self) -> int:
        return self.config.grid_columns

    @Property(int, constant=True)
    def flipDuration(self) -> int:
        return self.config.flip_duration_ms

    @Property(int, constant=True)
    def spacing(self) -> int:
        return self.config.grid_spacing

    @Property(int, constant=True)
    def margin(self) -> int:
        return self.config.grid_margin

    @Property(str, constant=True)
    def windowTitle(self) -> str:
        return self.config.window_title

    @Property(int, notify=layoutChanged)
    def cellSize(self) -> int:
        return self.grid_layout.dimensions.cell_width

    @Property(int, notify=layoutChanged)
    def boardWidth(self) -> int:
        return self.grid_layout.dimensions.grid_width

    @Property(int, notify=layoutChanged)
    def boardHeight(self) -> int:
        return self.grid_layout.dimensions.grid_height

    @Slot(int, int)
    def resizeBoard(self, width: int, height: int) -> None:
        """Fit square cells to the space available for the board."""
        cell_width, cell_height = self.grid_layout.get_optimal_cell_size(width, height)
        dims = self.grid_layout.dimensions
        if (cell_width, cell_height) == (dims.cell_width, dims.cell_height):
            return

        self.grid_layout.update_dimensions(GridDimensions(
            columns=dims.columns,
            rows=dims.rows,
            cell_width=cell_width,
            cell_height=cell_height,
            margin=dims.margin,
            spacing=dims.spacing
        ))
        logger.debug("Board resized to %dx%d, cell %d", width, height, cell_width)
        self.layoutChanged.emit()

    @Slot(int)
    def flipCard(self, index: int) -> None:
        if not self.game.flip(index):
            logger.debug("Tap on card %d ignored", index)

    @Slot(float, float, result=bool)
    def flipAt(self, x: float, y: float) -> bool:
        """Flip the card under a tap in board coordinates."""
        index = self.grid_layout.find_item_at_position(int(x), int(y))
        if index is None:
            logger.debug("Tap at (%d, %d) hit no card", x, y)
            return False
        return self.game.flip(index)

    @Slot()
    def resetGame(self) -> None:
        logger.info("Reset requested")
        self.game.reset()

    def cleanup(self) -> None:
        """Clean shutdown of coordinator"""
        logger.info("Cleaning up GameCoordinator")
        self.game.remove_listener(self._on_state_change)
        self.game.cancel_pending()
        if isinstance(self.scheduler, QtScheduler):
            self.scheduler.cancel_all()
        logger.info("Coordinator cleaned up")
