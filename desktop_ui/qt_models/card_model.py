from typing import Any

from PySide6.QtCore import QAbstractListModel, QByteArray, QModelIndex, QPersistentModelIndex, Qt

from memory_core.game_state import GameState


class CardModel(QAbstractListModel):
    FrontRole = Qt.ItemDataRole.UserRole + 1
    BackRole = Qt.ItemDataRole.UserRole + 2
    FaceUpRole = Qt.ItemDataRole.UserRole + 3
    CardIndexRole = Qt.ItemDataRole.UserRole + 4

    def __init__(self, game: GameState) -> None:
        super().__init__()
        self.game = game
        self._row_count = game.size

    def rowCount(self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return self._row_count

    def data(self, index: QModelIndex | QPersistentModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        cards = self.game.cards
        if not index.isValid() or index.row() >= len(cards):
            return None

        card = cards[index.row()]

        if role == self.FrontRole:
            return card.front
        elif role == self.BackRole:
            return card.back
        elif role == self.FaceUpRole:
            return card.revealed
        elif role == self.CardIndexRole:
            return index.row()
        elif role == Qt.ItemDataRole.DisplayRole:
            return card.display_text

        return None

    def roleNames(self) -> dict[int, QByteArray]:
        return {
            self.FrontRole: QByteArray(b"cardFront"),
            self.BackRole: QByteArray(b"cardBack"),
            self.FaceUpRole: QByteArray(b"faceUp"),
            self.CardIndexRole: QByteArray(b"cardIndex")
        }

    def refresh(self) -> None:
        """Push the engine's current card state to attached views."""
        if self.game.size != self._row_count:
            self.beginResetModel()
            self._row_count = self.game.size
            self.endResetModel()
            return
        if self._row_count:
            self.dataChanged.emit(self.index(0), self.index(self._row_count - 1))
