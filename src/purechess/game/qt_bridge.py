"""Qt bridge that re-emits controller events as Qt signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from purechess.core.enums import GameStatus
from purechess.core.types import Square
from purechess.game.controller import GameController
from purechess.game.history import MoveRecord
from purechess.game.state import GameState


class QtGameSignals(QObject):
    """Signal adaptor so Qt widgets can follow a :class:`GameController`.

    Signals carry plain values (SAN, ply index, status code, squares); the
    widget reads anything else it needs from the controller.
    """

    move_played = pyqtSignal(str, int)  # san, ply count after the move
    game_over = pyqtSignal(int)  # GameStatus value
    promotion_requested = pyqtSignal(object, object)  # from, to squares
    position_changed = pyqtSignal(int)  # viewed ply

    __slots__ = ("_controller",)

    def __init__(self, controller: GameController) -> None:
        super().__init__()
        self._controller = controller
        events = controller.events
        events.on_move.append(self._on_move)
        events.on_game_over.append(self._on_game_over)
        events.on_promotion_pending.append(self._on_promotion_pending)
        events.on_position_changed.append(self.position_changed.emit)

    @property
    def controller(self) -> GameController:
        return self._controller

    @pyqtSlot(int)
    def navigate(self, index: int) -> None:
        """Jump to *index*; out-of-range requests are ignored."""
        if 0 <= index <= self._controller.state.ply_count:
            self._controller.navigate(index)

    @pyqtSlot()
    def flip_orientation(self) -> None:
        self._controller.flip_orientation()

    def _on_move(self, record: MoveRecord, state: GameState) -> None:
        self.move_played.emit(record.san, state.current_move_index)

    def _on_game_over(self, status: GameStatus) -> None:
        self.game_over.emit(int(status))

    def _on_promotion_pending(self, from_sq: Square, to_sq: Square) -> None:
        self.promotion_requested.emit(from_sq, to_sq)
