"""Abstract interfaces and small value types for the game layer.

UI adapters depend on :class:`IGameController`, not on the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from purechess.core.board import Board
    from purechess.core.enums import PieceType
    from purechess.core.types import Square
    from purechess.game.history import MoveRecord


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    AWAITING_MOVE = auto()
    PROMOTION_PENDING = auto()
    GAME_OVER = auto()


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A pawn move waiting for the player's piece choice."""

    from_sq: Square
    to_sq: Square


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of a move request.

    Exactly one of ``record`` (move applied) or ``pending`` (promotion
    choice required) is set.
    """

    record: MoveRecord | None = None
    pending: PendingPromotion | None = None

    @property
    def is_pending(self) -> bool:
        return self.pending is not None


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self) -> None:
        """Set up a new game."""

    @abstractmethod
    def select_square(self, sq: Square) -> MoveOutcome | None:
        """Handle a click on *sq*; returns the outcome if a move was made."""

    @abstractmethod
    def request_move(
        self, from_sq: Square, to_sq: Square, promotion: PieceType | None = None
    ) -> MoveOutcome:
        """Submit a move. Raises ``InvalidMoveError`` if illegal."""

    @abstractmethod
    def complete_promotion(self, piece_type: PieceType) -> MoveOutcome:
        """Finish a pending promotion with *piece_type*."""

    @abstractmethod
    def navigate(self, index: int) -> None:
        """View the position after *index* moves."""

    @abstractmethod
    def load_pgn(self, pgn_text: str) -> None:
        """Replace the current game with the one described by *pgn_text*."""

    @abstractmethod
    def export_pgn(self) -> str:
        """Serialise the current game as PGN."""

    @abstractmethod
    def board_snapshot(self) -> Board:
        """Independent copy of the board being viewed."""
