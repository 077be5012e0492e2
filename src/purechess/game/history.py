"""Move history with per-ply position snapshots and fork-on-write."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from purechess.core.enums import CastlingRights, Color, MoveFlag, PieceType

if TYPE_CHECKING:
    from purechess.core.move import Move
    from purechess.core.piece import Piece
    from purechess.core.position import Position
    from purechess.core.types import Square


@dataclass
class MoveRecord:
    """A single entry in the move history.

    Carries everything needed to replay or explain the move: the pieces
    involved and the rights / en passant target as they were before it.
    """

    move: Move
    piece_type: PieceType
    color: Color
    had_moved: bool
    captured: Piece | None
    en_passant_before: Square | None
    castling_before: CastlingRights
    san: str = ""
    gives_check: bool = False
    is_checkmate: bool = False

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def special(self) -> MoveFlag:
        return self.move.flag

    @property
    def promotion(self) -> PieceType | None:
        return self.move.promotion


class History:
    """Append-only log of moves and the positions they produced.

    ``snapshots[i]`` is the position after ``i`` moves, so there is always
    one more snapshot than moves. Appending while ``current_index`` is behind
    the tip discards the old continuation.
    """

    __slots__ = ("_moves", "_snapshots", "_current_index")

    def __init__(self, initial: Position) -> None:
        self._moves: list[MoveRecord] = []
        self._snapshots: list[Position] = [initial.copy()]
        self._current_index = 0

    # ── Queries ──────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._moves)

    @property
    def moves(self) -> list[MoveRecord]:
        return list(self._moves)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def is_at_tip(self) -> bool:
        return self._current_index == len(self._moves)

    @property
    def initial(self) -> Position:
        return self._snapshots[0].copy()

    def sans(self) -> list[str]:
        return [record.san for record in self._moves]

    def viewed_moves(self) -> list[MoveRecord]:
        """Moves leading to the currently viewed ply."""
        return self._moves[: self._current_index]

    # ── Mutation ─────────────────────────────────────────────────────────

    def append(self, record: MoveRecord, snapshot: Position) -> None:
        """Record *record* and the position it produced, forking if needed."""
        if self._current_index < len(self._moves):
            self.truncate()
        self._moves.append(record)
        self._snapshots.append(snapshot.copy())
        self._current_index = len(self._moves)

    def truncate(self) -> None:
        """Drop every move and snapshot after the viewed ply."""
        del self._moves[self._current_index :]
        del self._snapshots[self._current_index + 1 :]

    def set_current(self, index: int) -> None:
        self._check_index(index)
        self._current_index = index

    # ── Navigation ───────────────────────────────────────────────────────

    def position_at(self, index: int) -> Position:
        """Independent copy of the position after *index* moves."""
        self._check_index(index)
        if index < len(self._snapshots):
            return self._snapshots[index].copy()
        return self.replay_to(index)

    def replay_to(self, index: int) -> Position:
        """Rebuild the position after *index* moves from the initial snapshot."""
        self._check_index(index)
        position = self._snapshots[0].copy()
        for record in self._moves[:index]:
            position.play(record.move)
        return position.copy()

    def _check_index(self, index: int) -> None:
        if not 0 <= index <= len(self._moves):
            raise ValueError(
                f"Move index {index} out of range 0..{len(self._moves)}"
            )
