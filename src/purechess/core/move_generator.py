"""Legal move generation: pseudo-legal candidates filtered by king safety."""

from __future__ import annotations

from typing import TYPE_CHECKING

from purechess.core.attacks import is_attacked
from purechess.core.enums import Color
from purechess.core.move import Move
from purechess.core.piece_rules import candidate_moves
from purechess.core.types import Square

if TYPE_CHECKING:
    from purechess.core.position import Position


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    The generator mutates the position via ``make_move`` / ``unmake_move``
    internally but always restores it before returning.
    """

    __slots__ = ("_pos",)

    def __init__(self, position: Position) -> None:
        self._pos = position

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq*, whichever side owns it."""
        pos = self._pos
        piece = pos.board[sq]
        if piece is None:
            return []

        mover = piece.color
        legal: list[Move] = []
        for move in candidate_moves(pos.board, sq, pos):
            pos.make_move(move)
            try:
                if not self.is_in_check(mover):
                    legal.append(move)
            finally:
                pos.unmake_move(move)
        return legal

    def legal_destinations(self, sq: Square) -> list[Square]:
        """Distinct destination squares reachable from *sq*, in generation order."""
        seen: dict[Square, None] = {}
        for move in self.legal_moves(sq):
            seen.setdefault(move.to_sq, None)
        return list(seen)

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All legal moves for *color* (default: side to move), row-major from a8."""
        color = self._pos.side_to_move if color is None else color
        moves: list[Move] = []
        for sq in self._pos.board.pieces(color):
            moves.extend(self.legal_moves(sq))
        return moves

    def has_legal_moves(self, color: Color | None = None) -> bool:
        color = self._pos.side_to_move if color is None else color
        return any(self.legal_moves(sq) for sq in self._pos.board.pieces(color))

    # -- Attack detection ---------------------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        board = self._pos.board
        return is_attacked(board, board.king_square(color), color)

    def is_square_attacked(self, sq: Square, color: Color) -> bool:
        """Is *sq* attacked by the opponent of *color*?"""
        return is_attacked(self._pos.board, sq, color)
