"""Position: board plus turn, castling rights and en passant, with make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from purechess.core.board import Board
from purechess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from purechess.core.move import Move
from purechess.core.piece import Piece
from purechess.core.types import Square

# Rook corner → castling right it guards.
ROOK_CORNERS: dict[Square, CastlingRights] = {
    (7, 0): CastlingRights.WHITE_QUEENSIDE,
    (7, 7): CastlingRights.WHITE_KINGSIDE,
    (0, 0): CastlingRights.BLACK_QUEENSIDE,
    (0, 7): CastlingRights.BLACK_KINGSIDE,
}


def castle_rook_squares(move: Move) -> tuple[Square, Square]:
    """``(rook_from, rook_to)`` for a castling *move*."""
    row = move.from_sq[0]
    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        return (row, 7), (row, 5)
    return (row, 0), (row, 3)


def en_passant_capture_square(move: Move) -> Square:
    """Square of the pawn removed by an en passant *move*."""
    return (move.from_sq[0], move.to_sq[1])


@dataclass(slots=True)
class _PositionState:
    """Snapshot saved before each move so we can undo it."""

    castling: CastlingRights
    en_passant: Square | None
    piece: Piece
    had_moved: bool
    captured_piece: Piece | None
    capture_sq: Square
    rook_had_moved: bool = False


class Position:
    """Full chess position: board + side to move + castling + en passant.

    Supports :meth:`make_move` / :meth:`unmake_move` via an internal history
    stack so move legality can be simulated on the live board and restored
    exactly, piece identities and ``has_moved`` flags included.
    """

    __slots__ = ("board", "side_to_move", "castling", "en_passant", "_history")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self._history: list[_PositionState] = []

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> Piece | None:
        """Apply *move*, pushing undo state; return the captured piece."""
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        capture_sq = move.to_sq
        if move.flag == MoveFlag.EN_PASSANT:
            capture_sq = en_passant_capture_square(move)
        captured = board[capture_sq]

        state = _PositionState(
            castling=self.castling,
            en_passant=self.en_passant,
            piece=piece,
            had_moved=piece.has_moved,
            captured_piece=captured,
            capture_sq=capture_sq,
        )
        self._history.append(state)

        # The en passant target only survives the ply right after a double step.
        self.en_passant = None

        if capture_sq != move.to_sq:
            board[capture_sq] = None
        board.relocate(move.from_sq, move.to_sq)

        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            board[move.to_sq] = Piece(piece.color, move.promotion, has_moved=True)

        if move.is_castle:
            rook_from, rook_to = castle_rook_squares(move)
            rook = board[rook_from]
            if rook is None:
                raise ValueError(f"No rook on {rook_from} to castle with")
            state.rook_had_moved = rook.has_moved
            board.relocate(rook_from, rook_to)

        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = (
                (move.from_sq[0] + move.to_sq[0]) // 2,
                move.from_sq[1],
            )

        self._update_castling(move, piece, captured)
        self.side_to_move = self.side_to_move.opposite
        return captured

    def play(self, move: Move) -> Piece | None:
        """Apply *move* for good; no undo state is kept for it."""
        captured = self.make_move(move)
        self._history.pop()
        return captured

    def unmake_move(self, move: Move) -> None:
        """Undo the last :meth:`make_move`."""
        state = self._history.pop()
        board = self.board

        self.side_to_move = self.side_to_move.opposite

        if move.is_castle:
            rook_from, rook_to = castle_rook_squares(move)
            rook = board[rook_to]
            assert rook is not None
            board[rook_to] = None
            board[rook_from] = rook
            rook.has_moved = state.rook_had_moved

        # Put the original piece object back (undoes promotion as well).
        board[move.to_sq] = None
        board[move.from_sq] = state.piece
        state.piece.has_moved = state.had_moved
        board[state.capture_sq] = state.captured_piece

        self.castling = state.castling
        self.en_passant = state.en_passant

    # ── Castling bookkeeping ─────────────────────────────────────────────

    def _update_castling(
        self, move: Move, piece: Piece, captured: Piece | None
    ) -> None:
        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~CastlingRights.both(piece.color)

        if piece.piece_type == PieceType.ROOK and move.from_sq in ROOK_CORNERS:
            castling &= ~ROOK_CORNERS[move.from_sq]

        # A rook captured on its corner takes its side's right with it,
        # whether or not that rook ever moved.
        if (
            captured is not None
            and captured.piece_type == PieceType.ROOK
            and move.to_sq in ROOK_CORNERS
        ):
            castling &= ~ROOK_CORNERS[move.to_sq]

        self.castling = castling

    # ── Utilities ────────────────────────────────────────────────────────

    @property
    def undo_depth(self) -> int:
        """Moves that can still be taken back with :meth:`unmake_move`."""
        return len(self._history)

    @property
    def king_squares(self) -> dict[Color, Square]:
        return {
            Color.WHITE: self.board.king_square(Color.WHITE),
            Color.BLACK: self.board.king_square(Color.BLACK),
        }

    def copy(self) -> Position:
        """Deep copy without undo history."""
        return Position(
            board=self.board.clone(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.castling == other.castling
            and self.en_passant == other.en_passant
        )

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move}, "
            f"castling={self.castling!r}, en_passant={self.en_passant})\n"
            f"{self.board!r}"
        )
