"""Pseudo-legal move generation per piece kind.

Every generator has the same signature and ignores whether the mover's own
king is left attacked; :class:`~purechess.core.move_generator.MoveGenerator`
filters that out.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from purechess.core.attacks import (
    BISHOP_DIRS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRS,
    ROOK_DIRS,
    is_attacked,
    pawn_direction,
)
from purechess.core.enums import CastlingRights, Color, MoveFlag, PieceType
from purechess.core.move import Move
from purechess.core.types import Square, in_bounds

if TYPE_CHECKING:
    from purechess.core.board import Board
    from purechess.core.position import Position

PieceGenerator = Callable[["Board", Square, Color, "Position | None"], list[Move]]

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def home_row(color: Color) -> int:
    """Back-rank row of *color*."""
    return 7 if color == Color.WHITE else 0


def pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


def _pawn_moves_to(
    from_sq: Square, to_sq: Square, color: Color, moves: list[Move]
) -> None:
    if to_sq[0] == promotion_row(color):
        for pt in PROMOTION_TYPES:
            moves.append(Move(from_sq, to_sq, MoveFlag.PROMOTION, pt))
    else:
        moves.append(Move(from_sq, to_sq))


def pawn_moves(
    board: Board, sq: Square, color: Color, position: Position | None = None
) -> list[Move]:
    moves: list[Move] = []
    row, col = sq
    step = pawn_direction(color)

    one_row = row + step
    if in_bounds(one_row, col) and board.is_empty((one_row, col)):
        _pawn_moves_to(sq, (one_row, col), color, moves)
        two_row = row + 2 * step
        if row == pawn_start_row(color) and board.is_empty((two_row, col)):
            moves.append(Move(sq, (two_row, col), MoveFlag.DOUBLE_PAWN))

    en_passant = position.en_passant if position is not None else None
    for dc in (-1, 1):
        cap_col = col + dc
        if not in_bounds(one_row, cap_col):
            continue
        cap_sq = (one_row, cap_col)
        target = board[cap_sq]
        if target is not None:
            if target.color != color:
                _pawn_moves_to(sq, cap_sq, color, moves)
        elif cap_sq == en_passant:
            moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))
    return moves


def _step_moves(
    board: Board,
    sq: Square,
    color: Color,
    offsets: tuple[tuple[int, int], ...],
) -> list[Move]:
    moves: list[Move] = []
    for dr, dc in offsets:
        row, col = sq[0] + dr, sq[1] + dc
        if not in_bounds(row, col):
            continue
        target = board[(row, col)]
        if target is None or target.color != color:
            moves.append(Move(sq, (row, col)))
    return moves


def _sliding_moves(
    board: Board,
    sq: Square,
    color: Color,
    directions: tuple[tuple[int, int], ...],
) -> list[Move]:
    moves: list[Move] = []
    for dr, dc in directions:
        row, col = sq[0] + dr, sq[1] + dc
        while in_bounds(row, col):
            target = board[(row, col)]
            if target is None:
                moves.append(Move(sq, (row, col)))
            else:
                if target.color != color:
                    moves.append(Move(sq, (row, col)))
                break
            row += dr
            col += dc
    return moves


def knight_moves(
    board: Board, sq: Square, color: Color, position: Position | None = None
) -> list[Move]:
    return _step_moves(board, sq, color, KNIGHT_OFFSETS)


def bishop_moves(
    board: Board, sq: Square, color: Color, position: Position | None = None
) -> list[Move]:
    return _sliding_moves(board, sq, color, BISHOP_DIRS)


def rook_moves(
    board: Board, sq: Square, color: Color, position: Position | None = None
) -> list[Move]:
    return _sliding_moves(board, sq, color, ROOK_DIRS)


def queen_moves(
    board: Board, sq: Square, color: Color, position: Position | None = None
) -> list[Move]:
    return _sliding_moves(board, sq, color, QUEEN_DIRS)


def king_moves(
    board: Board, sq: Square, color: Color, position: Position | None = None
) -> list[Move]:
    moves = _step_moves(board, sq, color, KING_OFFSETS)
    if position is not None:
        moves.extend(castling_moves(board, sq, color, position.castling))
    return moves


def _has_home_rook(board: Board, sq: Square, color: Color) -> bool:
    piece = board[sq]
    return (
        piece is not None and piece.color == color and piece.piece_type == PieceType.ROOK
    )


def castling_moves(
    board: Board, king_sq: Square, color: Color, castling: CastlingRights
) -> list[Move]:
    """Castling candidates for the king on *king_sq*.

    The king may not start on, pass through, or land on an attacked square.
    """
    row = home_row(color)
    if king_sq != (row, 4) or not castling & CastlingRights.both(color):
        return []
    if is_attacked(board, king_sq, color):
        return []

    moves: list[Move] = []
    if (
        castling & CastlingRights.kingside(color)
        and _has_home_rook(board, (row, 7), color)
        and board.is_empty((row, 5))
        and board.is_empty((row, 6))
        and not is_attacked(board, (row, 5), color)
        and not is_attacked(board, (row, 6), color)
    ):
        moves.append(Move(king_sq, (row, 6), MoveFlag.CASTLE_KINGSIDE))

    if (
        castling & CastlingRights.queenside(color)
        and _has_home_rook(board, (row, 0), color)
        and board.is_empty((row, 1))
        and board.is_empty((row, 2))
        and board.is_empty((row, 3))
        and not is_attacked(board, (row, 3), color)
        and not is_attacked(board, (row, 2), color)
    ):
        moves.append(Move(king_sq, (row, 2), MoveFlag.CASTLE_QUEENSIDE))
    return moves


_GENERATORS: dict[PieceType, PieceGenerator] = {
    PieceType.PAWN: pawn_moves,
    PieceType.KNIGHT: knight_moves,
    PieceType.BISHOP: bishop_moves,
    PieceType.ROOK: rook_moves,
    PieceType.QUEEN: queen_moves,
    PieceType.KING: king_moves,
}


def candidate_moves(
    board: Board, sq: Square, position: Position | None = None
) -> list[Move]:
    """Pseudo-legal moves of the piece on *sq* (empty list if no piece)."""
    piece = board[sq]
    if piece is None:
        return []
    return _GENERATORS[piece.piece_type](board, sq, piece.color, position)
