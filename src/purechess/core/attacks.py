"""Attack detection: is a square attacked by the opponent of a given color?"""

from __future__ import annotations

from typing import TYPE_CHECKING

from purechess.core.enums import Color, PieceType
from purechess.core.types import Square, in_bounds

if TYPE_CHECKING:
    from purechess.core.board import Board


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)


def pawn_direction(color: Color) -> int:
    """Row step of a *color* pawn advance (white moves towards row 0)."""
    return -1 if color == Color.WHITE else 1


def _has_piece(
    board: Board, row: int, col: int, color: Color, piece_type: PieceType
) -> bool:
    if not in_bounds(row, col):
        return False
    piece = board[(row, col)]
    return (
        piece is not None and piece.color == color and piece.piece_type == piece_type
    )


def _ray_hits(
    board: Board,
    sq: Square,
    directions: tuple[tuple[int, int], ...],
    attacker: Color,
    piece_types: tuple[PieceType, ...],
) -> bool:
    for dr, dc in directions:
        row, col = sq[0] + dr, sq[1] + dc
        while in_bounds(row, col):
            piece = board[(row, col)]
            if piece is not None:
                if piece.color == attacker and piece.piece_type in piece_types:
                    return True
                break
            row += dr
            col += dc
    return False


def is_attacked(board: Board, sq: Square, color: Color) -> bool:
    """Is *sq* attacked by any piece of *color*'s opponent?

    Checks pawns, knights, the enemy king, then orthogonal and diagonal rays,
    returning on the first attacker found.
    """
    attacker = color.opposite
    row, col = sq

    # An attacking pawn sits one step "behind" the square from its own view.
    pawn_row = row - pawn_direction(attacker)
    for dc in (-1, 1):
        if _has_piece(board, pawn_row, col + dc, attacker, PieceType.PAWN):
            return True

    for dr, dc in KNIGHT_OFFSETS:
        if _has_piece(board, row + dr, col + dc, attacker, PieceType.KNIGHT):
            return True

    for dr, dc in KING_OFFSETS:
        if _has_piece(board, row + dr, col + dc, attacker, PieceType.KING):
            return True

    if _ray_hits(board, sq, ROOK_DIRS, attacker, _ORTHOGONAL_ATTACKERS):
        return True

    return _ray_hits(board, sq, BISHOP_DIRS, attacker, _DIAGONAL_ATTACKERS)


def is_king_attacked(board: Board, color: Color) -> bool:
    """Is *color*'s king currently attacked?"""
    return is_attacked(board, board.king_square(color), color)
