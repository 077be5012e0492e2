"""SAN (Standard Algebraic Notation) encoding and parsing.

Encoding never adds disambiguation (``Nbd2`` is written ``Nd2``). Parsing
accepts disambiguation, but when several pieces still qualify the first one
found scanning from a8 to h1 wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from purechess.core.enums import MoveFlag, PieceType
from purechess.core.errors import PGNParseError
from purechess.core.move import Move
from purechess.core.move_generator import MoveGenerator
from purechess.core.piece_rules import PROMOTION_TYPES
from purechess.core.types import (
    FILES,
    RANKS,
    col_from_file,
    file_char,
    parse_square,
    row_from_rank,
    square_name,
)

if TYPE_CHECKING:
    from purechess.core.position import Position

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}


def piece_letter(piece_type: PieceType) -> str:
    """SAN letter for *piece_type* (empty for pawns)."""
    return _SAN_PIECE.get(piece_type, "")


def piece_type_from_letter(letter: str) -> PieceType:
    try:
        return _SAN_PIECE_REV[letter.upper()]
    except KeyError:
        raise ValueError(f"Invalid piece letter: {letter!r}") from None


def move_to_san(
    piece_type: PieceType,
    move: Move,
    *,
    is_capture: bool,
    is_check: bool = False,
    is_checkmate: bool = False,
) -> str:
    """Encode *move* made by a *piece_type* piece.

    Check and mate flags describe the position after the move; mate wins
    over check.
    """
    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        if piece_type == PieceType.PAWN:
            san = file_char(move.from_sq) if is_capture else ""
        else:
            san = _SAN_PIECE[piece_type]
        if is_capture:
            san += "x"
        san += square_name(move.to_sq)
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]

    if is_checkmate:
        san += "#"
    elif is_check:
        san += "+"
    return san


def _castling_move(position: Position, flag: MoveFlag, san: str) -> Move:
    gen = MoveGenerator(position)
    king_sq = position.board.king_square(position.side_to_move)
    for move in gen.legal_moves(king_sq):
        if move.flag == flag:
            return move
    raise PGNParseError(f"Illegal castling: {san}", token=san)


def parse_san(
    position: Position,
    san: str,
    *,
    default_promotion: PieceType = PieceType.QUEEN,
) -> Move:
    """Parse a SAN token into a legal :class:`Move` for the side to move."""
    clean = san.strip().rstrip("+#!?")
    if not clean:
        raise PGNParseError("Empty move token", token=san)

    if clean in ("O-O", "0-0"):
        return _castling_move(position, MoveFlag.CASTLE_KINGSIDE, san)
    if clean in ("O-O-O", "0-0-0"):
        return _castling_move(position, MoveFlag.CASTLE_QUEENSIDE, san)

    # Promotion: "e8=Q", also tolerate "e8Q"
    promotion: PieceType | None = None
    if "=" in clean:
        clean, _, promo = clean.partition("=")
        promotion = _SAN_PIECE_REV.get(promo.upper())
        if promotion not in PROMOTION_TYPES:
            raise PGNParseError(f"Invalid promotion piece in {san!r}", token=san)
    elif len(clean) > 2 and clean[-1] in "QRBN" and clean[-2] in RANKS:
        promotion = _SAN_PIECE_REV[clean[-1]]
        clean = clean[:-1]

    # Destination (last two chars)
    try:
        to_sq = parse_square(clean[-2:])
    except ValueError:
        raise PGNParseError(f"Invalid destination in {san!r}", token=san) from None
    clean = clean[:-2]

    # Piece type
    if clean and clean[0] in _SAN_PIECE_REV:
        piece_type = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]
    else:
        piece_type = PieceType.PAWN

    # Capture marker
    if clean.endswith("x"):
        clean = clean[:-1]

    # Disambiguation
    from_col: int | None = None
    from_row: int | None = None
    try:
        if len(clean) == 2:
            from_col = col_from_file(clean[0])
            from_row = row_from_rank(clean[1])
        elif len(clean) == 1:
            if clean in FILES:
                from_col = col_from_file(clean)
            else:
                from_row = row_from_rank(clean)
        elif clean:
            raise ValueError(clean)
    except ValueError:
        raise PGNParseError(f"Unparseable move token {san!r}", token=san) from None

    wanted_promotion = promotion or default_promotion
    gen = MoveGenerator(position)
    for sq, piece in list(position.board.occupied()):
        if piece.color != position.side_to_move or piece.piece_type != piece_type:
            continue
        if from_col is not None and sq[1] != from_col:
            continue
        if from_row is not None and sq[0] != from_row:
            continue
        for move in gen.legal_moves(sq):
            if move.to_sq != to_sq:
                continue
            if move.flag == MoveFlag.PROMOTION and move.promotion != wanted_promotion:
                continue
            return move

    raise PGNParseError(
        f"No {position.side_to_move} {piece_type} can play {san!r}", token=san
    )
