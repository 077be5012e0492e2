"""Enumerations shared by the rules engine and the game layer."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class Color(IntEnum):
    """Side color; the value doubles as an index into per-color arrays."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece kinds, cheapest first."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    def __str__(self) -> str:
        return self.name.lower()


class MoveFlag(IntEnum):
    """What, besides relocating one piece, a move does to the board."""

    NORMAL = 0
    DOUBLE_PAWN = 1  # leaves an en passant target behind
    EN_PASSANT = 2  # removes the pawn beside the destination
    CASTLE_KINGSIDE = 3  # also moves the h-file rook
    CASTLE_QUEENSIDE = 4  # also moves the a-file rook
    PROMOTION = 5  # replaces the pawn on arrival


class CastlingRights(IntFlag):
    """Castling rights still held; bits are only ever cleared during a game."""

    NONE = 0
    WHITE_KINGSIDE = 1
    WHITE_QUEENSIDE = 2
    BLACK_KINGSIDE = 4
    BLACK_QUEENSIDE = 8

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def kingside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_KINGSIDE if color == Color.WHITE else cls.BLACK_KINGSIDE

    @classmethod
    def queenside(cls, color: Color) -> CastlingRights:
        return cls.WHITE_QUEENSIDE if color == Color.WHITE else cls.BLACK_QUEENSIDE

    @classmethod
    def both(cls, color: Color) -> CastlingRights:
        return cls.kingside(color) | cls.queenside(color)


class GameStatus(IntEnum):
    """How things stand for the side to move."""

    NONE = 0
    CHECK = 1
    CHECKMATE = 2
    STALEMATE = 3

    @property
    def is_terminal(self) -> bool:
        return self >= GameStatus.CHECKMATE


class GameResult(IntEnum):
    """Outcome of a game, as recorded in a PGN ``Result`` tag."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
