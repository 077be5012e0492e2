"""Piece object: kind, color and whether it has moved."""

from __future__ import annotations

from dataclasses import dataclass, replace

from purechess.core.enums import Color, PieceType

_TYPE_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _TYPE_LETTERS.items()}

# U+2654 is the white king; each set runs king, queen, rook, bishop, knight, pawn.
_SYMBOL_BASE: dict[Color, int] = {Color.WHITE: 0x2654, Color.BLACK: 0x265A}


@dataclass(slots=True)
class Piece:
    """A chess piece living on exactly one board cell.

    ``has_moved`` is flipped by :meth:`Board.relocate`; the make/unmake
    machinery restores it on undo.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = False

    def __str__(self) -> str:
        """Diagram letter (uppercase = white, lowercase = black)."""
        letter = _TYPE_LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from a diagram letter, e.g. 'N' → white knight."""
        piece_type = _TYPES_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if piece_type is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, piece_type)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return chr(_SYMBOL_BASE[self.color] + PieceType.KING - self.piece_type)

    def copy(self) -> Piece:
        return replace(self)
