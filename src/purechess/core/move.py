"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from purechess.core.enums import MoveFlag, PieceType
from purechess.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """One move as the generators produce it: squares plus a special flag.

    ``promotion`` is only set together with ``MoveFlag.PROMOTION``; the
    generators emit one move per promotion kind.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def __str__(self) -> str:
        """Long algebraic form, e.g. ``e7e8q``."""
        text = square_name(self.from_sq) + square_name(self.to_sq)
        if self.promotion == PieceType.KNIGHT:
            return text + "n"
        if self.promotion is not None:
            return text + str(self.promotion)[0]
        return text

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT
