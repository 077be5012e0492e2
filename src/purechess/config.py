"""Engine-wide settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from purechess.core.enums import PieceType


@dataclass
class EngineSettings:
    """All user-configurable settings."""

    # Rules
    default_promotion: PieceType = PieceType.QUEEN

    # PGN export headers
    event: str = "Casual Game"
    site: str = "Pure Chess"
    round: str = "?"
    white_name: str = "Player 1"
    black_name: str = "Player 2"

    # Persistence
    autosave: bool = False
    save_path: Path | None = None

    def __post_init__(self) -> None:
        if self.default_promotion in (PieceType.PAWN, PieceType.KING):
            raise ValueError(
                f"Cannot promote to {self.default_promotion}; "
                "choose a queen, rook, bishop or knight"
            )
        if self.save_path is not None:
            self.save_path = Path(self.save_path)
