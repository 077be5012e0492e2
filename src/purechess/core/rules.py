"""End-of-turn detection: check, checkmate and stalemate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from purechess.core.enums import Color, GameResult, GameStatus
from purechess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from purechess.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Everything is judged from the point of view of ``side_to_move``.
    """

    @staticmethod
    def game_status(position: Position) -> GameStatus:
        """NONE or CHECK while a legal reply exists, else CHECKMATE or STALEMATE."""
        gen = MoveGenerator(position)
        attacked = gen.is_in_check(position.side_to_move)
        if not gen.has_legal_moves():
            return GameStatus.CHECKMATE if attacked else GameStatus.STALEMATE
        return GameStatus.CHECK if attacked else GameStatus.NONE

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return MoveGenerator(position).is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.game_status(position) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.game_status(position) == GameStatus.STALEMATE

    @staticmethod
    def check_flags(position: Position) -> dict[Color, bool]:
        """Whether each color's king is attacked, whoever is to move."""
        gen = MoveGenerator(position)
        return {color: gen.is_in_check(color) for color in Color}

    @staticmethod
    def game_result(position: Position) -> GameResult:
        status = Rules.game_status(position)
        if status == GameStatus.STALEMATE:
            return GameResult.DRAW
        if status != GameStatus.CHECKMATE:
            return GameResult.IN_PROGRESS
        # The side to move has been mated.
        if position.side_to_move == Color.BLACK:
            return GameResult.WHITE_WINS
        return GameResult.BLACK_WINS
