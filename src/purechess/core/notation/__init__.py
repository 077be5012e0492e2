"""Notation package: SAN / PGN parsing and serialization."""

from purechess.core.notation.models import ParsedPgn
from purechess.core.notation.pgn import (
    build_pgn,
    game_result_from_pgn,
    parse_pgn_game,
    pgn_movetext,
    pgn_result_token,
)
from purechess.core.notation.san import (
    move_to_san,
    parse_san,
    piece_letter,
    piece_type_from_letter,
)

__all__ = [
    "ParsedPgn",
    "move_to_san",
    "parse_san",
    "piece_letter",
    "piece_type_from_letter",
    "pgn_result_token",
    "game_result_from_pgn",
    "pgn_movetext",
    "build_pgn",
    "parse_pgn_game",
]
