"""Core domain layer: chess rules with zero external dependencies.

Quick start::

    from purechess.core import MoveGenerator, Position, parse_square

    pos = Position()
    gen = MoveGenerator(pos)
    for move in gen.legal_moves(parse_square("g1")):
        print(move)
"""

from purechess.core.attacks import is_attacked
from purechess.core.board import Board
from purechess.core.enums import (
    CastlingRights,
    Color,
    GameResult,
    GameStatus,
    MoveFlag,
    PieceType,
)
from purechess.core.errors import (
    ChessError,
    InvalidMoveError,
    PGNParseError,
    StorageError,
)
from purechess.core.move import Move
from purechess.core.move_generator import MoveGenerator
from purechess.core.notation import (
    build_pgn,
    move_to_san,
    parse_pgn_game,
    parse_san,
)
from purechess.core.piece import Piece
from purechess.core.piece_rules import candidate_moves
from purechess.core.position import Position
from purechess.core.rules import Rules
from purechess.core.types import (
    Square,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "GameStatus",
    "MoveFlag",
    "PieceType",
    # Errors
    "ChessError",
    "InvalidMoveError",
    "PGNParseError",
    "StorageError",
    # Types / helpers
    "Square",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "candidate_moves",
    "is_attacked",
    # Notation
    "build_pgn",
    "move_to_san",
    "parse_pgn_game",
    "parse_san",
]
