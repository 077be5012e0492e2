"""Game management layer: the state machine and everything built around it.

Quick start::

    from purechess.game import GameController
    from purechess.core import parse_square

    ctrl = GameController()
    ctrl.request_move(parse_square("e2"), parse_square("e4"))
    print(ctrl.export_pgn())
"""

from purechess.game.controller import GameController, GameEvents
from purechess.game.history import History, MoveRecord
from purechess.game.interfaces import (
    GamePhase,
    IGameController,
    MoveOutcome,
    PendingPromotion,
)
from purechess.game.state import GameState
from purechess.game.storage import (
    GameStore,
    SavedGame,
    enable_autosave,
    restore_game,
    snapshot_game,
)

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "MoveOutcome",
    "PendingPromotion",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "History",
    "MoveRecord",
    # Persistence
    "GameStore",
    "SavedGame",
    "enable_autosave",
    "restore_game",
    "snapshot_game",
]
