"""GameController: the engine facade a UI talks to.

Owns the live GameState plus selection, board orientation and PGN headers.
Emits events through plain callback lists that UI and storage code subscribe to.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from purechess.config import EngineSettings
from purechess.core.board import Board
from purechess.core.enums import Color, GameStatus, PieceType
from purechess.core.errors import InvalidMoveError, PGNParseError
from purechess.core.notation import build_pgn, parse_pgn_game, pgn_result_token
from purechess.core.position import Position
from purechess.core.types import Square, square_name
from purechess.game.history import MoveRecord
from purechess.game.interfaces import IGameController, MoveOutcome
from purechess.game.state import GameState
from purechess.game.storage import (
    GameStore,
    SavedGame,
    enable_autosave,
    restore_game,
    snapshot_game,
)

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameStatus], None]
PromotionCallback = Callable[[Square, Square], None]  # from, to
PositionCallback = Callable[[int], None]  # viewed ply


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_promotion_pending: list[PromotionCallback] = field(default_factory=list)
    on_position_changed: list[PositionCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns the single live game and translates UI input into state changes.

    All methods are synchronous and meant to be called from one thread.
    """

    __slots__ = (
        "_settings",
        "_state",
        "_selected",
        "_legal_targets",
        "_orientation",
        "_headers",
        "_store",
        "events",
    )

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self._settings = settings if settings is not None else EngineSettings()
        self._state = GameState(self._settings)
        self._selected: Square | None = None
        self._legal_targets: list[Square] = []
        self._orientation = Color.WHITE
        self._headers: dict[str, str] = {}
        self._store: GameStore | None = None
        self.events = GameEvents()

        if self._settings.autosave and self._settings.save_path is not None:
            self._store = GameStore(self._settings.save_path)
            enable_autosave(self, self._store)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def status(self) -> GameStatus:
        return self._state.status

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    @property
    def selected_square(self) -> Square | None:
        return self._selected

    @property
    def legal_targets(self) -> list[Square]:
        return list(self._legal_targets)

    @property
    def orientation(self) -> Color:
        return self._orientation

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def board_snapshot(self) -> Board:
        return self._state.position.board.clone()

    def notation(self) -> list[str]:
        """SAN of every move in the timeline, in order."""
        return self._state.history.sans()

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, position: Position | None = None) -> None:
        self._state = GameState(self._settings)
        if position is not None:
            self._state.setup(position)
        self._headers = {}
        self.clear_selection()
        if self._store is not None:
            self._store.clear()
        _LOGGER.info("New game started")
        self._emit_position_changed()

    def select_square(self, sq: Square) -> MoveOutcome | None:
        state = self._state
        if state.game_over or state.pending_promotion is not None:
            return None

        # A click while browsing history jumps back to the live position.
        if state.is_viewing_history:
            self.navigate(state.ply_count)
            self.clear_selection()
            return None

        if self._selected is not None and sq in self._legal_targets:
            from_sq = self._selected
            self.clear_selection()
            return self.request_move(from_sq, sq)

        piece = state.position.board[sq]
        if piece is not None and piece.color == state.current_player:
            self._selected = sq
            self._legal_targets = state.legal_destinations(sq)
        else:
            self.clear_selection()
        return None

    def clear_selection(self) -> None:
        self._selected = None
        self._legal_targets = []

    def request_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveOutcome:
        try:
            outcome = self._state.request_move(from_sq, to_sq, promotion)
        except InvalidMoveError as exc:
            _LOGGER.debug("Rejected move request: %s", exc)
            raise
        self._after_outcome(outcome)
        return outcome

    def complete_promotion(self, piece_type: PieceType) -> MoveOutcome:
        outcome = self._state.complete_promotion(piece_type)
        self._after_outcome(outcome)
        return outcome

    def cancel_promotion(self) -> None:
        self._state.cancel_promotion()

    def navigate(self, index: int) -> None:
        self._state.go_to_move(index)
        self.clear_selection()
        self._emit_position_changed()

    def flip_orientation(self) -> Color:
        self._orientation = self._orientation.opposite
        return self._orientation

    def set_orientation(self, color: Color) -> None:
        self._orientation = color

    # ── PGN ──────────────────────────────────────────────────────────────

    def load_pgn(self, pgn_text: str) -> None:
        """Replace the game with *pgn_text*; on any error nothing changes."""
        state, headers = self.replay_pgn(pgn_text)
        self.install(state, headers)

    def replay_pgn(self, pgn_text: str) -> tuple[GameState, dict[str, str]]:
        """Play *pgn_text* into a fresh GameState, leaving the live game alone."""
        parsed = parse_pgn_game(pgn_text)
        scratch = GameState(self._settings)
        for ply, san in enumerate(parsed.sans, start=1):
            try:
                scratch.play_san(san)
            except InvalidMoveError as exc:
                raise PGNParseError(
                    f"Move {ply} ({san}) cannot be played: {exc}", token=san
                ) from exc
            except PGNParseError:
                _LOGGER.warning("PGN import failed at ply %d (%s)", ply, san)
                raise
        return scratch, parsed.headers

    def install(self, state: GameState, headers: dict[str, str]) -> None:
        """Make *state* the live game."""
        self._state = state
        self._headers = dict(headers)
        self.clear_selection()
        _LOGGER.info("Loaded game with %d plies", state.ply_count)
        self._emit_position_changed()
        if state.game_over:
            self._emit_game_over(state.status)

    def export_pgn(self) -> str:
        result_token = pgn_result_token(self._state.result)
        headers: dict[str, str] = {
            "Event": self._settings.event,
            "Site": self._settings.site,
            "Date": datetime.now().strftime("%Y.%m.%d"),
            "Round": self._settings.round,
            "White": self._settings.white_name,
            "Black": self._settings.black_name,
        }
        for key, value in self._headers.items():
            if key in headers:
                headers[key] = value
        headers["Result"] = result_token
        return build_pgn(headers, self.notation(), result_token)

    # ── Persistence ──────────────────────────────────────────────────────

    def persisted_state(self) -> SavedGame:
        return snapshot_game(self)

    def restore(self, saved: SavedGame) -> None:
        restore_game(self, saved)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _after_outcome(self, outcome: MoveOutcome) -> None:
        if outcome.pending is not None:
            pending = outcome.pending
            _LOGGER.debug(
                "Promotion pending %s-%s",
                square_name(pending.from_sq),
                square_name(pending.to_sq),
            )
            for cb in self.events.on_promotion_pending:
                cb(pending.from_sq, pending.to_sq)
            return

        record = outcome.record
        assert record is not None
        self.clear_selection()
        _LOGGER.debug("Played %s", record.san)
        for cb in self.events.on_move:
            cb(record, self._state)
        if self._state.game_over:
            self._emit_game_over(self._state.status)

    def _emit_game_over(self, status: GameStatus) -> None:
        _LOGGER.info("Game over: %s", status.name.lower())
        for cb in self.events.on_game_over:
            cb(status)

    def _emit_position_changed(self) -> None:
        for cb in self.events.on_position_changed:
            cb(self._state.current_move_index)
