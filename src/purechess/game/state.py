"""Game state machine: turn, status, promotion and navigable history."""

from __future__ import annotations

from dataclasses import dataclass, field

from purechess.config import EngineSettings
from purechess.core.enums import (
    CastlingRights,
    Color,
    GameResult,
    GameStatus,
    MoveFlag,
    PieceType,
)
from purechess.core.errors import InvalidMoveError
from purechess.core.move import Move
from purechess.core.move_generator import MoveGenerator
from purechess.core.notation import move_to_san, parse_san
from purechess.core.piece_rules import PROMOTION_TYPES
from purechess.core.position import Position, en_passant_capture_square
from purechess.core.rules import Rules
from purechess.core.types import Square, square_name
from purechess.game.history import History, MoveRecord
from purechess.game.interfaces import GamePhase, MoveOutcome, PendingPromotion


@dataclass
class GameState:
    """Manages one game: live position, status, history and promotion.

    Pure data and logic; it never logs and knows nothing about a UI.
    """

    settings: EngineSettings = field(default_factory=EngineSettings)
    position: Position = field(init=False)
    history: History = field(init=False)
    status: GameStatus = field(default=GameStatus.NONE, init=False)
    game_over: bool = field(default=False, init=False)
    is_in_check: dict[Color, bool] = field(init=False)
    pending_promotion: PendingPromotion | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, position: Position | None = None) -> None:
        """Initialise (or reset) the game, from the standard start by default."""
        self.position = position.copy() if position is not None else Position()
        self.history = History(self.position)
        self.pending_promotion = None
        self._refresh_status(at_tip=True)

    # ── Move requests ────────────────────────────────────────────────────

    def request_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveOutcome:
        """Validate and apply a move, or park it until a promotion is chosen.

        Raises :class:`InvalidMoveError` without touching any state when the
        request is not legal.
        """
        self._ensure_accepting_moves()

        piece = self.position.board[from_sq]
        if piece is None:
            raise InvalidMoveError(f"No piece on {square_name(from_sq)}")
        if piece.color != self.current_player:
            raise InvalidMoveError(
                f"It is {self.current_player}'s turn, "
                f"{square_name(from_sq)} holds a {piece.color} piece"
            )

        gen = MoveGenerator(self.position)
        candidates = [m for m in gen.legal_moves(from_sq) if m.to_sq == to_sq]
        if not candidates:
            raise InvalidMoveError(
                f"Illegal move {square_name(from_sq)}-{square_name(to_sq)}"
            )

        move = candidates[0]
        if move.flag == MoveFlag.PROMOTION:
            if promotion is None:
                self.pending_promotion = PendingPromotion(from_sq, to_sq)
                return MoveOutcome(pending=self.pending_promotion)
            chosen = [m for m in candidates if m.promotion == promotion]
            if not chosen:
                raise InvalidMoveError(f"Cannot promote to {promotion}")
            move = chosen[0]

        return MoveOutcome(record=self._apply(move))

    def complete_promotion(self, piece_type: PieceType) -> MoveOutcome:
        """Finish the pending promotion with *piece_type*."""
        pending = self.pending_promotion
        if pending is None:
            raise InvalidMoveError("No promotion is pending")
        if piece_type not in PROMOTION_TYPES:
            raise InvalidMoveError(f"Cannot promote to {piece_type}")
        self.pending_promotion = None
        return self.request_move(pending.from_sq, pending.to_sq, piece_type)

    def cancel_promotion(self) -> None:
        self.pending_promotion = None

    def play_san(self, san: str) -> MoveRecord:
        """Parse *san* against the live position and apply it."""
        self._ensure_accepting_moves()
        move = parse_san(
            self.position, san, default_promotion=self.settings.default_promotion
        )
        return self._apply(move)

    # ── Navigation ───────────────────────────────────────────────────────

    def go_to_move(self, index: int) -> None:
        """View the position after *index* moves.

        Only the tip can be terminal; earlier plies always report an open
        game so play can fork from them.
        """
        self.history.set_current(index)
        self.position = self.history.position_at(index)
        self.pending_promotion = None
        self._refresh_status(at_tip=self.history.is_at_tip)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def current_player(self) -> Color:
        return self.position.side_to_move

    @property
    def castling_rights(self) -> CastlingRights:
        return self.position.castling

    @property
    def en_passant_target(self) -> Square | None:
        return self.position.en_passant

    @property
    def king_positions(self) -> dict[Color, Square]:
        return self.position.king_squares

    @property
    def current_move_index(self) -> int:
        return self.history.current_index

    @property
    def ply_count(self) -> int:
        """Number of half-moves in the whole timeline."""
        return len(self.history)

    @property
    def is_viewing_history(self) -> bool:
        return not self.history.is_at_tip

    @property
    def phase(self) -> GamePhase:
        if self.game_over:
            return GamePhase.GAME_OVER
        if self.pending_promotion is not None:
            return GamePhase.PROMOTION_PENDING
        return GamePhase.AWAITING_MOVE

    @property
    def result(self) -> GameResult:
        """Outcome at the tip of the timeline."""
        if self.history.is_at_tip:
            tip = self.position
        else:
            tip = self.history.position_at(len(self.history))
        return Rules.game_result(tip)

    def legal_destinations(self, sq: Square) -> list[Square]:
        """Where the current player's piece on *sq* may go."""
        piece = self.position.board[sq]
        if piece is None or piece.color != self.current_player:
            return []
        return MoveGenerator(self.position).legal_destinations(sq)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return MoveGenerator(self.position).generate_legal_moves()

    def captured_pieces(self) -> dict[Color, list[PieceType]]:
        """Pieces taken by each color up to the viewed ply."""
        captured: dict[Color, list[PieceType]] = {Color.WHITE: [], Color.BLACK: []}
        for record in self.history.viewed_moves():
            if record.captured is not None:
                captured[record.color].append(record.captured.piece_type)
        return captured

    # ── Internal ─────────────────────────────────────────────────────────

    def _ensure_accepting_moves(self) -> None:
        if self.game_over:
            raise InvalidMoveError("The game is over")
        if self.pending_promotion is not None:
            raise InvalidMoveError("A promotion choice is pending")

    def _apply(self, move: Move) -> MoveRecord:
        board = self.position.board
        piece = board[move.from_sq]
        assert piece is not None
        capture_sq = (
            en_passant_capture_square(move)
            if move.flag == MoveFlag.EN_PASSANT
            else move.to_sq
        )
        captured = board[capture_sq]

        record = MoveRecord(
            move=move,
            piece_type=piece.piece_type,
            color=piece.color,
            had_moved=piece.has_moved,
            captured=captured.copy() if captured is not None else None,
            en_passant_before=self.position.en_passant,
            castling_before=self.position.castling,
        )

        self.position.play(move)
        self._refresh_status(at_tip=True)

        record.gives_check = self.is_in_check[piece.color.opposite]
        record.is_checkmate = self.status == GameStatus.CHECKMATE
        record.san = move_to_san(
            piece.piece_type,
            move,
            is_capture=captured is not None,
            is_check=record.gives_check,
            is_checkmate=record.is_checkmate,
        )
        self.history.append(record, self.position)
        return record

    def _refresh_status(self, *, at_tip: bool) -> None:
        self.is_in_check = Rules.check_flags(self.position)
        if at_tip:
            self.status = Rules.game_status(self.position)
            self.game_over = self.status.is_terminal
        else:
            self.status = GameStatus.NONE
            self.game_over = False
