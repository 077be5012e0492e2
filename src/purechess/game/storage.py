"""Persisted game record and a JSON file store for it."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from purechess.core.enums import Color, PieceType
from purechess.core.errors import ChessError, StorageError

if TYPE_CHECKING:
    from purechess.game.controller import GameController
    from purechess.game.history import MoveRecord
    from purechess.game.state import GameState

_LOGGER = logging.getLogger(__name__)


@dataclass
class SavedGame:
    """Everything needed to bring a game back: PGN plus view state."""

    pgn: str
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    captured_pieces: dict[Color, list[PieceType]] = field(
        default_factory=lambda: {Color.WHITE: [], Color.BLACK: []}
    )
    current_move_index: int = 0
    board_orientation: Color = Color.WHITE
    game_over: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "pgn": self.pgn,
            "timestamp": self.timestamp,
            "capturedPieces": {
                str(color): [str(pt) for pt in pieces]
                for color, pieces in self.captured_pieces.items()
            },
            "currentMoveIndex": self.current_move_index,
            "boardOrientation": str(self.board_orientation),
            "gameOver": self.game_over,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SavedGame:
        try:
            captured = {
                Color[color.upper()]: [PieceType[name.upper()] for name in names]
                for color, names in data.get("capturedPieces", {}).items()
            }
            return cls(
                pgn=data["pgn"],
                timestamp=data.get("timestamp", ""),
                captured_pieces={
                    Color.WHITE: captured.get(Color.WHITE, []),
                    Color.BLACK: captured.get(Color.BLACK, []),
                },
                current_move_index=int(data.get("currentMoveIndex", 0)),
                board_orientation=Color[
                    str(data.get("boardOrientation", "white")).upper()
                ],
                game_over=bool(data.get("gameOver", False)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise StorageError(f"Malformed saved game: {exc}") from exc


def snapshot_game(controller: GameController) -> SavedGame:
    """Build the persisted-state record for *controller*'s game."""
    state = controller.state
    return SavedGame(
        pgn=controller.export_pgn(),
        captured_pieces=state.captured_pieces(),
        current_move_index=state.current_move_index,
        board_orientation=controller.orientation,
        game_over=state.game_over,
    )


def restore_game(controller: GameController, saved: SavedGame) -> None:
    """Load *saved* into *controller*: moves, viewed ply and orientation.

    The record is replayed off to the side first; a bad PGN or move index
    raises :class:`StorageError` and leaves the live game as it was.
    """
    try:
        state, headers = controller.replay_pgn(saved.pgn)
    except (ChessError, ValueError) as exc:
        raise StorageError(f"Saved game could not be restored: {exc}") from exc
    if not 0 <= saved.current_move_index <= state.ply_count:
        raise StorageError(
            f"Saved move index {saved.current_move_index} is outside "
            f"0..{state.ply_count}"
        )
    if saved.current_move_index != state.ply_count:
        state.go_to_move(saved.current_move_index)

    controller.install(state, headers)
    controller.set_orientation(saved.board_orientation)


class GameStore:
    """Single-slot JSON store for a :class:`SavedGame`."""

    __slots__ = ("_path",)

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def save(self, game: SavedGame) -> Path:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(game.to_dict(), indent=2), encoding="utf-8"
            )
        except OSError as exc:
            raise StorageError(f"Failed to save game: {exc}") from exc
        return self._path

    def load(self) -> SavedGame | None:
        """Return the saved game, or ``None`` if nothing was saved."""
        if not self.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to load saved game: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError("Failed to load saved game: not a JSON object")
        return SavedGame.from_dict(data)

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to clear saved game: {exc}") from exc

    def saved_timestamp(self) -> str | None:
        try:
            game = self.load()
        except StorageError as exc:
            _LOGGER.debug("No readable saved game: %s", exc)
            return None
        return game.timestamp if game is not None else None


def enable_autosave(controller: GameController, store: GameStore) -> None:
    """Save *controller*'s game after every move played at the live position."""

    def _on_move(_record: MoveRecord, state: GameState) -> None:
        if state.is_viewing_history:
            return
        try:
            store.save(snapshot_game(controller))
        except StorageError as exc:
            _LOGGER.warning("Auto-save failed: %s", exc)

    controller.events.on_move.append(_on_move)
