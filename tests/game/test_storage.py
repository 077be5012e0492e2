"""Tests for the persisted game record and its JSON store."""

import json
from pathlib import Path

import pytest

from purechess.config import EngineSettings
from purechess.core.enums import Color, PieceType
from purechess.core.errors import StorageError
from purechess.core.types import parse_square
from purechess.game.controller import GameController
from purechess.game.storage import GameStore, SavedGame, enable_autosave


def _play(ctrl: GameController, *moves: str) -> None:
    for move in moves:
        ctrl.request_move(parse_square(move[:2]), parse_square(move[2:]))


class TestSavedGame:
    def test_to_dict_keys(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "d7d5", "e4d5")
        data = ctrl.persisted_state().to_dict()
        assert set(data) == {
            "pgn",
            "timestamp",
            "capturedPieces",
            "currentMoveIndex",
            "boardOrientation",
            "gameOver",
        }
        assert data["capturedPieces"] == {"white": ["pawn"], "black": []}
        assert data["currentMoveIndex"] == 3
        assert data["boardOrientation"] == "white"
        assert data["gameOver"] is False
        assert "1. e4 d5 2. exd5" in data["pgn"]

    def test_from_dict_round_trip(self) -> None:
        saved = SavedGame(
            pgn="1. e4 *",
            captured_pieces={Color.WHITE: [PieceType.KNIGHT], Color.BLACK: []},
            current_move_index=1,
            board_orientation=Color.BLACK,
        )
        assert SavedGame.from_dict(saved.to_dict()) == saved

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"pgn": "*", "boardOrientation": "purple"},
            {"pgn": "*", "capturedPieces": {"white": ["dragon"]}},
            {"pgn": "*", "currentMoveIndex": "three"},
        ],
    )
    def test_from_dict_rejects_malformed(self, data: dict) -> None:
        with pytest.raises(StorageError):
            SavedGame.from_dict(data)


class TestGameStore:
    def test_save_and_load(self, tmp_path: Path) -> None:
        store = GameStore(tmp_path / "nested" / "game.json")
        ctrl = GameController()
        _play(ctrl, "e2e4")
        saved = ctrl.persisted_state()
        path = store.save(saved)
        assert path.is_file()
        assert json.loads(path.read_text(encoding="utf-8"))["currentMoveIndex"] == 1
        assert store.load() == saved
        assert store.saved_timestamp() == saved.timestamp

    def test_load_missing_returns_none(self, tmp_path: Path) -> None:
        store = GameStore(tmp_path / "missing.json")
        assert not store.exists()
        assert store.load() is None
        assert store.saved_timestamp() is None

    def test_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "game.json"
        path.write_text("{not json", encoding="utf-8")
        store = GameStore(path)
        with pytest.raises(StorageError):
            store.load()
        assert store.saved_timestamp() is None

    def test_non_object_json(self, tmp_path: Path) -> None:
        path = tmp_path / "game.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(StorageError, match="not a JSON object"):
            GameStore(path).load()

    def test_clear(self, tmp_path: Path) -> None:
        store = GameStore(tmp_path / "game.json")
        store.save(SavedGame(pgn="*"))
        store.clear()
        assert not store.exists()
        store.clear()

    def test_save_failure_raises_storage_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        store = GameStore(blocker / "game.json")
        with pytest.raises(StorageError, match="Failed to save"):
            store.save(SavedGame(pgn="*"))


class TestRestore:
    def test_restore_brings_back_view_state(self) -> None:
        ctrl = GameController()
        _play(ctrl, "e2e4", "e7e5", "g1f3")
        ctrl.navigate(1)
        ctrl.flip_orientation()
        saved = ctrl.persisted_state()

        other = GameController()
        other.restore(saved)
        assert other.notation() == ["e4", "e5", "Nf3"]
        assert other.state.current_move_index == 1
        assert other.orientation == Color.BLACK
        assert other.board_snapshot() == ctrl.board_snapshot()

    def test_restore_bad_pgn(self) -> None:
        ctrl = GameController()
        _play(ctrl, "d2d4")
        with pytest.raises(StorageError):
            ctrl.restore(SavedGame(pgn="1. Ke5 *", board_orientation=Color.BLACK))
        assert ctrl.notation() == ["d4"]
        assert ctrl.orientation == Color.WHITE

    @pytest.mark.parametrize("index", [-1, 3, 7])
    def test_restore_bad_index_keeps_live_game(self, index: int) -> None:
        ctrl = GameController()
        _play(ctrl, "d2d4")
        before = ctrl.board_snapshot()
        changed: list[int] = []
        ctrl.events.on_position_changed.append(changed.append)

        with pytest.raises(StorageError, match="outside 0..2"):
            ctrl.restore(
                SavedGame(
                    pgn="1. e4 e5 *",
                    current_move_index=index,
                    board_orientation=Color.BLACK,
                )
            )

        assert ctrl.notation() == ["d4"]
        assert ctrl.orientation == Color.WHITE
        assert ctrl.state.current_move_index == 1
        assert ctrl.board_snapshot() == before
        assert changed == []


class TestAutosave:
    def test_settings_enable_autosave(self, tmp_path: Path) -> None:
        path = tmp_path / "autosave.json"
        ctrl = GameController(EngineSettings(autosave=True, save_path=path))
        _play(ctrl, "e2e4")
        assert GameStore(path).load().current_move_index == 1

        ctrl.new_game()
        assert not path.exists()

    def test_explicit_store(self, tmp_path: Path) -> None:
        ctrl = GameController()
        store = GameStore(tmp_path / "game.json")
        enable_autosave(ctrl, store)
        _play(ctrl, "e2e4", "e7e5")
        saved = store.load()
        assert saved is not None
        assert "1. e4 e5" in saved.pgn

    def test_failed_autosave_is_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        ctrl = GameController()
        enable_autosave(ctrl, GameStore(blocker / "game.json"))
        _play(ctrl, "e2e4")
        assert ctrl.notation() == ["e4"]
        assert "Auto-save failed" in caplog.text
