"""Tests for History: snapshots, replay and fork-on-write."""

import pytest

from purechess.core.enums import Color, PieceType
from purechess.core.position import Position
from purechess.game.history import History
from purechess.game.state import GameState

OPENING = ["e4", "e5", "Nf3", "Nc6", "Bb5", "a6", "Bxc6", "dxc6", "O-O"]
EN_PASSANT_LINE = [
    "e4", "Nf6", "e5", "d5", "exd6", "cxd6",
    "Nf3", "Nc6", "Bb5", "Bd7", "O-O", "e5",
]


def _play(*sans: str) -> GameState:
    gs = GameState()
    for san in sans:
        gs.play_san(san)
    return gs


class TestHistory:
    def test_starts_with_initial_snapshot(self) -> None:
        history = History(Position())
        assert len(history) == 0
        assert history.current_index == 0
        assert history.is_at_tip
        assert history.position_at(0) == Position()

    def test_initial_is_a_copy(self) -> None:
        history = History(Position())
        history.initial.board.clear()
        assert history.initial == Position()

    def test_records_sans_in_order(self) -> None:
        gs = _play(*OPENING)
        assert gs.history.sans() == OPENING
        assert len(gs.history) == len(OPENING)
        assert gs.history.current_index == len(OPENING)

    def test_replay_matches_snapshots(self) -> None:
        history = _play(*OPENING).history
        for index in range(len(history) + 1):
            assert history.replay_to(index) == history.position_at(index)

    @pytest.mark.parametrize("start", range(len(EN_PASSANT_LINE) + 1))
    def test_replaying_from_any_ply_reaches_tip(self, start: int) -> None:
        gs = _play(*EN_PASSANT_LINE)
        tip = gs.history.position_at(len(EN_PASSANT_LINE))
        remaining = gs.history.moves[start:]

        gs.go_to_move(start)
        for record in remaining:
            move = record.move
            gs.request_move(move.from_sq, move.to_sq, move.promotion)

        assert gs.position == tip
        assert gs.history.sans() == EN_PASSANT_LINE

    def test_one_king_each_at_every_ply(self) -> None:
        history = _play(*EN_PASSANT_LINE).history
        for index in range(len(history) + 1):
            board = history.position_at(index).board
            for color in Color:
                assert len(board.pieces_of_type(color, PieceType.KING)) == 1

    def test_position_at_returns_independent_copies(self) -> None:
        history = _play("e4", "e5").history
        view = history.position_at(1)
        view.board.clear()
        assert history.position_at(1) != view

    def test_snapshots_keep_side_to_move(self) -> None:
        history = _play("e4", "e5", "Nf3").history
        assert history.position_at(0).side_to_move == Color.WHITE
        assert history.position_at(1).side_to_move == Color.BLACK
        assert history.position_at(3).side_to_move == Color.BLACK

    @pytest.mark.parametrize("index", [-1, 4])
    def test_out_of_range(self, index: int) -> None:
        history = _play("e4", "e5", "Nf3").history
        with pytest.raises(ValueError, match="out of range"):
            history.position_at(index)
        with pytest.raises(ValueError):
            history.set_current(index)

    def test_append_behind_tip_forks(self) -> None:
        gs = _play("e4", "e5", "Nf3")
        gs.go_to_move(1)
        gs.play_san("c5")
        assert gs.history.sans() == ["e4", "c5"]
        assert len(gs.history) == 2
        assert gs.history.is_at_tip
        assert gs.history.position_at(2) == gs.position

    def test_truncate_drops_future(self) -> None:
        history = _play("e4", "e5", "Nf3").history
        history.set_current(1)
        history.truncate()
        assert history.sans() == ["e4"]
        assert history.is_at_tip

    def test_viewed_moves(self) -> None:
        history = _play("e4", "e5", "Nf3").history
        history.set_current(2)
        assert [r.san for r in history.viewed_moves()] == ["e4", "e5"]

    def test_records_carry_pre_move_state(self) -> None:
        history = _play("e4", "d5", "exd5").history
        capture = history.moves[2]
        assert capture.is_capture
        assert capture.color == Color.WHITE
        assert capture.en_passant_before == (2, 3)
        assert history.moves[0].en_passant_before is None
        assert not history.moves[0].had_moved
