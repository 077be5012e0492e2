"""Tests for Board."""

import pytest

from purechess.core.board import Board
from purechess.core.enums import Color, PieceType
from purechess.core.piece import Piece
from purechess.core.types import (
    A1, B1, C1, D1, E1, F1, G1, H1,
    E2,
    A8, B8, C8, D8, E8, F8, G8, H8,
    E4,
)


class TestBoardInitial:
    def test_white_king_position(self) -> None:
        board = Board.initial()
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_black_king_position(self) -> None:
        board = Board.initial()
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_white_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A1, PieceType.ROOK), (B1, PieceType.KNIGHT), (C1, PieceType.BISHOP),
            (D1, PieceType.QUEEN), (E1, PieceType.KING), (F1, PieceType.BISHOP),
            (G1, PieceType.KNIGHT), (H1, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.WHITE, pt), f"Mismatch at square {sq}"

    def test_black_back_rank(self) -> None:
        board = Board.initial()
        expected = [
            (A8, PieceType.ROOK), (B8, PieceType.KNIGHT), (C8, PieceType.BISHOP),
            (D8, PieceType.QUEEN), (E8, PieceType.KING), (F8, PieceType.BISHOP),
            (G8, PieceType.KNIGHT), (H8, PieceType.ROOK),
        ]
        for sq, pt in expected:
            assert board[sq] == Piece(Color.BLACK, pt), f"Mismatch at square {sq}"

    def test_pawn_rows(self) -> None:
        board = Board.initial()
        assert all(sq[0] == 6 for sq in board.pieces_of_type(Color.WHITE, PieceType.PAWN))
        assert all(sq[0] == 1 for sq in board.pieces_of_type(Color.BLACK, PieceType.PAWN))
        assert len(board.pieces_of_type(Color.WHITE, PieceType.PAWN)) == 8

    def test_empty_middle(self) -> None:
        board = Board.initial()
        for row in range(2, 6):
            for col in range(8):
                assert board[(row, col)] is None

    def test_nothing_has_moved(self) -> None:
        board = Board.initial()
        assert not any(piece.has_moved for _, piece in board.occupied())


class TestBoardOperations:
    def test_set_and_get(self) -> None:
        board = Board()
        piece = Piece(Color.WHITE, PieceType.PAWN)
        board.set(E4, piece)
        assert board.get(E4) is piece
        assert board.is_empty(E2)

    def test_relocate_marks_moved_and_returns_capture(self) -> None:
        board = Board()
        rook = Piece(Color.WHITE, PieceType.ROOK)
        victim = Piece(Color.BLACK, PieceType.KNIGHT)
        board[A1] = rook
        board[A8] = victim
        captured = board.relocate(A1, A8)
        assert captured is victim
        assert board[A8] is rook
        assert board[A1] is None
        assert rook.has_moved

    def test_relocate_empty_source_raises(self) -> None:
        with pytest.raises(ValueError, match="No piece"):
            Board().relocate(E2, E4)

    def test_relocate_tracks_king_square(self) -> None:
        board = Board.initial()
        board[F1] = None
        board.relocate(E1, F1)
        assert board.king_square(Color.WHITE) == F1

    def test_in_bounds(self) -> None:
        assert Board.in_bounds((0, 0))
        assert Board.in_bounds((7, 7))
        assert not Board.in_bounds((8, 0))
        assert not Board.in_bounds((0, -1))

    def test_clone_independence(self) -> None:
        board = Board.initial()
        copy = board.clone()
        assert board == copy
        copy[E1] = None
        assert board != copy
        assert board[E1] == Piece(Color.WHITE, PieceType.KING)

    def test_clone_does_not_share_pieces(self) -> None:
        board = Board.initial()
        copy = board.clone()
        assert copy[E2] is not board[E2]
        copy[E2].has_moved = True
        assert not board[E2].has_moved

    def test_king_square(self) -> None:
        board = Board.initial()
        assert board.king_square(Color.WHITE) == E1
        assert board.king_square(Color.BLACK) == E8

    def test_king_square_missing_raises(self) -> None:
        board = Board()
        with pytest.raises(ValueError, match="No WHITE king"):
            board.king_square(Color.WHITE)

    def test_all_pieces_count(self) -> None:
        board = Board.initial()
        assert len(board.pieces(Color.WHITE)) == 16
        assert len(board.pieces(Color.BLACK)) == 16

    def test_clear(self) -> None:
        board = Board.initial()
        board.clear()
        assert list(board.occupied()) == []


class TestBoardDiagram:
    def test_repr_round_trips(self) -> None:
        board = Board.initial()
        assert Board.from_diagram(repr(board)) == board

    def test_compact_rows(self) -> None:
        board = Board.from_diagram(
            """
            ....k...
            ........
            ........
            ........
            ........
            ........
            ........
            ....K..R
            """
        )
        assert board[E8] == Piece(Color.BLACK, PieceType.KING)
        assert board[H1] == Piece(Color.WHITE, PieceType.ROOK)
        assert board.king_square(Color.WHITE) == E1

    def test_wrong_row_count_raises(self) -> None:
        with pytest.raises(ValueError, match="8 rows"):
            Board.from_diagram("........\n........")

    def test_bad_piece_letter_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece"):
            Board.from_diagram("\n".join(["x......."] + ["........"] * 7))
