"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from purechess.core.enums import Color, PieceType
from purechess.core.piece import Piece
from purechess.core.types import FILES, Square, in_bounds

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8×8 grid of optional pieces with a king-square cache.

    Pure storage: nothing here knows about legality.
    """

    __slots__ = ("_grid", "_king_squares")

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]
        # [color] -> king square cache (None if king missing).
        self._king_squares: list[Square | None] = [None, None]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        row, col = sq
        old_piece = self._grid[row][col]
        if (
            old_piece is not None
            and old_piece.piece_type == PieceType.KING
            and self._king_squares[int(old_piece.color)] == sq
        ):
            self._king_squares[int(old_piece.color)] = None

        self._grid[row][col] = piece
        if piece is not None and piece.piece_type == PieceType.KING:
            self._king_squares[int(piece.color)] = sq

    def get(self, sq: Square) -> Piece | None:
        return self[sq]

    def set(self, sq: Square, piece: Piece | None) -> None:
        self[sq] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    @staticmethod
    def in_bounds(sq: Square) -> bool:
        return in_bounds(sq[0], sq[1])

    def relocate(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Move whatever sits on *from_sq* to *to_sq* and return what was there.

        The moved piece is marked as having moved.
        """
        piece = self[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")
        captured = self[to_sq]
        self[from_sq] = None
        self[to_sq] = piece
        piece.has_moved = True
        return captured

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` pairs in row-major order from a8."""
        for row in range(8):
            for col in range(8):
                piece = self._grid[row][col]
                if piece is not None:
                    yield (row, col), piece

    def pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*, row-major from a8."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def pieces_of_type(self, color: Color, piece_type: PieceType) -> list[Square]:
        return [
            sq
            for sq, piece in self.occupied()
            if piece.color == color and piece.piece_type == piece_type
        ]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._king_squares[int(color)]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Mutation / copying -------------------------------------------------

    def clone(self) -> Board:
        """Independent copy; no piece object is shared with the original."""
        b = Board()
        b._grid = [
            [piece.copy() if piece is not None else None for piece in row]
            for row in self._grid
        ]
        b._king_squares = self._king_squares.copy()
        return b

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]
        self._king_squares = [None, None]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col in range(8):
            b[(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[(1, col)] = Piece(Color.BLACK, PieceType.PAWN)

        for col, pt in enumerate(_BACK_RANK):
            b[(7, col)] = Piece(Color.WHITE, pt)
            b[(0, col)] = Piece(Color.BLACK, pt)
        return b

    @classmethod
    def from_diagram(cls, diagram: str) -> Board:
        """Build a board from the text produced by :meth:`__repr__`.

        Rank labels and the trailing file legend are optional; ``.`` marks an
        empty square.
        """
        rows: list[list[str]] = []
        for raw_line in diagram.strip().splitlines():
            tokens = raw_line.split()
            if not tokens or tokens == list(FILES):
                continue
            if len(tokens) == 1:
                tokens = list(tokens[0])
            if len(tokens) == 9 and tokens[0].isdigit():
                tokens = tokens[1:]
            if len(tokens) != 8:
                raise ValueError(f"Diagram row must have 8 squares: {raw_line!r}")
            rows.append(tokens)
        if len(rows) != 8:
            raise ValueError(f"Diagram must have 8 rows, got {len(rows)}")

        b = cls()
        for row, tokens in enumerate(rows):
            for col, char in enumerate(tokens):
                if char != ".":
                    b[(row, col)] = Piece.from_char(char)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
