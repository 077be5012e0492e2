"""Square type alias and coordinate helpers.

Board layout (row-major, white at the bottom):
    row 0 = rank 8, row 7 = rank 1
    col 0 = file a, col 7 = file h

    a8=(0, 0), b8=(0, 1), ..., h8=(0, 7)
    ...
    a1=(7, 0), b1=(7, 1), ..., h1=(7, 7)
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]  # (row, col), each 0–7

FILES = "abcdefgh"
RANKS = "12345678"


def make_square(row: int, col: int) -> Square:
    """Create square from row (0–7, rank 8 first) and col (0–7, file a first)."""
    return (row, col)


def row_of(sq: Square) -> int:
    return sq[0]


def col_of(sq: Square) -> int:
    return sq[1]


def in_bounds(row: int, col: int) -> bool:
    """Whether (row, col) lies on the 8×8 board."""
    return 0 <= row < 8 and 0 <= col < 8


def is_valid_square(sq: Square) -> bool:
    return in_bounds(sq[0], sq[1])


def file_char(sq: Square) -> str:
    """File letter of *sq*, e.g. (7, 4) → 'e'."""
    return FILES[sq[1]]


def rank_char(sq: Square) -> str:
    """Rank digit of *sq*, e.g. (7, 4) → '1'."""
    return str(8 - sq[0])


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (7, 4) → 'e1', (0, 7) → 'h8'."""
    return file_char(sq) + rank_char(sq)


def col_from_file(char: str) -> int:
    if len(char) != 1 or char not in FILES:
        raise ValueError(f"Invalid file: {char!r}")
    return FILES.index(char)


def row_from_rank(char: str) -> int:
    if len(char) != 1 or char not in RANKS:
        raise ValueError(f"Invalid rank: {char!r}")
    return 8 - int(char)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return (row_from_rank(name[1]), col_from_file(name[0]))


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ((0, col) for col in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = ((1, col) for col in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = ((2, col) for col in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = ((3, col) for col in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = ((4, col) for col in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = ((5, col) for col in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = ((6, col) for col in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = ((7, col) for col in range(8))

ALL_SQUARES: tuple[Square, ...] = tuple(
    (row, col) for row in range(8) for col in range(8)
)
