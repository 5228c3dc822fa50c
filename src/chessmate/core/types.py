"""Square type and coordinate helpers.

Squares are ``(rank, file)`` pairs with both components in ``0..7``:
    a1 = (0, 0), h1 = (0, 7), a8 = (7, 0), h8 = (7, 7)
"""

from __future__ import annotations

from typing import NamedTuple

Vector = tuple[int, int]  # (delta rank, delta file)


class Square(NamedTuple):
    rank: int
    file: int

    def offset(self, vector: Vector) -> Square:
        """The square one *vector* step away (may be off-board)."""
        return Square(self.rank + vector[0], self.file + vector[1])

    @property
    def name(self) -> str:
        return square_name(self)


def is_valid_square(sq: tuple[int, int]) -> bool:
    """Both coordinates lie on the board."""
    return 0 <= sq[0] < 8 and 0 <= sq[1] < 8


def square_name(sq: tuple[int, int]) -> str:
    """Human-readable name, e.g. (0, 0) → 'a1', (7, 7) → 'h8'."""
    return chr(ord("a") + sq[1]) + str(sq[0] + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(rank=3, file=4)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(int(name[1]) - 1, ord(name[0]) - ord("a"))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(rank, file) for rank in range(8) for file in range(8)
)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Square(0, f) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Square(1, f) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Square(2, f) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Square(3, f) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Square(4, f) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Square(5, f) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Square(6, f) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Square(7, f) for f in range(8))
