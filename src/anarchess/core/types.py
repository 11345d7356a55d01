"""Square type and coordinate helpers.

Coordinates are zero-indexed from White's side:
    file 0..7 = a..h, rank 0..7 = 1..8
so White's back rank is rank 0 and Black's is rank 7.
"""

from __future__ import annotations

from typing import NamedTuple


class Square(NamedTuple):
    """A board coordinate ``(file, rank)``."""

    file: int
    rank: int

    def __str__(self) -> str:
        return square_name(self)


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7)."""
    return Square(file, rank)


def is_valid_square(sq: object) -> bool:
    """Whether *sq* is a pair of integers inside the 8×8 board."""
    if not isinstance(sq, tuple) or len(sq) != 2:
        return False
    file, rank = sq
    if not isinstance(file, int) or not isinstance(rank, int):
        return False
    return 0 <= file < 8 and 0 <= rank < 8


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (4, 3) → 'e4'."""
    return chr(ord("a") + sq[0]) + str(sq[1] + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 3)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(ord(name[0]) - ord("a"), int(name[1]) - 1)
