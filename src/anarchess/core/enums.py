"""Core enumerations for the rules engine."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class RuleMode(IntEnum):
    """Which rule set the executor enforces."""

    STANDARD = 0
    ANARCHY = 1  # free placement, no legality checking

    def __str__(self) -> str:
        return self.name.capitalize()


class MoveResult(IntEnum):
    """Outcome of a move attempt.

    The numeric values are stable: callers may forward them as-is to
    presentation or audio layers.
    """

    REJECTED = 0
    MOVED = 1
    CAPTURED = 2


class GameStatus(IntEnum):
    """Game-end classification for the side to move."""

    ONGOING = 0
    CHECKMATE = 1
    STALEMATE = 2
