"""Game-layer states and the controller interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from anarchess.core.enums import MoveResult, PieceType, RuleMode
    from anarchess.core.piece import Piece
    from anarchess.core.rules import GameEnd
    from anarchess.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a game session."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the session orchestrator."""

    @abstractmethod
    def start_game(self, placement: str | None = None) -> None:
        """Load the starting placement and hand the move to White."""

    @abstractmethod
    def end_game(self) -> None:
        """Stop the game and clear the board."""

    @abstractmethod
    def submit_move(self, piece: Piece, destination: Square) -> MoveResult:
        """Attempt a move for the side to move."""

    @abstractmethod
    def promote(self, piece_type: PieceType) -> bool:
        """Resolve a pending promotion. Returns True on success."""

    @abstractmethod
    def end_turn(self) -> GameEnd:
        """Pass the move to the other side and evaluate its situation."""

    @abstractmethod
    def set_rule_mode(self, mode: RuleMode) -> None:
        """Switch between standard and anarchy rules."""
