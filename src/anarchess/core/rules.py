"""High-level chess rules: check, checkmate, stalemate, promotion."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from anarchess.core.enums import Color, GameStatus, PieceType
from anarchess.core.executor import promotion_rank
from anarchess.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from anarchess.core.piece import Piece
    from anarchess.core.position import Position
    from anarchess.core.types import Square

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GameEnd:
    """Result of the game-end check for one side."""

    status: GameStatus
    loser: Color | None = None

    @property
    def is_over(self) -> bool:
        return self.status != GameStatus.ONGOING

    @property
    def winner(self) -> Color | None:
        return self.loser.opposite if self.loser is not None else None


ONGOING = GameEnd(GameStatus.ONGOING)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        """Is *color*'s king (default: side to move) attacked?  No king → False."""
        side = position.side_to_move if color is None else color
        gen = MoveGenerator.for_position(position)
        return gen.is_king_in_check(position.board.king_square(side), side)

    @staticmethod
    def all_legal_moves(
        position: Position, color: Color | None = None
    ) -> dict[Piece, set[Square]]:
        """Legal destinations for every piece of *color* that has at least one."""
        side = position.side_to_move if color is None else color
        gen = MoveGenerator.for_position(position)
        moves: dict[Piece, set[Square]] = {}
        for piece in position.board.pieces(side):
            dests = gen.legal_moves(piece)
            if dests:
                moves[piece] = dests
        return moves

    @staticmethod
    def has_legal_move(position: Position, color: Color) -> bool:
        gen = MoveGenerator.for_position(position)
        return any(gen.legal_moves(piece) for piece in position.board.pieces(color))

    @staticmethod
    def game_end(position: Position, side: Color, king_in_check: bool) -> GameEnd:
        """Classify *side*'s situation once it is their turn.

        *side* has no escape iff the union of its pieces' legal moves is
        empty; *king_in_check* alone separates checkmate from stalemate.
        """
        if Rules.has_legal_move(position, side):
            return ONGOING
        if king_in_check:
            _LOGGER.info("Checkmate: %s has no legal move", side)
            return GameEnd(GameStatus.CHECKMATE, loser=side)
        _LOGGER.info("Stalemate: %s has no legal move", side)
        return GameEnd(GameStatus.STALEMATE)

    @staticmethod
    def game_status(position: Position) -> GameEnd:
        """Game-end check for the side to move, computing check itself."""
        side = position.side_to_move
        return Rules.game_end(position, side, Rules.is_in_check(position, side))

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.game_status(position).status == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.game_status(position).status == GameStatus.STALEMATE

    @staticmethod
    def reached_promotion_rank(piece: Piece | None) -> bool:
        """Whether *piece* is a pawn standing on the opponent's home rank."""
        if piece is None or not piece.alive:
            return False
        return (
            piece.piece_type == PieceType.PAWN
            and piece.position[1] == promotion_rank(piece.color)
        )
