"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from anarchess.core import (
        MoveExecutor, MoveGenerator, parse_square, position_from_placement,
    )

    pos = position_from_placement()
    pawn = pos.piece_at(parse_square("e2"))
    dests = MoveGenerator.for_position(pos).legal_moves(pawn)
    MoveExecutor.execute(pawn, parse_square("e4"), pos, dests)
"""

from anarchess.core.board import Board
from anarchess.core.enums import Color, GameStatus, MoveResult, PieceType, RuleMode
from anarchess.core.executor import PROMOTION_TYPES, MoveExecutor, promotion_rank
from anarchess.core.move_generator import MoveGenerator, capture_feasible, legal_moves
from anarchess.core.notation import (
    STARTING_PLACEMENT,
    PositionLoadError,
    load_placement,
    placement_from_position,
    position_from_placement,
)
from anarchess.core.piece import Piece
from anarchess.core.position import Position
from anarchess.core.rules import GameEnd, Rules
from anarchess.core.types import (
    Square,
    is_valid_square,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "MoveResult",
    "PieceType",
    "RuleMode",
    # Types / helpers
    "Square",
    "is_valid_square",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "GameEnd",
    "MoveExecutor",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "PROMOTION_TYPES",
    "capture_feasible",
    "legal_moves",
    "promotion_rank",
    # Notation
    "STARTING_PLACEMENT",
    "PositionLoadError",
    "load_placement",
    "placement_from_position",
    "position_from_placement",
]
