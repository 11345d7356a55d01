"""Notation package: placement strings and packed piece state."""

from anarchess.core.notation.fen import (
    STARTING_PLACEMENT,
    PositionLoadError,
    board_from_placement,
    load_placement,
    placement_from_position,
    position_from_placement,
)
from anarchess.core.notation.packed import (
    PackedPieceState,
    pack_piece_state,
    unpack_piece_state,
)

__all__ = [
    "STARTING_PLACEMENT",
    "PositionLoadError",
    "board_from_placement",
    "load_placement",
    "placement_from_position",
    "position_from_placement",
    "PackedPieceState",
    "pack_piece_state",
    "unpack_piece_state",
]
