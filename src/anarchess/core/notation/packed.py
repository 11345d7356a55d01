"""One-byte piece state for bandwidth-constrained transports.

Bit layout, most significant first::

    f f f r r r c m
    file  rank  |  has_moved
                white

The in-memory model never uses this form; it exists only at the
serialization boundary.
"""

from __future__ import annotations

from typing import NamedTuple

from anarchess.core.enums import Color
from anarchess.core.piece import Piece
from anarchess.core.types import Square


class PackedPieceState(NamedTuple):
    square: Square
    color: Color
    has_moved: bool


def pack_piece_state(piece: Piece) -> int:
    file, rank = piece.position
    state = (file & 0b111) << 5
    state |= (rank & 0b111) << 2
    state |= (1 if piece.color == Color.WHITE else 0) << 1
    state |= 1 if piece.has_moved else 0
    return state


def unpack_piece_state(state: int) -> PackedPieceState:
    if not 0 <= state <= 0xFF:
        raise ValueError(f"Packed piece state must fit in one byte: {state!r}")
    return PackedPieceState(
        square=Square(state >> 5, (state & 0b00011100) >> 2),
        color=Color.WHITE if state & 0b10 else Color.BLACK,
        has_moved=bool(state & 0b1),
    )
