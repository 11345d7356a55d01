"""FEN piece-placement parsing and serialization."""

from __future__ import annotations

from anarchess.core.board import Board
from anarchess.core.enums import Color, PieceType, RuleMode
from anarchess.core.piece import Piece
from anarchess.core.position import Position
from anarchess.core.types import Square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


class PositionLoadError(ValueError):
    """Raised when a placement string cannot become the current position."""


def board_from_placement(text: str) -> Board:
    """Parse the placement field of a FEN string into a fresh :class:`Board`.

    Only the first whitespace-separated field is read, so a full FEN is
    accepted and its remaining fields are ignored.
    """
    if not isinstance(text, str):
        raise PositionLoadError(f"Placement must be a string, got {type(text).__name__}")
    fields = text.split()
    if not fields:
        raise PositionLoadError("Empty placement string")
    placement = fields[0]

    ranks = placement.split("/")
    if len(ranks) != 8:
        raise PositionLoadError(
            f"Invalid placement (must contain 8 ranks, got {len(ranks)}): {placement!r}"
        )

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch in "0123456789":
                step = int(ch)
                if not (1 <= step <= 8):
                    raise PositionLoadError(f"Invalid placement digit {ch!r}: {placement!r}")
                file += step
            else:
                if file >= 8:
                    raise PositionLoadError(f"Invalid placement rank width: {placement!r}")
                try:
                    piece = Piece.from_char(ch)
                except ValueError as exc:
                    raise PositionLoadError(f"{exc} in {placement!r}") from None
                board.place(piece, Square(file, rank))
                file += 1
            if file > 8:
                raise PositionLoadError(f"Invalid placement rank width: {placement!r}")
        if file != 8:
            raise PositionLoadError(f"Invalid placement rank width: {placement!r}")
    return board


def _check_kings(board: Board, rule_mode: RuleMode, text: str) -> None:
    """Standard rules allow at most one king per colour; anarchy allows any."""
    if rule_mode != RuleMode.STANDARD:
        return
    for color in Color:
        kings = sum(
            1 for p in board.pieces(color) if p.piece_type == PieceType.KING
        )
        if kings > 1:
            raise PositionLoadError(
                f"Invalid placement ({kings} {color!s} kings): {text!r}"
            )


def position_from_placement(
    text: str = STARTING_PLACEMENT,
    rule_mode: RuleMode = RuleMode.STANDARD,
) -> Position:
    """Build a new :class:`Position` with White to move."""
    board = board_from_placement(text)
    _check_kings(board, rule_mode, text)
    return Position(board, rule_mode=rule_mode)


def load_placement(position: Position, text: str = STARTING_PLACEMENT) -> None:
    """Reset *position* in place; on error *position* is left untouched."""
    board = board_from_placement(text)
    _check_kings(board, position.rule_mode, text)
    position.reset(board)


def placement_from_position(pos: Position) -> str:
    """Serialise the board of *pos* to a FEN placement field."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[Square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)
