"""Position — authoritative game state (board + turn metadata)."""

from __future__ import annotations

from anarchess.core.board import Board
from anarchess.core.enums import Color, RuleMode
from anarchess.core.piece import Piece
from anarchess.core.types import Square


class Position:
    """Board + side to move + en-passant target + rule mode.

    ``en_passant_target`` references the *pawn* that double-pushed on the
    previous turn, not the square it skipped.  Only the move executor and
    the position loader mutate the board.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "en_passant_target",
        "rule_mode",
        "captured",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        en_passant_target: Piece | None = None,
        rule_mode: RuleMode = RuleMode.STANDARD,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.en_passant_target = en_passant_target
        self.rule_mode = rule_mode
        self.captured: list[Piece] = []

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def pieces(self, color: Color | None = None) -> list[Piece]:
        return self.board.pieces(color)

    def king(self, color: Color) -> Piece | None:
        return self.board.king(color)

    @property
    def is_anarchy(self) -> bool:
        return self.rule_mode == RuleMode.ANARCHY

    # ── Mutation helpers ─────────────────────────────────────────────────

    def capture(self, piece: Piece) -> None:
        """Remove *piece* from play and record it."""
        self.board.remove(piece)
        self.captured.append(piece)
        if self.en_passant_target is piece:
            self.en_passant_target = None

    def reset(self, board: Board) -> None:
        """Replace the board wholesale (setup / reset only)."""
        self.board.clear()
        self.board = board
        self.side_to_move = Color.WHITE
        self.en_passant_target = None
        self.captured = []

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep copy with fresh :class:`Piece` records."""
        board = Board()
        mapping: dict[int, Piece] = {}
        for sq, piece in self.board.occupied():
            clone = Piece(
                piece.color,
                piece.piece_type,
                sq,
                has_moved=piece.has_moved,
            )
            mapping[id(piece)] = clone
            board.place(clone, sq)

        ep = self.en_passant_target
        pos = Position(
            board=board,
            side_to_move=self.side_to_move,
            en_passant_target=mapping.get(id(ep)) if ep is not None else None,
            rule_mode=self.rule_mode,
        )
        return pos

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move!s}, "
            f"rule_mode={self.rule_mode!s}, "
            f"en_passant_target={self.en_passant_target!r})\n{self.board!r}"
        )
