"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from anarchess.core.enums import Color, PieceType, RuleMode
from anarchess.core.types import Square, is_valid_square

if TYPE_CHECKING:
    from anarchess.core.board import Board
    from anarchess.core.piece import Piece
    from anarchess.core.position import Position

_LOGGER = logging.getLogger(__name__)


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

ROOK_FILES: tuple[int, int] = (0, 7)


# -- Colour geometry ---------------------------------------------------------


def pawn_direction(color: Color) -> int:
    return 1 if color == Color.WHITE else -1


def home_rank(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


def pawn_start_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else 6


def _shift(sq: Square, df: int, dr: int) -> Square | None:
    file_idx = sq[0] + df
    rank_idx = sq[1] + dr
    if 0 <= file_idx < 8 and 0 <= rank_idx < 8:
        return Square(file_idx, rank_idx)
    return None


def capture_feasible(origin: Square, target: Square, piece_type: PieceType) -> bool:
    """Cheap geometric filter: could a *piece_type* on *origin* ever reach *target*?

    Must stay a superset of real attack capability; a false negative
    here turns into a missed check.
    """
    df = abs(origin[0] - target[0])
    dr = abs(origin[1] - target[1])
    if piece_type == PieceType.ROOK:
        return df == 0 or dr == 0
    if piece_type == PieceType.BISHOP:
        return df == dr
    if piece_type == PieceType.QUEEN:
        return df == 0 or dr == 0 or df == dr
    if piece_type == PieceType.KNIGHT:
        return df < 3 and dr < 3
    if piece_type == PieceType.KING:
        return max(df, dr) < 3
    if piece_type == PieceType.PAWN:
        return df == 1 and dr == 1
    return True


class MoveGenerator:
    """Move queries over one grid snapshot.

    The generator never mutates the board it is given.  Legality checks
    run on scratch copies (:meth:`Board.copy`), one per candidate move.

    Args:
        board: Grid to query.  ``None`` is tolerated and answers every
            query with its empty / negative default.
        en_passant_target: Pawn that double-pushed on the previous turn.
        rule_mode: In :attr:`RuleMode.ANARCHY` castling skips its
            attacked-square conditions.
    """

    __slots__ = ("_board", "_en_passant_target", "_rule_mode")

    def __init__(
        self,
        board: Board | None,
        en_passant_target: Piece | None = None,
        rule_mode: RuleMode = RuleMode.STANDARD,
    ) -> None:
        self._board = board
        self._en_passant_target = en_passant_target
        self._rule_mode = rule_mode

    @classmethod
    def for_position(cls, position: Position) -> MoveGenerator:
        return cls(position.board, position.en_passant_target, position.rule_mode)

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, piece: Piece | None) -> set[Square]:
        """Destinations obeying *piece*'s movement pattern, ignoring own-king safety."""
        origin = self._origin_of(piece, "pseudo_legal_moves")
        if origin is None or piece is None:
            return set()
        return self._moves_from(origin, piece)

    def legal_moves(self, piece: Piece | None) -> set[Square]:
        """Pseudo-legal destinations that do not leave *piece*'s own king in check."""
        origin = self._origin_of(piece, "legal_moves")
        if origin is None or piece is None:
            return set()
        assert self._board is not None

        pseudo = self._moves_from(origin, piece)
        king_sq = self._board.king_square(piece.color)
        if king_sq is None:
            # Without a king there is nothing to keep safe.
            return pseudo

        is_pawn = piece.piece_type == PieceType.PAWN
        is_king = piece.piece_type == PieceType.KING
        legal: set[Square] = set()
        for dest in pseudo:
            scratch = self._board.copy()
            scratch[origin] = None
            if is_pawn and dest[0] != origin[0] and scratch[dest] is None:
                victim_sq = Square(dest[0], origin[1])
                if scratch[victim_sq] is self._en_passant_target:
                    scratch[victim_sq] = None
            scratch[dest] = piece

            double_push = is_pawn and abs(dest[1] - origin[1]) == 2
            threatened = dest if is_king else king_sq
            gen = MoveGenerator(
                scratch, piece if double_push else None, self._rule_mode
            )
            if not gen.is_king_in_check(threatened, piece.color):
                legal.add(dest)
        return legal

    # -- Attack detection (public) -----------------------------------------

    def is_king_in_check(self, king_square: Square | None, king_color: Color) -> bool:
        """Is the king of *king_color* standing on *king_square* attacked?"""
        if self._board is None:
            _LOGGER.warning("is_king_in_check called without a board; assuming no check")
            return False
        if king_square is None:
            return False
        return self.is_square_attacked(king_square, king_color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board
        if board is None:
            _LOGGER.warning("is_square_attacked called without a board")
            return False
        if not is_valid_square(sq):
            _LOGGER.warning("is_square_attacked called with invalid square %r", sq)
            return False

        target = Square(*sq)
        for origin, piece in board.occupied():
            if piece.color != by_color:
                continue
            if not capture_feasible(origin, target, piece.piece_type):
                continue
            if self._attacks(origin, piece, target):
                return True
        return False

    # -- Internals ----------------------------------------------------------

    def _origin_of(self, piece: Piece | None, caller: str) -> Square | None:
        if piece is None or self._board is None:
            _LOGGER.warning("%s called with piece=%r board=%r", caller, piece, self._board)
            return None
        if not piece.alive:
            _LOGGER.warning("%s called for captured piece %r", caller, piece)
            return None
        if self._board[piece.position] is piece:
            return piece.position
        sq = self._board.square_of(piece)
        if sq is None:
            _LOGGER.warning("%s called for piece not on the board: %r", caller, piece)
        return sq

    def _attacks(self, origin: Square, piece: Piece, target: Square) -> bool:
        if piece.piece_type == PieceType.KING:
            # Castling never captures; adjacent squares only.
            return max(abs(target[0] - origin[0]), abs(target[1] - origin[1])) == 1
        return target in self._moves_from(origin, piece)

    def _moves_from(self, sq: Square, piece: Piece) -> set[Square]:
        moves: set[Square] = set()
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, KNIGHT_OFFSETS, moves)
        elif ptype == PieceType.KING:
            self._gen_steps(sq, piece.color, KING_OFFSETS, moves)
            self._gen_castling(sq, piece, moves)
        else:
            self._gen_sliding(sq, piece.color, _SLIDER_DIRS[ptype], moves)
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, piece: Piece, moves: set[Square]) -> None:
        board = self._board
        assert board is not None
        color = piece.color
        step = pawn_direction(color)

        one_step = _shift(sq, 0, step)
        if one_step is not None and board.is_empty(one_step):
            moves.add(one_step)
            if sq[1] == pawn_start_rank(color) and not piece.has_moved:
                two_step = _shift(sq, 0, 2 * step)
                if two_step is not None and board.is_empty(two_step):
                    moves.add(two_step)

        ep_pawn = self._en_passant_target
        for df in (-1, 1):
            cap_sq = _shift(sq, df, step)
            if cap_sq is None:
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.add(cap_sq)
                continue
            # En passant: the victim sits beside us, we land behind it.
            if ep_pawn is None:
                continue
            beside = board[Square(cap_sq[0], sq[1])]
            if (
                beside is ep_pawn
                and beside.color != color
                and beside.piece_type == PieceType.PAWN
            ):
                moves.add(cap_sq)

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        offsets: tuple[tuple[int, int], ...],
        moves: set[Square],
    ) -> None:
        board = self._board
        assert board is not None
        for df, dr in offsets:
            to_sq = _shift(sq, df, dr)
            if to_sq is None:
                continue
            target = board[to_sq]
            if target is None or target.color != color:
                moves.add(to_sq)

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        directions: tuple[tuple[int, int], ...],
        moves: set[Square],
    ) -> None:
        board = self._board
        assert board is not None
        for df, dr in directions:
            to_sq = _shift(sq, df, dr)
            while to_sq is not None:
                target = board[to_sq]
                if target is None:
                    moves.add(to_sq)
                    to_sq = _shift(to_sq, df, dr)
                    continue
                if target.color != color:
                    moves.add(to_sq)
                break

    def _gen_castling(self, king_sq: Square, king: Piece, moves: set[Square]) -> None:
        if king.has_moved:
            return
        color = king.color
        rank = home_rank(color)
        if king_sq[1] != rank:
            return

        board = self._board
        assert board is not None
        guarded = self._rule_mode == RuleMode.STANDARD
        opponent = color.opposite
        if guarded and self.is_square_attacked(king_sq, opponent):
            return

        king_file = king_sq[0]
        for rook_file in ROOK_FILES:
            # The king lands two files over, strictly short of the rook.
            if abs(rook_file - king_file) < 3:
                continue
            rook = board[Square(rook_file, rank)]
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != color
                or rook.has_moved
            ):
                continue

            lo, hi = sorted((king_file, rook_file))
            if any(board[Square(f, rank)] is not None for f in range(lo + 1, hi)):
                continue

            direction = 1 if rook_file > king_file else -1
            through = Square(king_file + direction, rank)
            dest = Square(king_file + 2 * direction, rank)
            if guarded and (
                self.is_square_attacked(through, opponent)
                or self.is_square_attacked(dest, opponent)
            ):
                continue
            moves.add(dest)


def legal_moves(piece: Piece | None, position: Position | None) -> set[Square]:
    """Legal destinations for *piece* in *position*."""
    if position is None:
        _LOGGER.warning("legal_moves called without a position")
        return set()
    return MoveGenerator.for_position(position).legal_moves(piece)
