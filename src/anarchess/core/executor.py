"""MoveExecutor — applies moves to the authoritative position."""

from __future__ import annotations

import logging
from collections.abc import Collection

from anarchess.core.enums import Color, MoveResult, PieceType, RuleMode
from anarchess.core.move_generator import MoveGenerator
from anarchess.core.piece import Piece
from anarchess.core.position import Position
from anarchess.core.types import Square, is_valid_square

_LOGGER = logging.getLogger(__name__)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def promotion_rank(color: Color) -> int:
    """The opponent's home rank, where *color*'s pawns promote."""
    return 7 if color == Color.WHITE else 0


class MoveExecutor:
    """Pure state transitions over a :class:`Position`.

    Turn hand-over is not part of a move: callers inspect the returned
    :class:`MoveResult` and advance the turn themselves.
    """

    # ── Entry points ─────────────────────────────────────────────────────

    @staticmethod
    def execute(
        piece: Piece | None,
        destination: Square,
        position: Position | None,
        legal_moves: Collection[Square] | None = None,
    ) -> MoveResult:
        """Dispatch on ``position.rule_mode``.

        In standard mode *legal_moves* defaults to a fresh computation, so
        a destination chosen against a stale set is re-validated here.
        """
        if position is None:
            _LOGGER.warning("execute called without a position")
            return MoveResult.REJECTED
        if position.rule_mode == RuleMode.ANARCHY:
            return MoveExecutor.move(piece, destination, position)
        if legal_moves is None:
            legal_moves = MoveGenerator.for_position(position).legal_moves(piece)
        return MoveExecutor.move_with_legality_check(
            piece, destination, position, legal_moves
        )

    @staticmethod
    def move(
        piece: Piece | None, destination: Square, position: Position | None
    ) -> MoveResult:
        """Anarchy move: any on-board destination, any occupant is captured."""
        if not MoveExecutor._valid_request(piece, destination, position, "move"):
            return MoveResult.REJECTED
        assert piece is not None and position is not None

        dest = Square(*destination)
        origin = piece.position
        result = MoveResult.MOVED
        target = position.board[dest]
        if target is not None and target is not piece:
            position.capture(target)
            result = MoveResult.CAPTURED
            _LOGGER.debug("Anarchy capture of %r by %r", target, piece)

        MoveExecutor._track_double_push(position, piece, origin, dest)
        position.board.relocate(piece, dest)
        return result

    @staticmethod
    def move_with_legality_check(
        piece: Piece | None,
        destination: Square,
        position: Position | None,
        legal_moves: Collection[Square] | None,
    ) -> MoveResult:
        """Standard move validated against a precomputed legal set."""
        if not MoveExecutor._valid_request(
            piece, destination, position, "move_with_legality_check"
        ):
            return MoveResult.REJECTED
        assert piece is not None and position is not None
        if legal_moves is None:
            _LOGGER.warning("move_with_legality_check called without legal moves")
            return MoveResult.REJECTED

        dest = Square(*destination)
        if dest not in legal_moves:
            return MoveResult.REJECTED

        board = position.board
        origin = piece.position
        result = MoveResult.MOVED

        # 1. Regular capture
        target = board[dest]
        if target is not None and target is not piece:
            if target.color == piece.color:
                _LOGGER.warning("Legal set contained own-piece square %s", dest)
                return MoveResult.REJECTED
            position.capture(target)
            result = MoveResult.CAPTURED

        # 2. En passant: diagonal step onto an empty square
        elif (
            piece.piece_type == PieceType.PAWN
            and dest[0] != origin[0]
            and position.en_passant_target is not None
        ):
            victim = position.en_passant_target
            if victim.color != piece.color:
                _LOGGER.debug("En passant: %r takes %r", piece, victim)
                position.capture(victim)
                result = MoveResult.CAPTURED

        # 3. Castling: slide the rook next to the king, on the inner side
        if piece.piece_type == PieceType.KING and abs(dest[0] - origin[0]) == 2:
            direction = 1 if dest[0] > origin[0] else -1
            rook_sq = Square(7 if direction == 1 else 0, origin[1])
            rook = board[rook_sq]
            if rook is not None and rook.piece_type == PieceType.ROOK:
                board.relocate(rook, Square(dest[0] - direction, dest[1]))
                rook.has_moved = True
                _LOGGER.debug("Castling: rook %s -> %s", rook_sq, rook.position)
            else:
                _LOGGER.warning("Castling rook missing on %s", rook_sq)

        # 4. Double-push bookkeeping
        MoveExecutor._track_double_push(position, piece, origin, dest)

        # 5. Commit
        piece.has_moved = True
        board.relocate(piece, dest)
        return result

    # ── Placement / promotion ────────────────────────────────────────────

    @staticmethod
    def place(
        position: Position | None,
        piece_type: PieceType,
        color: Color,
        square: Square,
    ) -> Piece | None:
        """Spawn a new piece on *square*, capturing any occupant."""
        if position is None or not is_valid_square(square):
            _LOGGER.warning("place called with position=%r square=%r", position, square)
            return None
        sq = Square(*square)
        occupant = position.board[sq]
        if occupant is not None:
            position.capture(occupant)
        piece = Piece(color, piece_type)
        position.board.place(piece, sq)
        return piece

    @staticmethod
    def remove(position: Position | None, piece: Piece | None) -> bool:
        """Take *piece* out of play (e.g. dropped off the board)."""
        if position is None or piece is None or not position.board.holds(piece):
            _LOGGER.warning("remove called for %r not on the board", piece)
            return False
        position.capture(piece)
        return True

    @staticmethod
    def promote(
        position: Position | None, pawn: Piece | None, piece_type: PieceType
    ) -> Piece | None:
        """Replace *pawn* on its promotion rank with a new *piece_type*.

        Choosing :attr:`PieceType.PAWN` keeps the pawn as is.
        """
        if position is None or pawn is None or not position.board.holds(pawn):
            _LOGGER.warning("promote called for %r not on the board", pawn)
            return None
        if pawn.piece_type != PieceType.PAWN:
            _LOGGER.warning("promote called for non-pawn %r", pawn)
            return None
        if pawn.position[1] != promotion_rank(pawn.color):
            _LOGGER.warning("promote called for pawn off its promotion rank: %r", pawn)
            return None
        if piece_type == PieceType.PAWN:
            return pawn
        if piece_type not in PROMOTION_TYPES:
            _LOGGER.warning("Cannot promote to %s", piece_type.name)
            return None

        sq = pawn.position
        position.board.remove(pawn)
        if position.en_passant_target is pawn:
            position.en_passant_target = None
        promoted = Piece(pawn.color, piece_type, has_moved=True)
        position.board.place(promoted, sq)
        return promoted

    # ── Internals ────────────────────────────────────────────────────────

    @staticmethod
    def _valid_request(
        piece: Piece | None,
        destination: Square,
        position: Position | None,
        caller: str,
    ) -> bool:
        if piece is None or position is None:
            _LOGGER.warning("%s called with piece=%r position=%r", caller, piece, position)
            return False
        if not is_valid_square(destination):
            _LOGGER.warning("%s called with off-board destination %r", caller, destination)
            return False
        if not position.board.holds(piece):
            _LOGGER.warning("%s called for piece not on the board: %r", caller, piece)
            return False
        return True

    @staticmethod
    def _track_double_push(
        position: Position, piece: Piece, origin: Square, dest: Square
    ) -> None:
        if piece.piece_type == PieceType.PAWN and abs(dest[1] - origin[1]) == 2:
            position.en_passant_target = piece
        else:
            position.en_passant_target = None
