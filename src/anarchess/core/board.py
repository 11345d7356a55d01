"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from anarchess.core.enums import Color, PieceType
from anarchess.core.piece import Piece
from anarchess.core.types import Square, is_valid_square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: Square) -> int:
    return sq[1] * 8 + sq[0]


class Board:
    """Mutable 64-square grid holding references to :class:`Piece` records.

    Two layers of mutation are offered:

    * :meth:`place`, :meth:`relocate` and :meth:`remove` keep every
      piece's ``position`` equal to the square that holds it.
    * Item assignment (``board[sq] = piece``) only touches the grid.  It
      exists for scratch copies, where pieces are moved hypothetically
      and must not observe the change.
    """

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        """Piece on *sq*; ``None`` when empty or off the board."""
        if not is_valid_square(sq):
            return None
        return self._squares[_index(sq)]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if not is_valid_square(sq):
            raise IndexError(f"Square off the board: {sq!r}")
        self._squares[_index(sq)] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` for every occupied square, a1 first."""
        for idx, piece in enumerate(self._squares):
            if piece is not None:
                yield Square(idx & 7, idx >> 3), piece

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """Pieces on the grid, optionally only those of *color*."""
        return [
            piece
            for _, piece in self.occupied()
            if color is None or piece.color == color
        ]

    def square_of(self, piece: Piece) -> Square | None:
        """Square holding *piece* on this grid (may differ on scratch copies)."""
        for sq, other in self.occupied():
            if other is piece:
                return sq
        return None

    def king(self, color: Color) -> Piece | None:
        """First king of *color* on the grid, or ``None`` when absent."""
        for _, piece in self.occupied():
            if piece.color == color and piece.piece_type == PieceType.KING:
                return piece
        return None

    def king_square(self, color: Color) -> Square | None:
        for sq, piece in self.occupied():
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        return None

    def holds(self, piece: Piece) -> bool:
        """Whether *piece* is alive and sits on its recorded square."""
        return piece.alive and self[piece.position] is piece

    # -- Mutation / copying -------------------------------------------------

    def place(self, piece: Piece, sq: Square) -> None:
        """Put *piece* on *sq*, replacing the grid entry without capturing."""
        self[sq] = piece
        piece.position = Square(*sq)
        piece.alive = True

    def relocate(self, piece: Piece, sq: Square) -> None:
        """Move *piece* from its current square to *sq*."""
        if self[piece.position] is piece:
            self[piece.position] = None
        self.place(piece, sq)

    def remove(self, piece: Piece) -> None:
        """Take *piece* off the grid and mark it dead."""
        if self[piece.position] is piece:
            self[piece.position] = None
        piece.alive = False

    def copy(self) -> Board:
        """Scratch copy sharing piece references."""
        b = Board()
        b._squares = self._squares.copy()
        return b

    def clear(self) -> None:
        for piece in self._squares:
            if piece is not None:
                piece.alive = False
        self._squares = [None] * 64

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(8):
            b.place(Piece(Color.WHITE, PieceType.PAWN), Square(f, 1))
            b.place(Piece(Color.BLACK, PieceType.PAWN), Square(f, 6))
        for f, pt in enumerate(_BACK_RANK):
            b.place(Piece(Color.WHITE, pt), Square(f, 0))
            b.place(Piece(Color.BLACK, pt), Square(f, 7))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __len__(self) -> int:
        return sum(1 for p in self._squares if p is not None)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self[Square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
