"""Piece — a tagged variant over the six piece types with mutable movement state."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessmate.core.enums import CastleSide, Color, PieceType
from chessmate.core.types import Square, Vector

KNIGHT_OFFSETS: tuple[Vector, ...] = (
    (2, 1),
    (1, 2),
    (-1, 2),
    (-2, 1),
    (-2, -1),
    (-1, -2),
    (1, -2),
    (2, -1),
)

KING_OFFSETS: tuple[Vector, ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)

BISHOP_DIRS: tuple[Vector, ...] = ((1, 1), (-1, 1), (-1, -1), (1, -1))
ROOK_DIRS: tuple[Vector, ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))
QUEEN_DIRS: tuple[Vector, ...] = ROOK_DIRS + BISHOP_DIRS

_TEMPLATES: dict[PieceType, tuple[Vector, ...]] = {
    PieceType.KNIGHT: KNIGHT_OFFSETS,
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
    PieceType.KING: KING_OFFSETS,
}

_SLIDERS = frozenset({PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN})

# Pieces whose first move matters (castling rights, pawn double step).
FIRST_MOVE_TYPES = frozenset({PieceType.PAWN, PieceType.ROOK, PieceType.KING})

# (king file, rook file) after castling
CASTLE_FILES: dict[CastleSide, tuple[int, int]] = {
    CastleSide.KING_SIDE: (6, 5),
    CastleSide.QUEEN_SIDE: (2, 3),
}

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}


@dataclass(eq=False, slots=True)
class Piece:
    """A single chess piece owned by one player.

    Pieces are compared by identity: two white knights are never equal.
    ``current_square is None`` means the piece has been captured (or, for a
    pawn, promoted away).
    """

    owner: Color
    piece_type: PieceType
    current_square: Square | None = None
    has_moved: bool = False

    # King and Rook: own destination square for each castling side.
    king_side_castle_square: Square | None = None
    queen_side_castle_square: Square | None = None
    # King only.
    pending_castle_choice: CastleSide | None = None
    escape_squares: frozenset[Square] | None = field(default=None, repr=False)

    # Pawn only.
    promotion_rank: int | None = None
    en_passant_target_square: Square | None = None
    en_passant_active: bool = False

    # ── Movement geometry ────────────────────────────────────────────────

    @property
    def move_templates(self) -> tuple[Vector, ...]:
        """Plain-advance vectors."""
        if self.piece_type == PieceType.PAWN:
            return ((self.owner.forward, 0),)
        return _TEMPLATES[self.piece_type]

    @property
    def capture_templates(self) -> tuple[Vector, ...]:
        """Vectors used when the destination holds an enemy (or en passant)."""
        if self.piece_type == PieceType.PAWN:
            forward = self.owner.forward
            return ((forward, -1), (forward, 1))
        return _TEMPLATES[self.piece_type]

    @property
    def slides(self) -> bool:
        return self.piece_type in _SLIDERS

    @property
    def is_captured(self) -> bool:
        return self.current_square is None

    def castle_square(self, side: CastleSide) -> Square | None:
        if side == CastleSide.KING_SIDE:
            return self.king_side_castle_square
        return self.queen_side_castle_square

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def letter(self) -> str:
        """Uppercase for white, lowercase for black (FEN convention)."""
        letter = _LETTERS[self.piece_type]
        return letter if self.owner == Color.WHITE else letter.lower()

    def __str__(self) -> str:
        return self.letter


def make_piece(
    owner: Color,
    piece_type: PieceType,
    square: Square | None = None,
    *,
    has_moved: bool = False,
) -> Piece:
    """Create a piece with its per-variant data precomputed."""
    piece = Piece(owner, piece_type, square, has_moved)
    home = owner.home_rank

    if piece_type in (PieceType.KING, PieceType.ROOK):
        column = 0 if piece_type == PieceType.KING else 1
        piece.king_side_castle_square = Square(home, CASTLE_FILES[CastleSide.KING_SIDE][column])
        piece.queen_side_castle_square = Square(home, CASTLE_FILES[CastleSide.QUEEN_SIDE][column])

    elif piece_type == PieceType.PAWN:
        piece.promotion_rank = 6 if owner == Color.WHITE else 1
        if square is not None:
            piece.en_passant_target_square = Square(square.rank + owner.forward, square.file)

    return piece
