"""Player, owner of six piece collections."""

from __future__ import annotations

from collections.abc import Iterator

from chessmate.core.enums import Color, PieceType
from chessmate.core.piece import Piece, make_piece
from chessmate.core.types import Square

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Player:
    """One side of the game and every piece it has ever owned.

    Collections never shrink: a captured piece stays in its collection with
    ``current_square = None`` so promotion can bring it back.
    """

    __slots__ = ("color", "name", "is_computer", "available_destinations", "_collections")

    def __init__(self, color: Color, name: str = "", *, is_computer: bool = False) -> None:
        self.color = color
        self.name = name or f"Player ({color})"
        self.is_computer = is_computer
        # Reachable squares, kept fresh by the executor for computer players.
        self.available_destinations: frozenset[Square] = frozenset()
        self._collections: dict[PieceType, list[Piece]] = {pt: [] for pt in PieceType}

    @classmethod
    def standard(cls, color: Color, name: str = "", *, is_computer: bool = False) -> Player:
        """A player holding the sixteen pieces of the standard starting layout."""
        player = cls(color, name, is_computer=is_computer)
        home = color.home_rank
        for file, piece_type in enumerate(BACK_RANK):
            player.add(make_piece(color, piece_type, Square(home, file)))
        for file in range(8):
            player.add(make_piece(color, PieceType.PAWN, Square(home + color.forward, file)))
        return player

    # ── Collections ──────────────────────────────────────────────────────

    def add(self, piece: Piece) -> Piece:
        if piece.owner != self.color:
            raise ValueError(f"{piece.owner.name} piece cannot join {self.color.name}")
        self._collections[piece.piece_type].append(piece)
        return piece

    def collection(self, piece_type: PieceType) -> list[Piece]:
        return self._collections[piece_type]

    def pieces(self) -> Iterator[Piece]:
        """Every piece, captured ones included, king first."""
        for piece_type in sorted(PieceType, reverse=True):
            yield from self._collections[piece_type]

    def active_pieces(self) -> list[Piece]:
        return [p for p in self.pieces() if p.current_square is not None]

    def occupied_squares(self) -> set[Square]:
        return {p.current_square for p in self.pieces() if p.current_square is not None}

    def count(self, piece_type: PieceType) -> int:
        return len(self._collections[piece_type])

    @property
    def king(self) -> Piece:
        kings = self._collections[PieceType.KING]
        if not kings:
            raise ValueError(f"{self.color.name} has no king")
        return kings[0]

    def __repr__(self) -> str:
        return f"Player({self.color.name}, {self.name!r}, computer={self.is_computer})"
