"""En-passant bookkeeping: the one-ply window after a pawn double step."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessmate.core.enums import PieceType
from chessmate.core.types import Square

if TYPE_CHECKING:
    from chessmate.core.piece import Piece
    from chessmate.core.position import Position


class EnPassantTracker:
    """Answers en-passant questions and maintains ``en_passant_active`` flags."""

    __slots__ = ("_pos",)

    def __init__(self, position: Position) -> None:
        self._pos = position

    def victim(self, mover: Piece, destination: Square) -> Piece | None:
        """The enemy pawn *mover* would take en passant on *destination*, if any.

        The victim stands beside the mover (mover's rank, destination's file),
        not on the destination itself.
        """
        origin = mover.current_square
        if mover.piece_type != PieceType.PAWN or origin is None:
            return None
        if destination[0] - origin.rank != mover.owner.forward:
            return None
        if abs(destination[1] - origin.file) != 1:
            return None

        beside = Square(origin.rank, destination[1])
        for pawn in self._pos.player(mover.owner.opposite).collection(PieceType.PAWN):
            if (
                pawn.en_passant_active
                and pawn.en_passant_target_square == destination
                and pawn.current_square == beside
            ):
                return pawn
        return None

    def is_en_passant_capture(self, mover: Piece, destination: Square) -> bool:
        return self.victim(mover, destination) is not None

    def active_pawn(self) -> Piece | None:
        for piece in self._pos.pieces():
            if piece.piece_type == PieceType.PAWN and piece.en_passant_active:
                return piece
        return None

    def refresh(self, moved: Piece | None, origin: Square | None) -> None:
        """Close the previous window and open one if *moved* just double-stepped."""
        for piece in self._pos.pieces():
            if piece.piece_type == PieceType.PAWN:
                piece.en_passant_active = False

        if moved is None or origin is None or moved.piece_type != PieceType.PAWN:
            return
        landed = moved.current_square
        if landed is None or abs(landed.rank - origin.rank) != 2:
            return
        moved.en_passant_target_square = Square((landed.rank + origin.rank) // 2, origin.file)
        moved.en_passant_active = True
