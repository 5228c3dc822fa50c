"""Pawn promotion."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessmate.core.enums import PieceType
from chessmate.core.piece import make_piece

if TYPE_CHECKING:
    from chessmate.core.piece import Piece
    from chessmate.core.player import Player

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def eligible(pawn: Piece) -> bool:
    """Whether *pawn*'s next step lands on the far rank.

    ``promotion_rank`` is the rank just before the last one, so eligibility
    is judged before the move is made.
    """
    sq = pawn.current_square
    return pawn.piece_type == PieceType.PAWN and sq is not None and sq.rank == pawn.promotion_rank


def resolve(player: Player, chosen_type: PieceType) -> Piece:
    """Pick the piece a pawn turns into.

    A previously captured piece of *chosen_type* is reused; otherwise a new
    one is appended to the player's collection. The returned piece is not on
    the board yet; the executor places it.
    """
    if chosen_type not in PROMOTION_TYPES:
        raise ValueError(f"Cannot promote to {chosen_type.name}")
    for piece in player.collection(chosen_type):
        if piece.current_square is None:
            return piece
    return player.add(make_piece(player.color, chosen_type))
