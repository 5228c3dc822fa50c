"""Castling eligibility."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessmate.core.enums import CastleSide, PieceType
from chessmate.core.types import Square

if TYPE_CHECKING:
    from chessmate.core.check import CheckDetector
    from chessmate.core.piece import Piece
    from chessmate.core.player import Player
    from chessmate.core.position import Position


class CastlingValidator:
    """Stateless gate chain; evaluated strictly before any mutation."""

    __slots__ = ("_pos", "_detector")

    def __init__(self, position: Position, detector: CheckDetector) -> None:
        self._pos = position
        self._detector = detector

    def rook_for(self, player: Player, side: CastleSide) -> Piece | None:
        """The rook on *side* of the king, outermost first."""
        king_sq = player.king.current_square
        if king_sq is None:
            return None
        candidates = []
        for rook in player.collection(PieceType.ROOK):
            sq = rook.current_square
            if sq is None or sq.rank != king_sq.rank:
                continue
            if (sq.file > king_sq.file) == (side == CastleSide.KING_SIDE):
                candidates.append(rook)
        candidates.sort(key=lambda r: abs(r.current_square.file - king_sq.file), reverse=True)
        return candidates[0] if candidates else None

    def can_castle(self, player: Player, side: CastleSide) -> bool:
        king = player.king
        rook = self.rook_for(player, side)
        return (
            rook is not None
            and self._on_board(king, rook)
            and self._unmoved(king, rook)
            and self._path_clear(king, rook)
            and self._king_safe(player, king, side)
        )

    # -- Gates --------------------------------------------------------------

    @staticmethod
    def _on_board(king: Piece, rook: Piece) -> bool:
        return king.current_square is not None and rook.current_square is not None

    @staticmethod
    def _unmoved(king: Piece, rook: Piece) -> bool:
        return not king.has_moved and not rook.has_moved

    def _path_clear(self, king: Piece, rook: Piece) -> bool:
        assert king.current_square is not None and rook.current_square is not None
        rank = king.current_square.rank
        return all(
            self._pos.board.is_empty(Square(rank, file))
            for file in between(king.current_square.file, rook.current_square.file)
        )

    def _king_safe(self, player: Player, king: Piece, side: CastleSide) -> bool:
        """King not in check, not crossing an attacked square, not landing on one."""
        origin = king.current_square
        destination = king.castle_square(side)
        if origin is None or destination is None:
            return False
        if self._detector.square_attacked(origin, player):
            return False
        step = 1 if destination.file > origin.file else -1
        for file in range(origin.file + step, destination.file, step):
            if self._detector.square_attacked(Square(origin.rank, file), player, vacant=origin):
                return False
        return not self._detector.square_attacked(destination, player, vacant=origin)


def between(start_file: int, end_file: int) -> range:
    """Files strictly between two files."""
    low, high = sorted((start_file, end_file))
    return range(low + 1, high)
