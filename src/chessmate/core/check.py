"""Check and checkmate detection.

Every query is computed afresh from the current position, in this order:

1. ``square_attacked``: does any enemy piece reach the square?
2. ``in_check``: is the king's square attacked (or the king gone)?
3. ``escape_squares``: where could the king step at all?
4. ``checkmate``: in check, and every escape square is covered.

Checkmate here is decided by king mobility alone: interposing another piece
or capturing the checker is not considered. The engine offers full
legal-move checkmate through :class:`~chessmate.core.enums.CheckmateRule`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessmate.core.resolver import MoveResolver
from chessmate.core.types import Square, is_valid_square

if TYPE_CHECKING:
    from chessmate.core.piece import Piece
    from chessmate.core.player import Player
    from chessmate.core.position import Position


class CheckDetector:
    __slots__ = ("_pos", "_resolver")

    def __init__(self, position: Position, resolver: MoveResolver | None = None) -> None:
        self._pos = position
        self._resolver = resolver if resolver is not None else MoveResolver(position)

    def attackers(
        self,
        square: Square,
        defender: Player,
        vacant: Square | None = None,
    ) -> list[Piece]:
        """Enemy pieces that attack *square*."""
        resolver = self._resolver
        return [
            piece
            for piece in self._pos.opponent(defender).active_pieces()
            if resolver.can_reach(piece, square, attack=True, vacant=vacant)
        ]

    def square_attacked(
        self,
        square: Square,
        defender: Player,
        vacant: Square | None = None,
    ) -> bool:
        resolver = self._resolver
        return any(
            resolver.can_reach(piece, square, attack=True, vacant=vacant)
            for piece in self._pos.opponent(defender).active_pieces()
        )

    def in_check(self, player: Player) -> bool:
        king_sq = player.king.current_square
        if king_sq is None:
            return True  # king already captured
        return self.square_attacked(king_sq, player)

    def escape_squares(self, player: Player) -> set[Square]:
        """On-board king steps not blocked by the player's own pieces."""
        king = player.king
        origin = king.current_square
        if origin is None:
            return set()
        own = player.occupied_squares()
        escapes = set()
        for vector in king.move_templates:
            sq = origin.offset(vector)
            if is_valid_square(sq) and sq not in own:
                escapes.add(sq)
        return escapes

    def opponent_reachable_squares(self, player: Player) -> set[Square]:
        """Squares the enemy covers, with the player's king lifted off the board.

        Pawns contribute their diagonals even when empty; squares held by the
        enemy's own pieces count as covered (they are defended).
        """
        vacant = player.king.current_square
        covered: set[Square] = set()
        for piece in self._pos.opponent(player).active_pieces():
            covered |= self._resolver.reachable_squares(piece, attack=True, vacant=vacant)
        return covered

    def checkmate(self, player: Player) -> bool:
        if not self.in_check(player):
            return False
        escapes = self.escape_squares(player)
        # No candidate squares means no data to judge by, not "no escape".
        if not escapes:
            return False
        return not (escapes - self.opponent_reachable_squares(player))
