"""Move resolution: can a given piece reach a given square right now?"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessmate.core.en_passant import EnPassantTracker
from chessmate.core.enums import PieceType
from chessmate.core.tracer import StopPredicate, trace
from chessmate.core.types import Square, Vector, is_valid_square

if TYPE_CHECKING:
    from chessmate.core.piece import Piece
    from chessmate.core.player import Player
    from chessmate.core.position import Position

# A pawn's double step covers at most two ranks.
_PAWN_MAX_ADVANCE = 2


class MoveResolver:
    """Pure read of the position; never mutates it.

    ``attack=True`` switches to square-attack mode used by check detection:
    pawns use only their diagonal vectors and a square held by the piece's
    own side still counts as reached (it is defended).

    ``vacant`` names one square to treat as empty, so a checked king does
    not shield the squares behind it from a slider.
    """

    __slots__ = ("_pos", "_board", "_en_passant")

    def __init__(self, position: Position, en_passant: EnPassantTracker | None = None) -> None:
        self._pos = position
        self._board = position.board
        self._en_passant = en_passant if en_passant is not None else EnPassantTracker(position)

    # -- Public API ---------------------------------------------------------

    def can_reach(
        self,
        piece: Piece,
        destination: Square,
        *,
        attack: bool = False,
        vacant: Square | None = None,
    ) -> bool:
        origin = piece.current_square
        if origin is None or not is_valid_square(destination):
            return False
        destination = Square(*destination)
        if destination == origin:
            return False

        occupant = self._occupant(destination, vacant)
        if occupant is not None and occupant.owner == piece.owner and not attack:
            return False

        templates = self._templates(piece, destination, occupant, attack)
        slides = self._slides(piece, templates, vacant)
        blocked = self._blocker(vacant)
        for vector in templates:
            path = list(trace(origin, vector, slides, destination, blocked))
            if self._valid_path(piece, path, destination, vacant):
                return True
        return False

    def reachable_squares(
        self,
        piece: Piece,
        *,
        attack: bool = False,
        vacant: Square | None = None,
    ) -> set[Square]:
        """Every square *piece* can reach under the same rules as :meth:`can_reach`."""
        origin = piece.current_square
        if origin is None:
            return set()

        vectors = dict.fromkeys(piece.capture_templates)
        if not attack:
            vectors.update(dict.fromkeys(piece.move_templates))
        slides = piece.slides or (piece.piece_type == PieceType.PAWN and not piece.has_moved)

        blocked = self._blocker(vacant)
        candidates: set[Square] = set()
        for vector in vectors:
            candidates.update(trace(origin, vector, slides, stop=blocked))
        return {
            sq
            for sq in candidates
            if self.can_reach(piece, sq, attack=attack, vacant=vacant)
        }

    def destinations(self, player: Player) -> set[Square]:
        """Union of squares any of *player*'s pieces can move to."""
        reachable: set[Square] = set()
        for piece in player.active_pieces():
            reachable |= self.reachable_squares(piece)
        return reachable

    # -- Internals ----------------------------------------------------------

    def _occupant(self, sq: Square, vacant: Square | None) -> Piece | None:
        if sq == vacant:
            return None
        return self._board[sq]

    def _blocker(self, vacant: Square | None) -> StopPredicate:
        """Stop a trace on the first occupied square."""
        return lambda sq: self._occupant(sq, vacant) is not None

    def _templates(
        self,
        piece: Piece,
        destination: Square,
        occupant: Piece | None,
        attack: bool,
    ) -> tuple[Vector, ...]:
        if attack or occupant is not None:
            return piece.capture_templates
        if self._en_passant.is_en_passant_capture(piece, destination):
            return piece.capture_templates
        return piece.move_templates

    def _slides(
        self,
        piece: Piece,
        templates: tuple[Vector, ...],
        vacant: Square | None,
    ) -> bool:
        if piece.piece_type != PieceType.PAWN:
            return piece.slides
        # Only an unmoved, unblocked pawn advancing straight may go two squares.
        if templates != piece.move_templates or piece.has_moved:
            return False
        return not self._pawn_blocked(piece, vacant)

    def _pawn_blocked(self, pawn: Piece, vacant: Square | None) -> bool:
        origin = pawn.current_square
        assert origin is not None
        ahead = origin.offset(pawn.move_templates[0])
        return is_valid_square(ahead) and self._occupant(ahead, vacant) is not None

    def _valid_path(
        self,
        piece: Piece,
        path: list[Square],
        destination: Square,
        vacant: Square | None,
    ) -> bool:
        if not path or path[-1] != destination:
            return False
        if any(self._occupant(sq, vacant) is not None for sq in path[:-1]):
            return False
        if piece.piece_type == PieceType.PAWN:
            origin = piece.current_square
            assert origin is not None
            return abs(destination.rank - origin.rank) <= _PAWN_MAX_ADVANCE
        return True
