"""Move execution: the only writer of the board."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessmate.core.check import CheckDetector
from chessmate.core.en_passant import EnPassantTracker
from chessmate.core.enums import CastleSide, Color
from chessmate.core.piece import FIRST_MOVE_TYPES
from chessmate.core.resolver import MoveResolver
from chessmate.core.types import Square

if TYPE_CHECKING:
    from chessmate.core.piece import Piece
    from chessmate.core.player import Player
    from chessmate.core.position import Position

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """What an executed move did."""

    color: Color
    piece: Piece
    origin: Square
    destination: Square
    captured: Piece | None = None
    capture_square: Square | None = None
    en_passant: bool = False
    promoted: Piece | None = None
    castle: CastleSide | None = None


class MoveExecutor:
    """Applies already-validated moves.

    No legality checks happen here: callers must validate first.
    """

    __slots__ = ("_pos", "_board", "_resolver", "_detector", "_en_passant", "_track_escapes")

    def __init__(
        self,
        position: Position,
        resolver: MoveResolver,
        detector: CheckDetector,
        en_passant: EnPassantTracker,
        *,
        track_escapes: bool = True,
    ) -> None:
        self._pos = position
        self._board = position.board
        self._resolver = resolver
        self._detector = detector
        self._en_passant = en_passant
        self._track_escapes = track_escapes

    # ── Moves ────────────────────────────────────────────────────────────

    def execute(
        self,
        player: Player,
        destination: Square,
        piece: Piece,
        promoted_piece: Piece | None = None,
    ) -> MoveRecord:
        origin = piece.current_square
        if origin is None:
            raise ValueError("Cannot move a captured piece")
        destination = Square(*destination)

        # 1. Remove whatever is taken (en passant victims sit beside the mover)
        victim = self._en_passant.victim(piece, destination)
        en_passant = victim is not None
        if victim is None:
            victim = self._board[destination]
        capture_square = victim.current_square if victim is not None else None
        if victim is not None:
            assert capture_square is not None
            self._board[capture_square] = None
            victim.current_square = None

        # 2. Relocate (a promoted pawn leaves the board as its successor lands)
        placed = piece if promoted_piece is None else promoted_piece
        self._board[origin] = None
        if promoted_piece is not None:
            piece.current_square = None
        self._board.place(placed, destination)

        # 3. Movement flags
        self._mark_moved(placed)

        record = MoveRecord(
            color=player.color,
            piece=piece,
            origin=origin,
            destination=destination,
            captured=victim,
            capture_square=capture_square,
            en_passant=en_passant,
            promoted=promoted_piece,
        )
        self._finish_ply(player, piece, origin)
        _LOGGER.debug(
            "%s %s %s-%s capture=%s promoted=%s",
            player.color,
            piece,
            origin.name,
            destination.name,
            capture_square.name if capture_square is not None else None,
            promoted_piece,
        )
        return record

    def castle(self, player: Player, rook: Piece) -> MoveRecord:
        """Move king and *rook* to the squares for ``king.pending_castle_choice``."""
        king = player.king
        side = king.pending_castle_choice
        if side is None:
            raise ValueError("No castle side chosen")
        king_origin = king.current_square
        rook_origin = rook.current_square
        king_to = king.castle_square(side)
        rook_to = rook.castle_square(side)
        if king_origin is None or rook_origin is None or king_to is None or rook_to is None:
            raise ValueError("Castling pieces must be on the board")

        self._board[king_origin] = None
        self._board[rook_origin] = None
        self._board.place(king, king_to)
        self._board.place(rook, rook_to)
        self._mark_moved(king)
        self._mark_moved(rook)
        king.pending_castle_choice = None

        self._finish_ply(player, king, king_origin)
        _LOGGER.debug("%s castles %s", player.color, side.value)
        return MoveRecord(
            color=player.color,
            piece=king,
            origin=king_origin,
            destination=king_to,
            castle=side,
        )

    # ── Trial moves ──────────────────────────────────────────────────────

    @contextmanager
    def trial(self, piece: Piece, destination: Square) -> Iterator[None]:
        """Temporarily play *piece* to *destination*; everything is restored on exit.

        Flags, caches and the ply counter are left untouched.
        """
        origin = piece.current_square
        if origin is None:
            raise ValueError("Cannot move a captured piece")
        destination = Square(*destination)
        board = self._board

        victim = self._en_passant.victim(piece, destination) or board[destination]
        victim_square = victim.current_square if victim is not None else None

        board[origin] = None
        if victim is not None:
            assert victim_square is not None
            board[victim_square] = None
            victim.current_square = None
        board.place(piece, destination)
        try:
            yield
        finally:
            board[destination] = None
            board.place(piece, origin)
            if victim is not None:
                assert victim_square is not None
                board.place(victim, victim_square)

    # ── Internals ────────────────────────────────────────────────────────

    @staticmethod
    def _mark_moved(piece: Piece) -> None:
        if piece.piece_type in FIRST_MOVE_TYPES:
            piece.has_moved = True

    def _finish_ply(self, player: Player, moved: Piece, origin: Square) -> None:
        self._en_passant.refresh(moved, origin)
        self._pos.ply += 1

        # Cache invalidation is explicit: nothing below updates on its own.
        if self._track_escapes and player.king.current_square is not None:
            player.king.escape_squares = frozenset(self._detector.escape_squares(player))
        opponent = self._pos.opponent(player)
        if opponent.is_computer:
            opponent.available_destinations = frozenset(self._resolver.destinations(opponent))
