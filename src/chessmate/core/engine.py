"""Engine — the entry points a turn loop or notation layer calls.

Quick start::

    from chessmate.core import Color, E2, E4, Engine, GameSetup

    position = GameSetup.standard()
    engine = Engine(position)
    white = position.player(Color.WHITE)
    pawn = position.board[E2]
    outcome = engine.attempt_move(white, pawn, E4)
    assert outcome.applied
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessmate.core import promotion
from chessmate.core.castling import CastlingValidator
from chessmate.core.check import CheckDetector
from chessmate.core.config import EngineConfig
from chessmate.core.en_passant import EnPassantTracker
from chessmate.core.enums import (
    CastleSide,
    CheckmateRule,
    GameStatus,
    PieceType,
    Rejection,
    SelectionStatus,
)
from chessmate.core.executor import MoveExecutor, MoveRecord
from chessmate.core.resolver import MoveResolver
from chessmate.core.types import Square, square_name

if TYPE_CHECKING:
    from chessmate.core.piece import Piece
    from chessmate.core.player import Player
    from chessmate.core.position import Position

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of :meth:`Engine.attempt_move`.

    ``applied=False`` means nothing changed; ``rejection`` says why.
    """

    applied: bool
    capture: Square | None = None
    en_passant: bool = False
    promoted: PieceType | None = None
    rejection: Rejection | None = None
    record: MoveRecord | None = None

    @classmethod
    def rejected(cls, reason: Rejection) -> MoveOutcome:
        return cls(applied=False, rejection=reason)


@dataclass(frozen=True, slots=True)
class Selection:
    """Which of a player's pieces could make a described move."""

    status: SelectionStatus
    pieces: tuple[Piece, ...] = ()

    @property
    def piece(self) -> Piece | None:
        return self.pieces[0] if self.status == SelectionStatus.FOUND else None


class Engine:
    """Validates candidate moves and applies the legal ones.

    Single-threaded: one validate-then-execute sequence runs to completion
    before the next candidate is looked at.
    """

    __slots__ = (
        "_pos",
        "_config",
        "_en_passant",
        "_resolver",
        "_detector",
        "_castling",
        "_executor",
    )

    def __init__(self, position: Position, config: EngineConfig | None = None) -> None:
        self._pos = position
        self._config = config if config is not None else EngineConfig()
        self._en_passant = EnPassantTracker(position)
        self._resolver = MoveResolver(position, self._en_passant)
        self._detector = CheckDetector(position, self._resolver)
        self._castling = CastlingValidator(position, self._detector)
        self._executor = MoveExecutor(
            position,
            self._resolver,
            self._detector,
            self._en_passant,
            track_escapes=self._config.track_escape_cache,
        )

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._pos

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def detector(self) -> CheckDetector:
        return self._detector

    @property
    def en_passant(self) -> EnPassantTracker:
        return self._en_passant

    # ── Moves ────────────────────────────────────────────────────────────

    def can_reach(self, piece: Piece, destination: Square) -> bool:
        return self._resolver.can_reach(piece, destination)

    def attempt_move(
        self,
        player: Player,
        piece: Piece,
        destination: Square,
        promotion_choice: PieceType | None = None,
    ) -> MoveOutcome:
        """Validate and, if legal, apply a single-piece move."""
        rejection = self._validate(player, piece, destination, promotion_choice)
        if rejection is not None:
            _LOGGER.debug(
                "%s %s to %s rejected: %s",
                player.color,
                piece.letter,
                square_name(destination),
                rejection.name,
            )
            return MoveOutcome.rejected(rejection)

        promoted_piece = None
        if promotion_choice is not None:
            promoted_piece = promotion.resolve(player, promotion_choice)

        record = self._executor.execute(player, destination, piece, promoted_piece)
        return MoveOutcome(
            applied=True,
            capture=record.capture_square,
            en_passant=record.en_passant,
            promoted=promotion_choice,
            record=record,
        )

    def attempt_castle(self, player: Player, side: CastleSide) -> bool:
        king = player.king
        king.pending_castle_choice = side
        rook = self._castling.rook_for(player, side)
        if rook is None or not self._castling.can_castle(player, side):
            king.pending_castle_choice = None
            _LOGGER.debug(
                "%s castling %s rejected: %s",
                player.color,
                side.value,
                Rejection.CASTLING_BLOCKED.name,
            )
            return False
        self._executor.castle(player, rook)
        return True

    def is_legal(self, player: Player, piece: Piece, destination: Square) -> bool:
        """Reachable and does not leave *player*'s king attacked."""
        if piece.owner != player.color or not self._resolver.can_reach(piece, destination):
            return False
        return not self._exposes_king(player, piece, destination)

    def legal_destinations(self, piece: Piece) -> set[Square]:
        player = self._pos.player(piece.owner)
        return {
            sq
            for sq in self._resolver.reachable_squares(piece)
            if not self._exposes_king(player, piece, sq)
        }

    def has_legal_move(self, player: Player) -> bool:
        return any(self.legal_destinations(piece) for piece in player.active_pieces())

    # ── Status queries ───────────────────────────────────────────────────

    def in_check(self, player: Player) -> bool:
        return self._detector.in_check(player)

    def checkmate(self, player: Player) -> bool:
        if self._config.checkmate_rule == CheckmateRule.KING_MOBILITY:
            return self._detector.checkmate(player)
        if self.king_captured(player) or not self._detector.in_check(player):
            return False
        return not self.has_legal_move(player)

    def king_captured(self, player: Player) -> bool:
        return player.king.current_square is None

    def status(self, player: Player) -> GameStatus:
        if self.king_captured(player):
            _LOGGER.info("%s king captured", player.color)
            return GameStatus.KING_CAPTURED
        if self.checkmate(player):
            _LOGGER.info("%s is checkmated", player.color)
            return GameStatus.CHECKMATE
        if self.in_check(player):
            return GameStatus.CHECK
        return GameStatus.NORMAL

    def available_destinations(self, player: Player) -> set[Square]:
        return self._resolver.destinations(player)

    def select_piece(
        self,
        player: Player,
        piece_type: PieceType,
        destination: Square,
        origin_file: int | None = None,
        origin_rank: int | None = None,
    ) -> Selection:
        """Find the one piece of *piece_type* that can move to *destination*.

        Origin hints narrow the candidates the way a disambiguated move
        (``Nbd2``, ``R1a3``) would. Resolving an ambiguity is left to the caller.
        """
        candidates = []
        for piece in player.collection(piece_type):
            sq = piece.current_square
            if sq is None or not self._resolver.can_reach(piece, destination):
                continue
            if origin_file is not None and sq.file != origin_file:
                continue
            if origin_rank is not None and sq.rank != origin_rank:
                continue
            candidates.append(piece)

        if not candidates:
            return Selection(SelectionStatus.NONE)
        if len(candidates) > 1:
            return Selection(SelectionStatus.AMBIGUOUS, tuple(candidates))
        return Selection(SelectionStatus.FOUND, (candidates[0],))

    # ── Internals ────────────────────────────────────────────────────────

    def _validate(
        self,
        player: Player,
        piece: Piece,
        destination: Square,
        promotion_choice: PieceType | None,
    ) -> Rejection | None:
        if piece.current_square is None:
            return Rejection.NO_PIECE
        if piece.owner != player.color:
            return Rejection.WRONG_OWNER
        if not self._resolver.can_reach(piece, destination):
            return Rejection.UNREACHABLE

        promotable = promotion.eligible(piece)
        if promotable and promotion_choice is None:
            return Rejection.PROMOTION_REQUIRED
        if not promotable and promotion_choice is not None:
            return Rejection.PROMOTION_NOT_ALLOWED
        if promotion_choice is not None and promotion_choice not in promotion.PROMOTION_TYPES:
            return Rejection.INVALID_PROMOTION

        if self._config.forbid_self_check and self._exposes_king(player, piece, destination):
            return Rejection.SELF_CHECK
        return None

    def _exposes_king(self, player: Player, piece: Piece, destination: Square) -> bool:
        with self._executor.trial(piece, destination):
            return self._detector.in_check(player)
