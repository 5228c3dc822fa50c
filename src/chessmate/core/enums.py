"""Core enumerations for the rules engine."""

from __future__ import annotations

from enum import Enum, IntEnum, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def forward(self) -> int:
        """Rank delta of a pawn advance for this side."""
        return 1 if self == Color.WHITE else -1

    @property
    def home_rank(self) -> int:
        return 0 if self == Color.WHITE else 7

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class CastleSide(Enum):
    KING_SIDE = "king_side"
    QUEEN_SIDE = "queen_side"


class CheckmateRule(Enum):
    """How :meth:`CheckDetector.checkmate` decides that check is inescapable."""

    KING_MOBILITY = auto()  # only the king's own escape squares count
    LEGAL_MOVES = auto()  # any piece may block or capture


class Rejection(Enum):
    """Why a candidate move was not applied."""

    NO_PIECE = auto()
    WRONG_OWNER = auto()
    UNREACHABLE = auto()
    SELF_CHECK = auto()
    PROMOTION_REQUIRED = auto()
    PROMOTION_NOT_ALLOWED = auto()
    INVALID_PROMOTION = auto()
    CASTLING_BLOCKED = auto()


class GameStatus(IntEnum):
    """Per-player situation queried after every half-move."""

    NORMAL = 0
    CHECK = 1
    CHECKMATE = 2
    KING_CAPTURED = 3


class SelectionStatus(IntEnum):
    NONE = 0
    FOUND = 1
    AMBIGUOUS = 2
