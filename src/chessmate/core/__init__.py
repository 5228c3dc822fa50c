"""Core domain layer — chess move legality and check detection, no external dependencies.

Quick start::

    from chessmate.core import CastleSide, Color, Engine, GameSetup, E2, E4

    position = GameSetup.standard()
    engine = Engine(position)
    white = position.player(Color.WHITE)
    engine.attempt_move(white, position.board[E2], E4)
    engine.attempt_castle(white, CastleSide.KING_SIDE)  # False: f1/g1 occupied
"""

from chessmate.core.board import Board
from chessmate.core.castling import CastlingValidator
from chessmate.core.check import CheckDetector
from chessmate.core.config import EngineConfig
from chessmate.core.en_passant import EnPassantTracker
from chessmate.core.engine import Engine, MoveOutcome, Selection
from chessmate.core.enums import (
    CastleSide,
    CheckmateRule,
    Color,
    GameStatus,
    PieceType,
    Rejection,
    SelectionStatus,
)
from chessmate.core.errors import ConfigurationLimit, InvariantViolation
from chessmate.core.executor import MoveExecutor, MoveRecord
from chessmate.core.piece import Piece, make_piece
from chessmate.core.player import Player
from chessmate.core.position import Position
from chessmate.core.resolver import MoveResolver
from chessmate.core.setup import GameSetup
from chessmate.core.snapshot import PositionSnapshot
from chessmate.core.tracer import trace
from chessmate.core.types import (
    A1,
    A8,
    E1,
    E2,
    E4,
    E8,
    H1,
    H8,
    Square,
    is_valid_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "CastleSide",
    "CheckmateRule",
    "Color",
    "GameStatus",
    "PieceType",
    "Rejection",
    "SelectionStatus",
    # Types / helpers
    "Square",
    "is_valid_square",
    "parse_square",
    "square_name",
    "A1",
    "A8",
    "E1",
    "E2",
    "E4",
    "E8",
    "H1",
    "H8",
    # Errors
    "ConfigurationLimit",
    "InvariantViolation",
    # Domain objects
    "Board",
    "Piece",
    "Player",
    "Position",
    "GameSetup",
    "make_piece",
    # Components
    "CastlingValidator",
    "CheckDetector",
    "EnPassantTracker",
    "MoveExecutor",
    "MoveRecord",
    "MoveResolver",
    "trace",
    # Facade
    "Engine",
    "EngineConfig",
    "MoveOutcome",
    "PositionSnapshot",
    "Selection",
]
