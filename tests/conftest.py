"""Shared pytest fixtures used across the test suite."""

import pytest

from chessmate.core.engine import Engine
from chessmate.core.position import Position
from chessmate.core.setup import GameSetup
from chessmate.core.types import Square


@pytest.fixture
def standard() -> Position:
    """Standard starting position, both sides human."""
    return GameSetup.standard()


@pytest.fixture
def empty() -> Position:
    """Two players, no pieces."""
    return GameSetup.empty()


@pytest.fixture
def engine(standard: Position) -> Engine:
    return Engine(standard)


@pytest.fixture
def lift():
    """Take the piece on a square off the board, as if it had been captured."""

    def _lift(position: Position, square: Square):
        piece = position.board[square]
        position.board[square] = None
        piece.current_square = None
        return piece

    return _lift
