"""Game setup — enforces the two-players-on-one-board precondition.

Quick start::

    from chessmate.core.setup import GameSetup

    position = GameSetup.standard(black_is_computer=True)
"""

from __future__ import annotations

import logging

from chessmate.core.board import Board
from chessmate.core.enums import Color
from chessmate.core.errors import ConfigurationLimit
from chessmate.core.player import Player
from chessmate.core.position import Position

_LOGGER = logging.getLogger(__name__)

PLAYER_LIMIT = 2
BOARD_LIMIT = 1


class GameSetup:
    """Collects players and a board, then builds a :class:`Position`.

    Limits are checked per setup instance, never through shared class state.
    """

    __slots__ = ("_players", "_boards")

    def __init__(self) -> None:
        self._players: dict[Color, Player] = {}
        self._boards: list[Board] = []

    def add_player(self, player: Player) -> GameSetup:
        if len(self._players) >= PLAYER_LIMIT:
            raise ConfigurationLimit(f"Chess only allows up to {PLAYER_LIMIT} players.")
        if player.color in self._players:
            raise ConfigurationLimit(f"{player.color.name} already has a player.")
        self._players[player.color] = player
        return self

    def attach_board(self, board: Board) -> GameSetup:
        if len(self._boards) >= BOARD_LIMIT:
            raise ConfigurationLimit(f"Chess only allows {BOARD_LIMIT} board.")
        self._boards.append(board)
        return self

    def build(self) -> Position:
        """Place every living piece on the board and return the position."""
        if len(self._players) != PLAYER_LIMIT:
            raise ConfigurationLimit(f"A game needs exactly {PLAYER_LIMIT} players.")
        board = self._boards[0] if self._boards else Board()
        position = Position(board, self._players[Color.WHITE], self._players[Color.BLACK])
        for piece in position.pieces():
            if piece.current_square is not None:
                board.place(piece, piece.current_square)
        position.verify()
        _LOGGER.debug("Built position with %s", ", ".join(repr(p) for p in position.players))
        return position

    # ── Presets ──────────────────────────────────────────────────────────

    @classmethod
    def standard(
        cls,
        *,
        white_is_computer: bool = False,
        black_is_computer: bool = False,
    ) -> Position:
        """Standard starting layout."""
        return (
            cls()
            .add_player(Player.standard(Color.WHITE, is_computer=white_is_computer))
            .add_player(Player.standard(Color.BLACK, is_computer=black_is_computer))
            .attach_board(Board())
            .build()
        )

    @classmethod
    def empty(
        cls,
        *,
        white_is_computer: bool = False,
        black_is_computer: bool = False,
    ) -> Position:
        """Two players without pieces; populate with :meth:`Position.place`."""
        return (
            cls()
            .add_player(Player(Color.WHITE, is_computer=white_is_computer))
            .add_player(Player(Color.BLACK, is_computer=black_is_computer))
            .build()
        )
