"""One board shared by exactly two players."""

from __future__ import annotations

from collections.abc import Iterator

from chessmate.core.board import Board
from chessmate.core.enums import Color, PieceType
from chessmate.core.piece import FIRST_MOVE_TYPES, Piece, make_piece
from chessmate.core.player import Player
from chessmate.core.types import Square


class Position:
    """Board plus both players and the number of half-moves played.

    Build instances through :class:`~chessmate.core.setup.GameSetup`, which
    guarantees the two-player / one-board precondition.
    """

    __slots__ = ("board", "_players", "ply")

    def __init__(self, board: Board, white: Player, black: Player, ply: int = 0) -> None:
        self.board = board
        self._players: dict[Color, Player] = {Color.WHITE: white, Color.BLACK: black}
        self.ply = ply

    # ── Players ──────────────────────────────────────────────────────────

    def player(self, color: Color) -> Player:
        return self._players[color]

    def opponent(self, player: Player) -> Player:
        return self._players[player.color.opposite]

    @property
    def players(self) -> tuple[Player, Player]:
        return (self._players[Color.WHITE], self._players[Color.BLACK])

    @property
    def side_to_move(self) -> Color:
        return Color.WHITE if self.ply % 2 == 0 else Color.BLACK

    def pieces(self) -> Iterator[Piece]:
        for player in self.players:
            yield from player.pieces()

    # ── Placement ────────────────────────────────────────────────────────

    def place(
        self,
        color: Color,
        piece_type: PieceType,
        square: Square,
        *,
        has_moved: bool | None = None,
    ) -> Piece:
        """Add a new piece to *color*'s army on *square*.

        When *has_moved* is omitted, pawns count as unmoved only on their
        starting rank and kings/rooks only on their home rank.
        """
        if self.board[square] is not None:
            raise ValueError(f"Square already occupied: {square!r}")
        if has_moved is None:
            has_moved = _infer_has_moved(color, piece_type, square)
        piece = make_piece(color, piece_type, square, has_moved=has_moved)
        self._players[color].add(piece)
        self.board.place(piece, square)
        return piece

    def verify(self) -> None:
        """Assert grid/piece agreement (raises ``InvariantViolation``)."""
        self.board.verify(self.pieces())

    def __repr__(self) -> str:
        return f"Position(ply={self.ply})\n{self.board!r}"


def _infer_has_moved(color: Color, piece_type: PieceType, square: Square) -> bool:
    if piece_type not in FIRST_MOVE_TYPES:
        return False
    if piece_type == PieceType.PAWN:
        return square.rank != color.home_rank + color.forward
    return square.rank != color.home_rank
