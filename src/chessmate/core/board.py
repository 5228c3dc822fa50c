"""Board - the 8x8 grid indexing which piece stands where."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from chessmate.core.errors import InvariantViolation
from chessmate.core.piece import Piece
from chessmate.core.types import Square, is_valid_square, square_name


class Board:
    """Mutable 8x8 grid of piece references.

    The board does not own pieces; players do. Only the move executor and
    game setup write to it.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        if not is_valid_square(sq):
            raise IndexError(f"Square off the board: {sq!r}")
        return self._cells[sq[0]][sq[1]]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        if not is_valid_square(sq):
            raise IndexError(f"Square off the board: {sq!r}")
        self._cells[sq[0]][sq[1]] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` for every non-empty cell."""
        for rank, row in enumerate(self._cells):
            for file, piece in enumerate(row):
                if piece is not None:
                    yield Square(rank, file), piece

    # -- Mutation -----------------------------------------------------------

    def place(self, piece: Piece, sq: Square) -> None:
        """Put *piece* on *sq* and keep its ``current_square`` in step."""
        self[sq] = piece
        piece.current_square = Square(*sq)

    def clear(self) -> None:
        self._cells = [[None] * 8 for _ in range(8)]

    # -- Invariants ---------------------------------------------------------

    def verify(self, pieces: Iterable[Piece]) -> None:
        """Raise :class:`InvariantViolation` if grid and pieces disagree."""
        seen: dict[Square, Piece] = {}
        for piece in pieces:
            sq = piece.current_square
            if sq is None:
                continue
            if sq in seen:
                raise InvariantViolation(f"Two pieces claim {square_name(sq)}")
            seen[sq] = piece
            if self[sq] is not piece:
                raise InvariantViolation(
                    f"{piece.letter} claims {square_name(sq)} but the board disagrees"
                )
        for sq, occupant in self.occupied():
            if seen.get(sq) is not occupant:
                raise InvariantViolation(
                    f"Board holds {occupant.letter} on {square_name(sq)} "
                    f"but the piece is at {occupant.current_square}"
                )

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self._cells[rank][file]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
