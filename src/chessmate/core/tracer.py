"""Path tracing along a single movement vector.

Geometry only: the tracer knows nothing about occupants. Callers decide
whether a traced path is usable.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from chessmate.core.types import Square, Vector, is_valid_square

StopPredicate = Callable[[Square], bool]


def trace(
    origin: Square | None,
    vector: Vector,
    slides: bool,
    destination: Square | None = None,
    stop: StopPredicate | None = None,
) -> Iterator[Square]:
    """Yield squares from *origin* along *vector*, nearest first.

    The walk ends after the first step for non-sliding pieces, on reaching
    *destination*, when *stop* returns true for the square just yielded, or
    at the board edge (off-board squares are never yielded). A captured
    piece (``origin is None``) traces nothing.
    """
    if origin is None:
        return
    dr, df = vector
    rank, file = origin
    while True:
        rank += dr
        file += df
        if not is_valid_square((rank, file)):
            return
        sq = Square(rank, file)
        yield sq
        if not slides or sq == destination or (stop is not None and stop(sq)):
            return
