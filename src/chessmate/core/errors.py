"""Fault types.

An illegal move is an ordinary result (see :class:`~chessmate.core.engine.MoveOutcome`);
only the conditions below are raised.
"""

from __future__ import annotations


class InvariantViolation(RuntimeError):
    """Board grid and piece ``current_square`` disagree (programming error)."""


class ConfigurationLimit(ValueError):
    """A game was set up with other than two players on one board."""
