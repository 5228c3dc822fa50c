"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass

from chessmate.core.enums import CheckmateRule


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable rule switches for :class:`~chessmate.core.engine.Engine`.

    Args:
        checkmate_rule: ``KING_MOBILITY`` judges mate by the king's escape
            squares only; ``LEGAL_MOVES`` also lets other pieces block or
            capture the checker.
        forbid_self_check: Reject moves that leave the mover's king attacked.
            When off, a king may be left en prise and captured.
        track_escape_cache: Refresh ``king.escape_squares`` after every move.
    """

    checkmate_rule: CheckmateRule = CheckmateRule.KING_MOBILITY
    forbid_self_check: bool = True
    track_escape_cache: bool = True

    # Presets
    @classmethod
    def classic(cls) -> EngineConfig:
        return cls()

    @classmethod
    def strict(cls) -> EngineConfig:
        """Full legal-move checkmate."""
        return cls(checkmate_rule=CheckmateRule.LEGAL_MOVES)

    @classmethod
    def permissive(cls) -> EngineConfig:
        """Kings may walk into check and be captured."""
        return cls(forbid_self_check=False)
