"""Tests for castling gates and execution."""

import pytest

from chessmate.core.castling import CastlingValidator
from chessmate.core.check import CheckDetector
from chessmate.core.engine import Engine
from chessmate.core.enums import CastleSide, Color, PieceType
from chessmate.core.types import (
    A1, A8, B1, B8, C1, D1, D8, E1, E2, E8, F1, F8, G1, G8, H1, H8,
)


def _king_and_rooks(position, color: Color = Color.WHITE) -> None:
    king_sq, a_rook, h_rook = (E1, A1, H1) if color == Color.WHITE else (E8, A8, H8)
    position.place(color, PieceType.KING, king_sq)
    position.place(color, PieceType.ROOK, a_rook)
    position.place(color, PieceType.ROOK, h_rook)
    other = color.opposite
    position.place(other, PieceType.KING, E8 if other == Color.BLACK else E1)


class TestCastlingExecution:
    def test_white_king_side(self, empty) -> None:
        _king_and_rooks(empty)
        white = empty.player(Color.WHITE)
        rook = empty.board[H1]
        assert Engine(empty).attempt_castle(white, CastleSide.KING_SIDE)
        assert empty.board[G1] is white.king
        assert empty.board[F1] is rook
        assert empty.board[E1] is None
        assert empty.board[H1] is None
        assert white.king.has_moved and rook.has_moved
        assert white.king.pending_castle_choice is None
        assert empty.ply == 1

    def test_white_queen_side(self, empty) -> None:
        _king_and_rooks(empty)
        white = empty.player(Color.WHITE)
        rook = empty.board[A1]
        assert Engine(empty).attempt_castle(white, CastleSide.QUEEN_SIDE)
        assert empty.board[C1] is white.king
        assert empty.board[D1] is rook

    def test_black_king_side(self, empty) -> None:
        _king_and_rooks(empty, Color.BLACK)
        black = empty.player(Color.BLACK)
        assert Engine(empty).attempt_castle(black, CastleSide.KING_SIDE)
        assert empty.board[G8] is black.king
        assert empty.board[F8].piece_type == PieceType.ROOK

    def test_standard_after_clearing(self, standard, lift) -> None:
        lift(standard, F1)
        lift(standard, G1)
        white = standard.player(Color.WHITE)
        assert Engine(standard).attempt_castle(white, CastleSide.KING_SIDE)
        assert standard.board[G1] is white.king


class TestCastlingGates:
    def test_standard_blocked(self, engine, standard) -> None:
        white = standard.player(Color.WHITE)
        assert not engine.attempt_castle(white, CastleSide.KING_SIDE)
        assert not engine.attempt_castle(white, CastleSide.QUEEN_SIDE)
        assert white.king.pending_castle_choice is None

    def test_king_moved(self, empty) -> None:
        _king_and_rooks(empty)
        white = empty.player(Color.WHITE)
        white.king.has_moved = True
        assert not Engine(empty).attempt_castle(white, CastleSide.KING_SIDE)

    def test_king_moved_there_and_back(self, empty) -> None:
        _king_and_rooks(empty)
        white = empty.player(Color.WHITE)
        black = empty.player(Color.BLACK)
        engine = Engine(empty)
        assert engine.attempt_move(white, white.king, E2).applied
        assert engine.attempt_move(black, black.king, D8).applied
        assert engine.attempt_move(white, white.king, E1).applied
        assert engine.attempt_move(black, black.king, E8).applied
        assert not engine.attempt_castle(white, CastleSide.KING_SIDE)

    def test_rook_moved(self, empty) -> None:
        _king_and_rooks(empty)
        empty.board[H1].has_moved = True
        white = empty.player(Color.WHITE)
        engine = Engine(empty)
        assert not engine.attempt_castle(white, CastleSide.KING_SIDE)
        assert engine.attempt_castle(white, CastleSide.QUEEN_SIDE)

    def test_rook_captured(self, empty, lift) -> None:
        _king_and_rooks(empty)
        lift(empty, H1)
        assert not Engine(empty).attempt_castle(empty.player(Color.WHITE), CastleSide.KING_SIDE)

    @pytest.mark.parametrize("square", [F1, G1])
    def test_path_occupied(self, empty, square) -> None:
        _king_and_rooks(empty)
        empty.place(Color.WHITE, PieceType.KNIGHT, square)
        assert not Engine(empty).attempt_castle(empty.player(Color.WHITE), CastleSide.KING_SIDE)

    def test_queen_side_b_file_occupied(self, empty) -> None:
        _king_and_rooks(empty)
        empty.place(Color.WHITE, PieceType.KNIGHT, B1)
        assert not Engine(empty).attempt_castle(empty.player(Color.WHITE), CastleSide.QUEEN_SIDE)

    def test_in_check(self, empty) -> None:
        empty.place(Color.WHITE, PieceType.KING, E1)
        empty.place(Color.WHITE, PieceType.ROOK, H1)
        empty.place(Color.BLACK, PieceType.KING, A8)
        empty.place(Color.BLACK, PieceType.ROOK, E8)
        assert not Engine(empty).attempt_castle(empty.player(Color.WHITE), CastleSide.KING_SIDE)

    def test_crossing_attacked_square(self, empty) -> None:
        empty.place(Color.WHITE, PieceType.KING, E1)
        empty.place(Color.WHITE, PieceType.ROOK, H1)
        empty.place(Color.BLACK, PieceType.KING, A8)
        empty.place(Color.BLACK, PieceType.ROOK, F8)
        assert not Engine(empty).attempt_castle(empty.player(Color.WHITE), CastleSide.KING_SIDE)

    def test_landing_on_attacked_square(self, empty) -> None:
        empty.place(Color.WHITE, PieceType.KING, E1)
        empty.place(Color.WHITE, PieceType.ROOK, H1)
        empty.place(Color.BLACK, PieceType.KING, A8)
        empty.place(Color.BLACK, PieceType.ROOK, G8)
        assert not Engine(empty).attempt_castle(empty.player(Color.WHITE), CastleSide.KING_SIDE)

    def test_attacked_rook_path_is_allowed(self, empty) -> None:
        # b1 is crossed by the rook only, never by the king.
        empty.place(Color.WHITE, PieceType.KING, E1)
        empty.place(Color.WHITE, PieceType.ROOK, A1)
        empty.place(Color.BLACK, PieceType.KING, H8)
        empty.place(Color.BLACK, PieceType.ROOK, B8)
        white = empty.player(Color.WHITE)
        assert Engine(empty).attempt_castle(white, CastleSide.QUEEN_SIDE)
        assert empty.board[C1] is white.king

    def test_failed_attempt_changes_nothing(self, empty) -> None:
        empty.place(Color.WHITE, PieceType.KING, E1)
        empty.place(Color.WHITE, PieceType.ROOK, H1)
        empty.place(Color.BLACK, PieceType.KING, A8)
        empty.place(Color.BLACK, PieceType.ROOK, G8)
        before = repr(empty.board)
        white = empty.player(Color.WHITE)
        assert not Engine(empty).attempt_castle(white, CastleSide.KING_SIDE)
        assert repr(empty.board) == before
        assert not white.king.has_moved
        assert empty.ply == 0


class TestRookFor:
    def test_picks_rook_on_correct_side(self, empty) -> None:
        _king_and_rooks(empty)
        white = empty.player(Color.WHITE)
        validator = CastlingValidator(empty, CheckDetector(empty))
        assert validator.rook_for(white, CastleSide.KING_SIDE) is empty.board[H1]
        assert validator.rook_for(white, CastleSide.QUEEN_SIDE) is empty.board[A1]
