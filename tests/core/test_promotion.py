"""Tests for pawn promotion."""

import pytest

from chessmate.core import promotion
from chessmate.core.engine import Engine
from chessmate.core.enums import Color, PieceType, Rejection
from chessmate.core.player import Player
from chessmate.core.types import A8, B1, B2, B7, B8, C7, C8, D1, E1, E2, E3, F1, H5


def _setup(position):
    position.place(Color.WHITE, PieceType.KING, E1)
    position.place(Color.BLACK, PieceType.KING, H5)
    return position.player(Color.WHITE)


class TestEligible:
    def test_white_on_seventh(self, empty) -> None:
        assert promotion.eligible(empty.place(Color.WHITE, PieceType.PAWN, B7))

    def test_white_at_start(self, empty) -> None:
        assert not promotion.eligible(empty.place(Color.WHITE, PieceType.PAWN, E2))

    def test_black_on_second(self, empty) -> None:
        assert promotion.eligible(empty.place(Color.BLACK, PieceType.PAWN, B2))

    def test_only_pawns(self, empty) -> None:
        assert not promotion.eligible(empty.place(Color.WHITE, PieceType.KNIGHT, B7))


class TestResolve:
    def test_reuses_captured_piece(self) -> None:
        player = Player.standard(Color.WHITE)
        queen = player.collection(PieceType.QUEEN)[0]
        queen.current_square = None
        assert promotion.resolve(player, PieceType.QUEEN) is queen
        assert player.count(PieceType.QUEEN) == 1

    def test_appends_when_none_captured(self) -> None:
        player = Player.standard(Color.WHITE)
        knight = promotion.resolve(player, PieceType.KNIGHT)
        assert player.count(PieceType.KNIGHT) == 3
        assert knight.current_square is None
        assert knight.owner == Color.WHITE

    @pytest.mark.parametrize("piece_type", [PieceType.PAWN, PieceType.KING])
    def test_invalid_type(self, piece_type: PieceType) -> None:
        with pytest.raises(ValueError):
            promotion.resolve(Player(Color.WHITE), piece_type)


class TestPromotionMove:
    def test_reuse_then_append(self, empty, lift) -> None:
        white = _setup(empty)
        queen = empty.place(Color.WHITE, PieceType.QUEEN, D1)
        lift(empty, D1)
        first = empty.place(Color.WHITE, PieceType.PAWN, B7)
        second = empty.place(Color.WHITE, PieceType.PAWN, C7)
        engine = Engine(empty)

        outcome = engine.attempt_move(white, first, B8, PieceType.QUEEN)
        assert outcome.applied
        assert outcome.promoted == PieceType.QUEEN
        assert empty.board[B8] is queen
        assert first.current_square is None
        assert white.count(PieceType.QUEEN) == 1

        assert engine.attempt_move(white, second, C8, PieceType.QUEEN).applied
        assert white.count(PieceType.QUEEN) == 2
        assert empty.board[C8] is white.collection(PieceType.QUEEN)[1]
        empty.verify()

    def test_capture_and_promote(self, empty) -> None:
        white = _setup(empty)
        pawn = empty.place(Color.WHITE, PieceType.PAWN, B7)
        rook = empty.place(Color.BLACK, PieceType.ROOK, A8)
        outcome = Engine(empty).attempt_move(white, pawn, A8, PieceType.KNIGHT)
        assert outcome.applied
        assert outcome.capture == A8
        assert rook.current_square is None
        assert empty.board[A8].piece_type == PieceType.KNIGHT

    def test_promoted_rook_cannot_castle(self, empty) -> None:
        white = _setup(empty)
        pawn = empty.place(Color.WHITE, PieceType.PAWN, B7)
        Engine(empty).attempt_move(white, pawn, B8, PieceType.ROOK)
        rook = empty.board[B8]
        assert rook.has_moved
        assert rook.king_side_castle_square == F1

    def test_choice_required(self, empty) -> None:
        white = _setup(empty)
        pawn = empty.place(Color.WHITE, PieceType.PAWN, B7)
        outcome = Engine(empty).attempt_move(white, pawn, B8)
        assert outcome.rejection == Rejection.PROMOTION_REQUIRED
        assert empty.board[B7] is pawn
        assert empty.ply == 0

    def test_choice_not_allowed(self, empty) -> None:
        white = _setup(empty)
        pawn = empty.place(Color.WHITE, PieceType.PAWN, E2)
        outcome = Engine(empty).attempt_move(white, pawn, E3, PieceType.QUEEN)
        assert outcome.rejection == Rejection.PROMOTION_NOT_ALLOWED

    def test_invalid_choice(self, empty) -> None:
        white = _setup(empty)
        pawn = empty.place(Color.WHITE, PieceType.PAWN, B7)
        outcome = Engine(empty).attempt_move(white, pawn, B8, PieceType.KING)
        assert outcome.rejection == Rejection.INVALID_PROMOTION
        assert white.count(PieceType.KING) == 1

    def test_rejected_promotion_leaves_collection_alone(self, empty) -> None:
        white = _setup(empty)
        pawn = empty.place(Color.WHITE, PieceType.PAWN, B7)
        empty.place(Color.BLACK, PieceType.KNIGHT, B8)
        outcome = Engine(empty).attempt_move(white, pawn, B8, PieceType.QUEEN)
        assert outcome.rejection == Rejection.UNREACHABLE
        assert white.count(PieceType.QUEEN) == 0

    def test_black_promotes_on_first_rank(self, empty) -> None:
        _setup(empty)
        black = empty.player(Color.BLACK)
        pawn = empty.place(Color.BLACK, PieceType.PAWN, B2)
        assert Engine(empty).attempt_move(black, pawn, B1, PieceType.QUEEN).applied
        assert empty.board[B1].piece_type == PieceType.QUEEN
        assert empty.board[B1].owner == Color.BLACK
