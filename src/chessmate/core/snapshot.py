"""Versioned snapshot of a position's entity graph.

The snapshot is an explicit schema: every field written is listed here, and
``from_dict`` refuses versions it does not know. Writing the data to disk is
the caller's business.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from chessmate.core.enums import Color, PieceType
from chessmate.core.piece import make_piece
from chessmate.core.player import Player
from chessmate.core.position import Position
from chessmate.core.setup import GameSetup
from chessmate.core.types import Square, parse_square, square_name

SCHEMA_VERSION = 1


@dataclass(frozen=True, slots=True)
class PlayerRecord:
    color: Color
    name: str
    is_computer: bool


@dataclass(frozen=True, slots=True)
class PieceRecord:
    owner: Color
    piece_type: PieceType
    slot: int  # index within the owner's collection of this type
    square: Square | None
    has_moved: bool
    en_passant_active: bool = False
    en_passant_target: Square | None = None


@dataclass(frozen=True, slots=True)
class PositionSnapshot:
    ply: int
    players: tuple[PlayerRecord, ...]
    pieces: tuple[PieceRecord, ...]
    version: int = SCHEMA_VERSION

    # ── Capture / restore ────────────────────────────────────────────────

    @classmethod
    def capture(cls, position: Position) -> PositionSnapshot:
        players = tuple(PlayerRecord(p.color, p.name, p.is_computer) for p in position.players)
        pieces: list[PieceRecord] = []
        for player in position.players:
            for piece_type in PieceType:
                for slot, piece in enumerate(player.collection(piece_type)):
                    pieces.append(
                        PieceRecord(
                            owner=piece.owner,
                            piece_type=piece_type,
                            slot=slot,
                            square=piece.current_square,
                            has_moved=piece.has_moved,
                            en_passant_active=piece.en_passant_active,
                            en_passant_target=piece.en_passant_target_square,
                        )
                    )
        return cls(ply=position.ply, players=players, pieces=tuple(pieces))

    def restore(self) -> Position:
        """Rebuild an independent position from this snapshot."""
        players = {
            rec.color: Player(rec.color, rec.name, is_computer=rec.is_computer)
            for rec in self.players
        }
        ordered = sorted(self.pieces, key=lambda r: (r.owner, r.piece_type, r.slot))
        for rec in ordered:
            piece = make_piece(rec.owner, rec.piece_type, rec.square, has_moved=rec.has_moved)
            if rec.piece_type == PieceType.PAWN:
                piece.en_passant_active = rec.en_passant_active
                piece.en_passant_target_square = rec.en_passant_target
            players[rec.owner].add(piece)

        setup = GameSetup()
        for player in players.values():
            setup.add_player(player)
        position = setup.build()
        position.ply = self.ply
        return position

    # ── Plain-data form ──────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "ply": self.ply,
            "players": [
                {"color": p.color.name, "name": p.name, "is_computer": p.is_computer}
                for p in self.players
            ],
            "pieces": [
                {
                    "owner": r.owner.name,
                    "type": r.piece_type.name,
                    "slot": r.slot,
                    "square": _name(r.square),
                    "has_moved": r.has_moved,
                    "en_passant_active": r.en_passant_active,
                    "en_passant_target": _name(r.en_passant_target),
                }
                for r in self.pieces
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PositionSnapshot:
        version = data.get("version")
        if version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported snapshot version: {version!r}")
        try:
            players = tuple(
                PlayerRecord(Color[p["color"]], p["name"], bool(p["is_computer"]))
                for p in data["players"]
            )
            pieces = tuple(
                PieceRecord(
                    owner=Color[r["owner"]],
                    piece_type=PieceType[r["type"]],
                    slot=int(r["slot"]),
                    square=_parse(r["square"]),
                    has_moved=bool(r["has_moved"]),
                    en_passant_active=bool(r.get("en_passant_active", False)),
                    en_passant_target=_parse(r.get("en_passant_target")),
                )
                for r in data["pieces"]
            )
            ply = int(data["ply"])
        except KeyError as exc:
            raise ValueError(f"Malformed snapshot, missing or unknown {exc}") from None
        return cls(ply=ply, players=players, pieces=pieces)


def _name(sq: Square | None) -> str | None:
    return square_name(sq) if sq is not None else None


def _parse(name: str | None) -> Square | None:
    return parse_square(name) if name is not None else None
