from __future__ import annotations

from chess_rules.engine.fen import from_fen
from chess_rules.engine.move import Move, Square, parse_uci
from chess_rules.engine.piece import Color, Piece, PieceKind
from chess_rules.engine.rules import apply, legal_moves


def _uci_set(moves):
    return set(m.to_uci() for m in moves)


def test_white_pawn_push_promotions_only_with_piece() -> None:
    # White pawn on e7 can promote on e8
    state = from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    ms = legal_moves(state)
    to_e8 = [m for m in ms if m.to_sq == Square.parse("e8")]
    assert _uci_set(to_e8) == {"e7e8q", "e7e8r", "e7e8b", "e7e8n"}
    assert Move(Square.parse("e7"), Square.parse("e8")) not in ms


def test_white_pawn_capture_promotion() -> None:
    # e7 pawn takes the rook on d8; the king on e8 blocks the push
    state = from_fen("3rk3/4P3/8/8/8/8/8/4K3 w - - 0 1")
    ms = _uci_set(legal_moves(state))
    assert ms >= {"e7d8q", "e7d8r", "e7d8b", "e7d8n"}
    assert not any(m.startswith("e7e8") for m in ms)


def test_black_pawn_push_promotions() -> None:
    state = from_fen("4k3/8/8/8/8/8/3p4/6K1 b - - 0 1")
    ms = _uci_set(legal_moves(state))
    assert ms >= {"d2d1q", "d2d1r", "d2d1b", "d2d1n"}
    assert "d2d1" not in ms


def test_promotion_choices_are_parameterizable() -> None:
    state = from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    ms = _uci_set(legal_moves(state, promotions=(PieceKind.QUEEN,)))
    assert "e7e8q" in ms
    assert not ({"e7e8r", "e7e8b", "e7e8n"} & ms)


def test_underpromotion_places_chosen_piece() -> None:
    state = from_fen("k7/4P3/8/8/8/8/8/4K3 w - - 0 1")
    after = apply(state, parse_uci("e7e8n"))
    assert after.board.piece_at(Square.parse("e8")) == Piece(Color.WHITE, PieceKind.KNIGHT)
    assert after.board.piece_at(Square.parse("e7")) is None
