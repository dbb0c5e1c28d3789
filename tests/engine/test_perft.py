from __future__ import annotations

import pytest

from chess_rules.engine.fen import STARTPOS_FEN, from_fen
from chess_rules.engine.perft import perft, perft_divide


# Published reference positions whose shallow trees contain no en passant
# capture, so the counts apply unchanged.
KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
POSITION_3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"
POSITION_4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"
POSITION_5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


@pytest.mark.parametrize(
    ("depth", "expected"),
    [
        (0, 1),
        (1, 20),
        (2, 400),
        (3, 8902),
    ],
)
def test_startpos_perft(depth: int, expected: int) -> None:
    assert perft(from_fen(STARTPOS_FEN), depth) == expected


@pytest.mark.parametrize(
    ("fen", "depth", "expected"),
    [
        (KIWIPETE, 1, 48),
        (POSITION_3, 1, 14),
        (POSITION_3, 2, 191),
        (POSITION_4, 1, 6),
        (POSITION_4, 2, 264),
        (POSITION_5, 1, 44),
        (POSITION_5, 2, 1486),
    ],
)
def test_reference_positions_shallow(fen: str, depth: int, expected: int) -> None:
    assert perft(from_fen(fen), depth) == expected


@pytest.mark.slow
def test_position_5_depth3() -> None:
    assert perft(from_fen(POSITION_5), 3) == 62379


def test_perft_divide_sums_to_perft() -> None:
    state = from_fen(STARTPOS_FEN)
    counts = perft_divide(state, 2)
    assert len(counts) == 20
    assert all(n == 20 for n in counts.values())
    assert sum(counts.values()) == perft(state, 2)


def test_negative_depth_rejected() -> None:
    with pytest.raises(ValueError):
        perft(from_fen(STARTPOS_FEN), -1)
    with pytest.raises(ValueError):
        perft_divide(from_fen(STARTPOS_FEN), 0)
