from __future__ import annotations

from fastapi.testclient import TestClient

from chess_rules.engine.fen import STARTPOS_FEN
from chess_rules.protocol.http.app import create_app


def test_perft_endpoint_counts_nodes() -> None:
    client = TestClient(create_app())
    r = client.post("/api/perft", json={"fen": STARTPOS_FEN, "depth": 2})
    assert r.status_code == 200
    assert r.json() == {"nodes": 400}


def test_perft_endpoint_validates_input() -> None:
    client = TestClient(create_app(max_perft_depth=2))
    r_deep = client.post("/api/perft", json={"fen": STARTPOS_FEN, "depth": 3})
    assert r_deep.status_code == 400
    assert r_deep.json()["error"]["code"] == "bad_request"

    r_fen = client.post("/api/perft", json={"fen": "garbage", "depth": 1})
    assert r_fen.status_code == 400

    r_neg = client.post("/api/perft", json={"fen": STARTPOS_FEN, "depth": -1})
    assert r_neg.status_code == 422
