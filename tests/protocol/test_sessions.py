from __future__ import annotations

from fastapi.testclient import TestClient

from chess_rules.engine.fen import STARTPOS_FEN
from chess_rules.protocol.http.app import create_app


def _client() -> TestClient:
    return TestClient(create_app())


def _new_game(client: TestClient) -> str:
    r = client.post("/api/games")
    assert r.status_code == 200
    return r.json()["game_id"]


def test_create_game_and_get_state() -> None:
    client = _client()
    r = client.post("/api/games")
    assert r.status_code == 200
    body = r.json()
    assert isinstance(body["game_id"], str) and body["game_id"]
    assert body["fen"] == STARTPOS_FEN

    r2 = client.get(f"/api/games/{body['game_id']}/state")
    assert r2.status_code == 200
    state = r2.json()
    assert state["game_id"] == body["game_id"]
    assert state["side_to_move"] == "white"
    assert len(state["legal_moves"]) == 20
    assert state["result"] == "ongoing"
    assert state["winner"] is None
    assert state["last_move"] is None


def test_get_state_unknown_id_404() -> None:
    client = _client()
    r = client.get("/api/games/does-not-exist/state")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"


def test_set_position_validation_and_success() -> None:
    client = _client()
    game_id = _new_game(client)

    r_bad = client.post(f"/api/games/{game_id}/position", json={"fen": "not a fen"})
    assert r_bad.status_code == 400
    assert r_bad.json()["error"]["code"] == "bad_request"

    fen = "8/8/8/8/8/kq6/8/K7 w - - 0 1"
    r_ok = client.post(f"/api/games/{game_id}/position", json={"fen": fen})
    assert r_ok.status_code == 200
    state = r_ok.json()
    assert state["fen"] == fen
    assert state["legal_moves"] == []
    assert state["result"] == "stalemate"


def test_move_then_checkmate_and_game_over() -> None:
    client = _client()
    game_id = _new_game(client)
    for uci in ("f2f3", "e7e5", "g2g4"):
        r = client.post(f"/api/games/{game_id}/move", json={"move": uci})
        assert r.status_code == 200
    r = client.post(f"/api/games/{game_id}/move", json={"move": "d8h4"})
    assert r.status_code == 200
    state = r.json()
    assert state["result"] == "checkmate"
    assert state["winner"] == "black"
    assert state["in_check"] is True
    assert state["last_move"] == "d8h4"
    assert state["move_history"] == ["f2f3", "e7e5", "g2g4", "d8h4"]

    r_after = client.post(f"/api/games/{game_id}/move", json={"move": "e1f2"})
    assert r_after.status_code == 409
    assert r_after.json()["error"]["code"] == "conflict"


def test_illegal_and_malformed_moves_rejected() -> None:
    client = _client()
    game_id = _new_game(client)

    r_bad = client.post(f"/api/games/{game_id}/move", json={"move": "e2"})
    assert r_bad.status_code == 400
    assert r_bad.json()["error"]["code"] == "bad_request"

    r_illegal = client.post(f"/api/games/{game_id}/move", json={"move": "e2e5"})
    assert r_illegal.status_code == 400
    err = r_illegal.json()["error"]
    assert err["code"] == "illegal_move"
    assert "e2e5" in err["message"]

    state = client.get(f"/api/games/{game_id}/state").json()
    assert state["fen"] == STARTPOS_FEN


def test_promotion_move_via_api() -> None:
    client = _client()
    game_id = _new_game(client)
    client.post(f"/api/games/{game_id}/position", json={"fen": "k7/4P3/8/8/8/8/8/4K3 w - - 0 1"})
    r = client.post(f"/api/games/{game_id}/move", json={"move": "e7e8r"})
    assert r.status_code == 200
    assert r.json()["fen"].startswith("k3R3/")



def test_position_with_capturable_king_rejected() -> None:
    client = _client()
    game_id = _new_game(client)
    fen = "4k3/8/8/8/8/8/8/4R1K1 w - - 0 1"
    r = client.post(f"/api/games/{game_id}/position", json={"fen": fen})
    assert r.status_code == 400
    assert "side not to move is in check" in r.json()["error"]["message"]
    # The stored game keeps its previous position
    assert client.get(f"/api/games/{game_id}/state").json()["fen"] == STARTPOS_FEN

    r_perft = client.post("/api/perft", json={"fen": fen, "depth": 1})
    assert r_perft.status_code == 400


def test_delete_game() -> None:
    client = _client()
    game_id = _new_game(client)
    assert client.delete(f"/api/games/{game_id}").status_code == 204
    assert client.get(f"/api/games/{game_id}/state").status_code == 404
    assert client.delete(f"/api/games/{game_id}").status_code == 404


def test_missing_body_field_is_422() -> None:
    client = _client()
    game_id = _new_game(client)
    r = client.post(f"/api/games/{game_id}/move", json={})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert any(fe["field"].endswith("move") for fe in err["field_errors"])
