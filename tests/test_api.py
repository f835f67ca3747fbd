"""API tests for the stateless and per-session endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from api.server import app
from api.sessions import store


client = TestClient(app)

FOOLS_MATE = [("6,5", "5,5"), ("1,4", "3,4"), ("6,6", "4,6"), ("0,3", "4,7")]


def _new_game(**payload) -> str:
    response = client.post("/games", json=payload)
    assert response.status_code == 201
    return response.json()["game_id"]


def test_health() -> None:
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json() == {"status": "ok"}


def test_legal_moves_for_start_position() -> None:
    response = client.post("/legal-moves", json={})
    assert response.status_code == 200
    body = response.json()
    assert body["side_to_move"] == "White"
    assert body["status"] == "ongoing"
    assert body["in_check"] is False
    assert body["winner"] is None
    assert len(body["legal_moves"]) == 20
    assert body["board"][7][4] == "WK"


def test_legal_moves_for_one_square() -> None:
    response = client.post("/legal-moves", json={"square": "7,6"})
    assert response.status_code == 200
    targets = {move["to"] for move in response.json()["legal_moves"]}
    assert targets == {"5,5", "5,7"}


def test_stateless_move_reports_acceptance() -> None:
    accepted = client.post("/move", json={"from_square": "6,4", "to_square": "4,4"})
    assert accepted.status_code == 200
    assert accepted.json()["accepted"] is True
    assert accepted.json()["side_to_move"] == "Black"
    assert accepted.json()["board"][4][4] == "WP"

    rejected = client.post("/move", json={"from_square": "1,4", "to_square": "3,4"})
    assert rejected.status_code == 200
    assert rejected.json()["accepted"] is False
    assert rejected.json()["side_to_move"] == "White"


def test_malformed_board_snapshot_is_400() -> None:
    response = client.post("/legal-moves", json={"board": [["ZZ"] * 8] * 8})
    assert response.status_code == 400

    response = client.post("/legal-moves", json={"board": [[""] * 8]})
    assert response.status_code == 400


def test_malformed_square_is_400() -> None:
    response = client.post("/legal-moves", json={"square": "9,9"})
    assert response.status_code == 400


def test_perft_endpoint() -> None:
    response = client.post("/perft", json={"depth": 2})
    assert response.status_code == 200
    assert response.json() == {"nodes": 400}

    too_deep = client.post("/perft", json={"depth": 9})
    assert too_deep.status_code == 422


def test_session_fools_mate() -> None:
    game_id = _new_game()

    for from_square, to_square in FOOLS_MATE:
        response = client.post(
            f"/games/{game_id}/moves",
            json={"from_square": from_square, "to_square": to_square},
        )
        assert response.status_code == 200
        assert response.json()["accepted"] is True

    body = client.get(f"/games/{game_id}").json()
    assert body["status"] == "checkmate"
    assert body["game_over"] is True
    assert body["winner"] == "Black"
    assert body["legal_moves"] == []
    assert body["history"][0] == "6,5 to 5,5"


def test_session_illegal_and_malformed_moves_are_not_errors() -> None:
    game_id = _new_game()

    wrong_side = client.post(f"/games/{game_id}/moves", json={"from_square": "1,0", "to_square": "2,0"})
    assert wrong_side.status_code == 200
    assert wrong_side.json()["accepted"] is False

    malformed = client.post(f"/games/{game_id}/moves", json={"from_square": "abc", "to_square": "2,0"})
    assert malformed.status_code == 200
    assert malformed.json()["accepted"] is False
    assert malformed.json()["side_to_move"] == "White"


def test_sessions_are_isolated() -> None:
    first = _new_game()
    second = _new_game()

    client.post(f"/games/{first}/moves", json={"from_square": "6,4", "to_square": "4,4"})

    assert client.get(f"/games/{first}").json()["side_to_move"] == "Black"
    assert client.get(f"/games/{second}").json()["side_to_move"] == "White"


def test_session_from_snapshot_and_reset() -> None:
    board = [[""] * 8 for _ in range(8)]
    board[0][0] = "BK"
    board[1][2] = "WQ"
    board[7][4] = "WK"
    game_id = _new_game(board=board, side_to_move="Black")

    body = client.get(f"/games/{game_id}").json()
    assert body["status"] == "stalemate"
    assert body["winner"] == "Draw"

    reset = client.post(f"/games/{game_id}/reset")
    assert reset.status_code == 200
    assert reset.json()["status"] == "ongoing"
    assert len(reset.json()["legal_moves"]) == 20


def test_session_legal_moves_for_square() -> None:
    game_id = _new_game()
    response = client.get(f"/games/{game_id}/legal-moves", params={"square": "6,4"})
    assert response.status_code == 200
    assert {move["to"] for move in response.json()["legal_moves"]} == {"5,4", "4,4"}


def test_unknown_and_deleted_sessions_are_404() -> None:
    assert client.get("/games/missing").status_code == 404

    game_id = _new_game()
    assert client.delete(f"/games/{game_id}").status_code == 204
    assert client.get(f"/games/{game_id}").status_code == 404
    assert client.delete(f"/games/{game_id}").status_code == 404
    assert store.get(game_id) is None


def test_websocket_play() -> None:
    game_id = _new_game()

    with client.websocket_connect(f"/ws/games/{game_id}") as websocket:
        initial = websocket.receive_json()
        assert initial["type"] == "state"
        assert initial["accepted"] is None

        websocket.send_json({"from": "6,4", "to": "4,4"})
        played = websocket.receive_json()
        assert played["accepted"] is True
        assert played["side_to_move"] == "Black"

        websocket.send_json({"from": "6,3", "to": "4,3"})
        rejected = websocket.receive_json()
        assert rejected["accepted"] is False

        websocket.send_json({"oops": True})
        error = websocket.receive_json()
        assert error["type"] == "error"

    assert client.get(f"/games/{game_id}").json()["side_to_move"] == "Black"


def test_websocket_unknown_game() -> None:
    with client.websocket_connect("/ws/games/missing") as websocket:
        message = websocket.receive_json()
        assert message["type"] == "error"


def test_websocket_survives_invalid_json() -> None:
    game_id = _new_game()

    with client.websocket_connect(f"/ws/games/{game_id}") as websocket:
        websocket.receive_json()

        websocket.send_text("not json")
        error = websocket.receive_json()
        assert error["type"] == "error"

        websocket.send_json({"from": "6,4", "to": "4,4"})
        played = websocket.receive_json()
        assert played["type"] == "state"
        assert played["accepted"] is True
