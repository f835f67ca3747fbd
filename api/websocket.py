"""WebSocket routes for live play on a game session."""

from __future__ import annotations

import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from .sessions import game_payload, store

router = APIRouter()


def _serialize_state(payload: dict, accepted: bool | None) -> dict:
    message = {"type": "state", "accepted": accepted}
    message.update(payload)
    return message


@router.websocket("/ws/games/{game_id}")
async def game_websocket(websocket: WebSocket, game_id: str) -> None:
    await websocket.accept()

    game = store.get(game_id)
    if game is None:
        await websocket.send_json({"type": "error", "message": f"Unknown game: {game_id}"})
        await websocket.close()
        return

    await websocket.send_json(_serialize_state(game_payload(game), accepted=None))

    try:
        while True:
            text = await websocket.receive_text()
            try:
                payload = json.loads(text)
            except ValueError:
                await websocket.send_json({"type": "error", "message": "Message is not valid JSON"})
                continue

            from_key = payload.get("from") if isinstance(payload, dict) else None
            to_key = payload.get("to") if isinstance(payload, dict) else None
            if not isinstance(from_key, str) or not isinstance(to_key, str):
                await websocket.send_json(
                    {"type": "error", "message": "Expected {\"from\": \"row,col\", \"to\": \"row,col\"}"}
                )
                continue

            # A reset over HTTP swaps the session's game.
            game = store.get(game_id)
            if game is None:
                await websocket.send_json({"type": "error", "message": f"Unknown game: {game_id}"})
                await websocket.close()
                return

            accepted = game.move_piece(from_key, to_key)
            await websocket.send_json(_serialize_state(game_payload(game), accepted=accepted))
    except WebSocketDisconnect:
        return
