"""FastAPI server exposing rules queries and per-session gameplay endpoints."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from chessrules.board import Board, create_initial_board
from chessrules.constants import WHITE, Color
from chessrules.game import Game
from chessrules.move import Position
from chessrules.perft import perft, perft_divide

from .sessions import game_payload, store
from .websocket import router as websocket_router


class PositionRequest(BaseModel):
    board: list[list[str]] | None = Field(default=None)
    side_to_move: Color = Field(default=WHITE)
    square: str | None = Field(default=None)


class MoveRequest(BaseModel):
    board: list[list[str]] | None = Field(default=None)
    side_to_move: Color = Field(default=WHITE)
    from_square: str
    to_square: str


class SessionMoveRequest(BaseModel):
    from_square: str
    to_square: str


class NewGameRequest(BaseModel):
    board: list[list[str]] | None = Field(default=None)
    side_to_move: Color = Field(default=WHITE)


class PerftRequest(BaseModel):
    board: list[list[str]] | None = Field(default=None)
    side_to_move: Color = Field(default=WHITE)
    depth: int = Field(default=2, ge=1, le=3)
    divide: bool = Field(default=False)


app = FastAPI(title="Chess Rules API", version="0.3.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(websocket_router)


def _board_from_labels(labels: list[list[str]] | None) -> Board:
    if labels is None:
        return create_initial_board()
    try:
        return Board.from_labels(labels)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _parse_square(square: str | None) -> Position | None:
    if square is None:
        return None
    try:
        return Position.parse(square)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _get_game(game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
    return game


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/legal-moves")
def legal_moves(payload: PositionRequest) -> dict:
    game = Game(_board_from_labels(payload.board), payload.side_to_move)
    return game_payload(game, _parse_square(payload.square))


@app.post("/move")
def move(payload: MoveRequest) -> dict:
    game = Game(_board_from_labels(payload.board), payload.side_to_move)
    accepted = game.move_piece(payload.from_square, payload.to_square)
    response = game_payload(game)
    response["accepted"] = accepted
    return response


@app.post("/perft")
def run_perft(payload: PerftRequest) -> dict:
    board = _board_from_labels(payload.board)
    if payload.divide:
        return {"divide": perft_divide(board, payload.side_to_move, payload.depth)}
    return {"nodes": perft(board, payload.side_to_move, payload.depth)}


@app.post("/games", status_code=201)
def create_game(payload: NewGameRequest | None = None) -> dict:
    payload = payload or NewGameRequest()
    game = Game(_board_from_labels(payload.board), payload.side_to_move)
    game_id = store.create(game)
    response = game_payload(game)
    response["game_id"] = game_id
    return response


@app.get("/games/{game_id}")
def get_game(game_id: str) -> dict:
    response = game_payload(_get_game(game_id))
    response["game_id"] = game_id
    return response


@app.get("/games/{game_id}/legal-moves")
def get_legal_moves(game_id: str, square: str | None = None) -> dict:
    game = _get_game(game_id)
    response = game_payload(game, _parse_square(square))
    response["game_id"] = game_id
    return response


@app.post("/games/{game_id}/moves")
def play_move(game_id: str, payload: SessionMoveRequest) -> dict:
    game = _get_game(game_id)
    accepted = game.move_piece(payload.from_square, payload.to_square)
    response = game_payload(game)
    response["game_id"] = game_id
    response["accepted"] = accepted
    return response


@app.post("/games/{game_id}/reset")
def reset_game(game_id: str) -> dict:
    _get_game(game_id)
    game = Game()
    store.replace(game_id, game)
    response = game_payload(game)
    response["game_id"] = game_id
    return response


@app.delete("/games/{game_id}", status_code=204)
def delete_game(game_id: str) -> Response:
    if not store.delete(game_id):
        raise HTTPException(status_code=404, detail=f"Unknown game: {game_id}")
    return Response(status_code=204)
