"""In-memory game sessions and the payloads served for them."""

from __future__ import annotations

import logging
import uuid

from chessrules.game import Game
from chessrules.move import Position

_LOGGER = logging.getLogger(__name__)


class GameStore:
    """One independent :class:`Game` per session id."""

    def __init__(self) -> None:
        self._games: dict[str, Game] = {}

    def create(self, game: Game) -> str:
        game_id = uuid.uuid4().hex
        self._games[game_id] = game
        _LOGGER.debug("Created game session %s", game_id)
        return game_id

    def get(self, game_id: str) -> Game | None:
        return self._games.get(game_id)

    def replace(self, game_id: str, game: Game) -> None:
        self._games[game_id] = game

    def delete(self, game_id: str) -> bool:
        removed = self._games.pop(game_id, None) is not None
        if removed:
            _LOGGER.debug("Deleted game session %s", game_id)
        return removed

    def clear(self) -> None:
        self._games.clear()

    def __len__(self) -> int:
        return len(self._games)


store = GameStore()


def legal_moves_payload(game: Game, square: Position | None = None) -> list[dict[str, str]]:
    if square is not None:
        targets = sorted(game.legal_moves_for(square))
        return [{"from": square.key(), "to": target.key()} for target in targets]
    return [
        {"from": move.from_pos.key(), "to": move.to_pos.key()}
        for move in sorted(game.all_legal_moves())
    ]


def game_payload(game: Game, square: Position | None = None) -> dict:
    status = game.status()
    winner = game.winner()
    return {
        "board": game.to_labels(),
        "side_to_move": game.side_to_move.value,
        "status": status.value,
        "in_check": game.in_check(),
        "game_over": winner is not None,
        "winner": None if winner is None else winner.value,
        "legal_moves": legal_moves_payload(game, square),
        "history": game.move_log(),
    }
