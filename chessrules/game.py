"""Rules engine: turn management, move attempts and terminal-state queries."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .board import Board, Piece, create_initial_board
from .constants import WHITE, Color, Outcome, Status, opposite
from .move import Move, Position
from .movegen import generate_legal_moves, in_check, legal_destinations

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    move: Move
    piece: Piece
    captured: Piece | None

    def __str__(self) -> str:
        return str(self.move)


class Game:
    """A single game: the board, the side to move and the accepted moves.

    Illegal input is never an exception here. Every move attempt either
    fully applies and returns ``True`` or changes nothing and returns
    ``False``.
    """

    def __init__(self, board: Board | None = None, side_to_move: Color = WHITE):
        self.board = create_initial_board() if board is None else board
        self.side_to_move = side_to_move
        self.history: list[MoveRecord] = []

    @classmethod
    def from_labels(cls, labels: Sequence[Sequence[str]], side_to_move: Color = WHITE) -> Game:
        return cls(Board.from_labels(labels), side_to_move)

    def attempt_move(self, move: Move) -> bool:
        if not (move.from_pos.on_board and move.to_pos.on_board):
            _LOGGER.debug("Rejected off-board move %s", move)
            return False

        piece = self.board.piece_at(move.from_pos)
        if piece is None or piece.color != self.side_to_move:
            _LOGGER.debug("Rejected %s: no %s piece on origin", move, self.side_to_move)
            return False

        if move.to_pos not in legal_destinations(self.board, move.from_pos):
            _LOGGER.debug("Rejected %s: destination not legal", move)
            return False

        captured = self.board.apply(move)
        self.history.append(MoveRecord(move=move, piece=piece, captured=captured))
        self.side_to_move = opposite(self.side_to_move)
        _LOGGER.debug("Accepted %s %s; %s to move", piece, move, self.side_to_move)
        return True

    def move_piece(self, from_key: str, to_key: str) -> bool:
        """String form of :meth:`attempt_move` taking ``"row,col"`` endpoints."""
        try:
            move = Move.parse(from_key, to_key)
        except ValueError as exc:
            _LOGGER.debug("Rejected malformed move %r -> %r: %s", from_key, to_key, exc)
            return False
        return self.attempt_move(move)

    def legal_moves_for(self, position: Position) -> set[Position]:
        return legal_destinations(self.board, position)

    def all_legal_moves(self) -> set[Move]:
        return generate_legal_moves(self.board, self.side_to_move)

    def in_check(self, color: Color | None = None) -> bool:
        return in_check(self.board, self.side_to_move if color is None else color)

    def is_checkmate(self) -> bool:
        return self.in_check() and not self.all_legal_moves()

    def is_stalemate(self) -> bool:
        return not self.in_check() and not self.all_legal_moves()

    def is_game_over(self) -> bool:
        return self.is_checkmate() or self.is_stalemate()

    def winner(self) -> Outcome | None:
        if self.is_checkmate():
            return Outcome(opposite(self.side_to_move).value)
        if self.is_stalemate():
            return Outcome.DRAW
        return None

    def status(self) -> Status:
        checked = self.in_check()
        if self.all_legal_moves():
            return Status.CHECK if checked else Status.ONGOING
        return Status.CHECKMATE if checked else Status.STALEMATE

    def piece_at(self, position: Position) -> Piece | None:
        if not position.on_board:
            return None
        return self.board.piece_at(position)

    def move_log(self) -> list[str]:
        return [str(record) for record in self.history]

    def to_labels(self) -> list[list[str]]:
        return self.board.to_labels()

    def copy(self) -> Game:
        game = Game(self.board.copy(), self.side_to_move)
        game.history = list(self.history)
        return game

    def __str__(self) -> str:
        return f"{self.board}\nside={self.side_to_move} status={self.status()}"
