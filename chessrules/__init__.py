"""Chess rules engine package."""

from .board import Board, Piece, create_initial_board
from .constants import BLACK, WHITE, Color, Outcome, PieceType, Status
from .game import Game
from .move import Move, Position

__all__ = [
    "BLACK",
    "WHITE",
    "Board",
    "Color",
    "Game",
    "Move",
    "Outcome",
    "Piece",
    "PieceType",
    "Position",
    "Status",
    "create_initial_board",
]
