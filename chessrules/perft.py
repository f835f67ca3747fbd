"""Perft utilities for move generation correctness checks."""

from __future__ import annotations

from .board import Board
from .constants import Color, opposite
from .movegen import generate_legal_moves


def perft(board: Board, color: Color, depth: int) -> int:
    if depth < 0:
        raise ValueError("Depth must be >= 0")
    if depth == 0:
        return 1

    moves = generate_legal_moves(board, color)
    if depth == 1:
        return len(moves)

    nodes = 0
    for move in moves:
        captured = board.apply(move)
        nodes += perft(board, opposite(color), depth - 1)
        board.undo(move, captured)
    return nodes


def perft_divide(board: Board, color: Color, depth: int) -> dict[str, int]:
    if depth < 1:
        raise ValueError("Depth must be >= 1 for perft divide")

    result: dict[str, int] = {}
    for move in generate_legal_moves(board, color):
        captured = board.apply(move)
        count = perft(board, opposite(color), depth - 1)
        board.undo(move, captured)
        result[f"{move.from_pos.square()}{move.to_pos.square()}"] = count
    return dict(sorted(result.items()))
