"""Pseudo-legal move generation, check detection and legality filtering."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .board import Board, Piece
from .constants import PAWN_DIRECTION, PAWN_START_ROW, Color, PieceType, opposite
from .move import Move, Position

_LOGGER = logging.getLogger(__name__)

KNIGHT_DELTAS = ((-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1))
KING_DELTAS = ((-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1))
BISHOP_DIRS = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS = ROOK_DIRS + BISHOP_DIRS

Generator = Callable[[Board, Position, Piece], set[Position]]


def _pawn_moves(board: Board, position: Position, piece: Piece) -> set[Position]:
    moves: set[Position] = set()
    direction = PAWN_DIRECTION[piece.color]

    one_step = position.offset(direction, 0)
    if one_step.on_board and board.piece_at(one_step) is None:
        moves.add(one_step)
        if position.row == PAWN_START_ROW[piece.color]:
            two_step = position.offset(2 * direction, 0)
            if board.piece_at(two_step) is None:
                moves.add(two_step)

    for d_col in (-1, 1):
        target = position.offset(direction, d_col)
        if not target.on_board:
            continue
        occupant = board.piece_at(target)
        if occupant is not None and occupant.color != piece.color:
            moves.add(target)

    return moves


def _leaper_moves(
    board: Board,
    position: Position,
    piece: Piece,
    deltas: tuple[tuple[int, int], ...],
) -> set[Position]:
    moves: set[Position] = set()
    for d_row, d_col in deltas:
        target = position.offset(d_row, d_col)
        if not target.on_board:
            continue
        occupant = board.piece_at(target)
        if occupant is None or occupant.color != piece.color:
            moves.add(target)
    return moves


def _slider_moves(
    board: Board,
    position: Position,
    piece: Piece,
    directions: tuple[tuple[int, int], ...],
) -> set[Position]:
    moves: set[Position] = set()
    for d_row, d_col in directions:
        target = position.offset(d_row, d_col)
        while target.on_board:
            occupant = board.piece_at(target)
            if occupant is None:
                moves.add(target)
            else:
                if occupant.color != piece.color:
                    moves.add(target)
                break
            target = target.offset(d_row, d_col)
    return moves


GENERATORS: dict[PieceType, Generator] = {
    PieceType.PAWN: _pawn_moves,
    PieceType.KNIGHT: lambda board, pos, piece: _leaper_moves(board, pos, piece, KNIGHT_DELTAS),
    PieceType.KING: lambda board, pos, piece: _leaper_moves(board, pos, piece, KING_DELTAS),
    PieceType.ROOK: lambda board, pos, piece: _slider_moves(board, pos, piece, ROOK_DIRS),
    PieceType.BISHOP: lambda board, pos, piece: _slider_moves(board, pos, piece, BISHOP_DIRS),
    PieceType.QUEEN: lambda board, pos, piece: _slider_moves(board, pos, piece, QUEEN_DIRS),
}


def pseudo_legal_destinations(board: Board, position: Position) -> set[Position]:
    """Destinations obeying movement and occupancy rules, ignoring self-check."""
    if not position.on_board:
        return set()
    piece = board.piece_at(position)
    if piece is None:
        return set()
    return GENERATORS[piece.type](board, position, piece)


def king_position(board: Board, color: Color) -> Position | None:
    position = board.find_king(color)
    if position is None:
        _LOGGER.warning("King not found for %s; treating as not in check", color)
    return position


def _king_attacked(board: Board, color: Color) -> bool:
    king = board.find_king(color)
    if king is None:
        return False

    for position, _ in board.pieces(opposite(color)):
        if king in pseudo_legal_destinations(board, position):
            return True
    return False


def in_check(board: Board, color: Color) -> bool:
    if king_position(board, color) is None:
        return False
    return _king_attacked(board, color)


def _filter_legal(board: Board, position: Position, piece: Piece) -> set[Position]:
    legal: set[Position] = set()
    for target in pseudo_legal_destinations(board, position):
        move = Move(position, target)
        captured = board.apply(move)
        try:
            illegal = _king_attacked(board, piece.color)
        finally:
            board.undo(move, captured)
        if not illegal:
            legal.add(target)
    return legal


def legal_destinations(board: Board, position: Position) -> set[Position]:
    """Pseudo-legal destinations that do not leave the mover's King attacked."""
    if not position.on_board:
        return set()
    piece = board.piece_at(position)
    if piece is None:
        return set()

    # Warn once here; the per-candidate checks stay quiet.
    king_position(board, piece.color)
    return _filter_legal(board, position, piece)


def generate_legal_moves(board: Board, color: Color) -> set[Move]:
    king_position(board, color)
    moves: set[Move] = set()
    for position, piece in list(board.pieces(color)):
        for target in _filter_legal(board, position, piece):
            moves.add(Move(position, target))
    return moves
