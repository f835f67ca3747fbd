"""Engine-wide constants and square helpers."""

from __future__ import annotations

from enum import StrEnum


class Color(StrEnum):
    WHITE = "White"
    BLACK = "Black"


class PieceType(StrEnum):
    PAWN = "Pawn"
    ROOK = "Rook"
    KNIGHT = "Knight"
    BISHOP = "Bishop"
    QUEEN = "Queen"
    KING = "King"


class Outcome(StrEnum):
    WHITE = "White"
    BLACK = "Black"
    DRAW = "Draw"


class Status(StrEnum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


WHITE = Color.WHITE
BLACK = Color.BLACK

BOARD_SIZE = 8

BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

BACK_RANK_ROW = {WHITE: 7, BLACK: 0}
PAWN_START_ROW = {WHITE: 6, BLACK: 1}
PAWN_DIRECTION = {WHITE: -1, BLACK: 1}

COLOR_LABELS = {WHITE: "W", BLACK: "B"}
LABEL_TO_COLOR = {v: k for k, v in COLOR_LABELS.items()}

# Knight takes "N" so its label does not collide with the King's.
TYPE_LABELS = {
    PieceType.PAWN: "P",
    PieceType.ROOK: "R",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
LABEL_TO_TYPE = {v: k for k, v in TYPE_LABELS.items()}

# Diagram symbols: uppercase white, lowercase black.
PIECE_SYMBOLS = {
    (color, piece_type): (label if color == WHITE else label.lower())
    for color in Color
    for piece_type, label in TYPE_LABELS.items()
}

FILES = "abcdefgh"
RANKS = "87654321"


def opposite(color: Color) -> Color:
    return BLACK if color == WHITE else WHITE


def parse_color(value: str) -> Color:
    """Accept ``"White"``/``"Black"`` or the one-letter ``W``/``B`` forms."""
    text = value.strip()
    for color in Color:
        if text.lower() in (color.value.lower(), COLOR_LABELS[color].lower()):
            return color
    raise ValueError(f"Invalid color: {value!r}")


def square_name(row: int, col: int) -> str:
    if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
        raise ValueError(f"Square out of range: ({row}, {col})")
    return f"{FILES[col]}{RANKS[row]}"


def square_coords(square: str) -> tuple[int, int]:
    if len(square) != 2 or square[0] not in FILES or square[1] not in RANKS:
        raise ValueError(f"Invalid square: {square}")
    return RANKS.index(square[1]), FILES.index(square[0])
