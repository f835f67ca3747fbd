"""Board representation with reversible apply/undo operations."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .constants import (
    BACK_RANK,
    BACK_RANK_ROW,
    BLACK,
    BOARD_SIZE,
    COLOR_LABELS,
    LABEL_TO_COLOR,
    LABEL_TO_TYPE,
    PAWN_START_ROW,
    PIECE_SYMBOLS,
    TYPE_LABELS,
    WHITE,
    Color,
    PieceType,
)
from .move import Move, Position


@dataclass(frozen=True, slots=True)
class Piece:
    color: Color
    type: PieceType

    @property
    def label(self) -> str:
        return COLOR_LABELS[self.color] + TYPE_LABELS[self.type]

    @property
    def symbol(self) -> str:
        return PIECE_SYMBOLS[(self.color, self.type)]

    @classmethod
    def from_label(cls, label: str) -> Piece:
        if not isinstance(label, str) or len(label) != 2:
            raise ValueError(f"Invalid piece label: {label!r}")
        color = LABEL_TO_COLOR.get(label[0].upper())
        piece_type = LABEL_TO_TYPE.get(label[1].upper())
        if color is None or piece_type is None:
            raise ValueError(f"Invalid piece label: {label!r}")
        return cls(color, piece_type)

    def __str__(self) -> str:
        return self.label


def _is_grid(labels: object) -> bool:
    def is_row(value: object) -> bool:
        return isinstance(value, Sequence) and not isinstance(value, str)

    return (
        is_row(labels)
        and len(labels) == BOARD_SIZE
        and all(is_row(row) and len(row) == BOARD_SIZE for row in labels)
    )


class Board:
    __slots__ = ("grid",)

    def __init__(self, grid: list[list[Piece | None]] | None = None):
        if grid is None:
            grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            raise ValueError("Board must be an 8x8 grid")
        self.grid = grid

    @classmethod
    def from_labels(cls, labels: Sequence[Sequence[str]]) -> Board:
        """Rebuild a board from an 8x8 grid of cell labels.

        Empty cells are ``""``; occupied cells are ``<W|B><P|R|N|B|Q|K>``.
        The resulting position is not checked for legality.
        """
        if not _is_grid(labels):
            raise ValueError("Board snapshot must be an 8x8 grid of labels")
        grid = [[None if cell == "" else Piece.from_label(cell) for cell in row] for row in labels]
        return cls(grid)

    def to_labels(self) -> list[list[str]]:
        return [[piece.label if piece else "" for piece in row] for row in self.grid]

    def piece_at(self, position: Position) -> Piece | None:
        return self.grid[position.row][position.col]

    def set_piece(self, position: Position, piece: Piece | None) -> None:
        self.grid[position.row][position.col] = piece

    def pieces(self, color: Color | None = None) -> Iterator[tuple[Position, Piece]]:
        for row_idx, row in enumerate(self.grid):
            for col_idx, piece in enumerate(row):
                if piece is None:
                    continue
                if color is not None and piece.color != color:
                    continue
                yield Position(row_idx, col_idx), piece

    def find_king(self, color: Color) -> Position | None:
        for position, piece in self.pieces(color):
            if piece.type == PieceType.KING:
                return position
        return None

    def apply(self, move: Move) -> Piece | None:
        """Relocate the piece on ``move.from_pos`` and return what it captured."""
        piece = self.piece_at(move.from_pos)
        captured = self.piece_at(move.to_pos)
        self.set_piece(move.to_pos, piece)
        self.set_piece(move.from_pos, None)
        return captured

    def undo(self, move: Move, captured: Piece | None) -> None:
        self.set_piece(move.from_pos, self.piece_at(move.to_pos))
        self.set_piece(move.to_pos, captured)

    def copy(self) -> Board:
        return Board([list(row) for row in self.grid])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def __str__(self) -> str:
        rows = []
        for row in self.grid:
            rows.append(" ".join(piece.symbol if piece else "." for piece in row))
        return "\n".join(rows)


def create_initial_board() -> Board:
    board = Board()
    for color in (WHITE, BLACK):
        for col, piece_type in enumerate(BACK_RANK):
            board.set_piece(Position(BACK_RANK_ROW[color], col), Piece(color, piece_type))
            board.set_piece(Position(PAWN_START_ROW[color], col), Piece(color, PieceType.PAWN))
    return board
