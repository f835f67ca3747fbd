"""Square and move value types."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import BOARD_SIZE, square_coords, square_name


@dataclass(frozen=True, slots=True, order=True)
class Position:
    row: int
    col: int

    @classmethod
    def parse(cls, key: str) -> Position:
        """Parse the ``"row,col"`` form UI cells are keyed by."""
        parts = key.split(",")
        if len(parts) != 2:
            raise ValueError(f"Invalid position: {key!r}")
        try:
            row, col = (int(part.strip()) for part in parts)
        except ValueError as exc:
            raise ValueError(f"Invalid position: {key!r}") from exc
        position = cls(row, col)
        if not position.on_board:
            raise ValueError(f"Position off the board: {key!r}")
        return position

    @classmethod
    def from_square(cls, square: str) -> Position:
        row, col = square_coords(square)
        return cls(row, col)

    @property
    def on_board(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def offset(self, d_row: int, d_col: int) -> Position:
        return Position(self.row + d_row, self.col + d_col)

    def key(self) -> str:
        return f"{self.row},{self.col}"

    def square(self) -> str:
        return square_name(self.row, self.col)

    def __str__(self) -> str:
        return self.key()


@dataclass(frozen=True, slots=True, order=True)
class Move:
    from_pos: Position
    to_pos: Position

    @classmethod
    def parse(cls, from_key: str, to_key: str) -> Move:
        return cls(Position.parse(from_key), Position.parse(to_key))

    @classmethod
    def from_squares(cls, from_square: str, to_square: str) -> Move:
        return cls(Position.from_square(from_square), Position.from_square(to_square))

    def __str__(self) -> str:
        return f"{self.from_pos.key()} to {self.to_pos.key()}"
