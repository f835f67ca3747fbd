#!/usr/bin/env python3
"""Render scripted games into demo GIFs for README visuals."""

from __future__ import annotations

from pathlib import Path
import sys

from PIL import Image, ImageDraw, ImageFont

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chessrules.board import Board
from chessrules.constants import WHITE
from chessrules.game import Game
from chessrules.move import Move, Position

OUT_DIR = ROOT / "docs" / "visuals"

W, H = 1000, 600
BOARD_X, BOARD_Y, CELL = 40, 70, 62

COLORS = {
    "bg": "#161616",
    "panel": "#1e1e1e",
    "border": "#2b2b2b",
    "light": "#f0d9b5",
    "dark": "#b58863",
    "text": "#e6e2d8",
    "gold": "#c6a25a",
    "green": "#6f9d4f",
    "red": "#b84f3a",
    "muted": "#9f988d",
}

FOOLS_MATE = (("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4"))
STALEMATE_LABELS = [
    ["BK", "", "", "", "", "", "", ""],
    ["", "", "", "", "", "", "", ""],
    ["", "WQ", "", "", "", "", "", ""],
    ["", "", "", "", "", "", "", ""],
    ["", "", "", "", "", "", "", ""],
    ["", "", "", "", "", "", "", ""],
    ["", "", "", "", "", "", "", ""],
    ["", "", "", "", "WK", "", "", ""],
]
STALEMATE_MOVE = ("b6", "c7")


def _font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for family in ("/System/Library/Fonts/Supplemental/Arial.ttf", "/Library/Fonts/Arial.ttf"):
        try:
            return ImageFont.truetype(family, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


FONT_TITLE = _font(36)
FONT_BODY = _font(20)
FONT_MONO = _font(18)
FONT_PIECE = _font(24)


def _cell_xy(position: Position) -> tuple[int, int]:
    return BOARD_X + position.col * CELL, BOARD_Y + position.row * CELL


def _base_canvas(title: str) -> tuple[Image.Image, ImageDraw.ImageDraw]:
    img = Image.new("RGB", (W, H), COLORS["bg"])
    draw = ImageDraw.Draw(img)
    draw.text((40, 20), title, fill=COLORS["text"], font=FONT_TITLE)
    draw.rounded_rectangle((600, 70, 960, 560), radius=14, fill=COLORS["panel"], outline=COLORS["border"], width=2)
    return img, draw


def _draw_board(draw: ImageDraw.ImageDraw, board: Board, last_move: Move | None = None, king_in_check: Position | None = None) -> None:
    for row in range(8):
        for col in range(8):
            x, y = _cell_xy(Position(row, col))
            is_light = (row + col) % 2 == 0
            draw.rectangle((x, y, x + CELL, y + CELL), fill=COLORS["light"] if is_light else COLORS["dark"])

    if last_move is not None:
        for position in (last_move.from_pos, last_move.to_pos):
            x, y = _cell_xy(position)
            draw.rectangle((x + 4, y + 4, x + CELL - 4, y + CELL - 4), outline=COLORS["gold"], width=3)

    if king_in_check is not None:
        x, y = _cell_xy(king_in_check)
        draw.rectangle((x + 4, y + 4, x + CELL - 4, y + CELL - 4), fill=COLORS["red"])

    for position, piece in board.pieces():
        x, y = _cell_xy(position)
        fill = "#f8f6f2" if piece.color == WHITE else "#1f1f1f"
        outline = "#5c5c5c" if piece.color == WHITE else "#d8d3c8"
        cx, cy = x + CELL // 2, y + CELL // 2
        r = CELL // 2 - 8
        draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=fill, outline=outline, width=2)
        text = piece.label[1]
        tw = draw.textlength(text, font=FONT_PIECE)
        draw.text((cx - tw / 2, cy - 14), text, fill=outline, font=FONT_PIECE)


def _draw_status(draw: ImageDraw.ImageDraw, game: Game) -> None:
    draw.text((630, 110), "STATUS", fill=COLORS["gold"], font=FONT_BODY)
    draw.text((630, 145), f"To move: {game.side_to_move}", fill=COLORS["text"], font=FONT_MONO)
    draw.text((630, 175), f"State: {game.status()}", fill=COLORS["text"], font=FONT_MONO)
    winner = game.winner()
    if winner is not None:
        color = COLORS["green"] if winner.value != "Draw" else COLORS["muted"]
        draw.text((630, 205), f"Result: {winner}", fill=color, font=FONT_MONO)

    draw.text((630, 260), "MOVES", fill=COLORS["gold"], font=FONT_BODY)
    for idx, entry in enumerate(game.move_log()[-8:]):
        draw.text((630, 295 + idx * 28), f"{idx + 1}. {entry}", fill=COLORS["text"], font=FONT_MONO)


def _frame(title: str, game: Game) -> Image.Image:
    img, draw = _base_canvas(title)
    last_move = game.history[-1].move if game.history else None
    checked = game.board.find_king(game.side_to_move) if game.in_check() else None
    _draw_board(draw, game.board, last_move=last_move, king_in_check=checked)
    _draw_status(draw, game)
    return img


def _save_gif(path: Path, frames: list[Image.Image], duration_ms: int = 350) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    frames[0].save(
        path,
        save_all=True,
        append_images=frames[1:],
        duration=duration_ms,
        loop=0,
        optimize=True,
    )


def render_game(title: str, game: Game, moves: tuple[tuple[str, str], ...]) -> list[Image.Image]:
    frames = [_frame(title, game)]
    for from_square, to_square in moves:
        if not game.attempt_move(Move.from_squares(from_square, to_square)):
            raise ValueError(f"Illegal scripted move {from_square}{to_square}")
        frames.append(_frame(title, game))
    # Hold the final position.
    frames.extend(frames[-1:] * 3)
    return frames


def make_fools_mate() -> None:
    frames = render_game("Demo: Fool's Mate", Game(), FOOLS_MATE)
    _save_gif(OUT_DIR / "demo-fools-mate.gif", frames, duration_ms=700)


def make_stalemate() -> None:
    game = Game.from_labels(STALEMATE_LABELS, side_to_move=WHITE)
    frames = render_game("Demo: Stalemate", game, (STALEMATE_MOVE,))
    _save_gif(OUT_DIR / "demo-stalemate.gif", frames, duration_ms=700)


def main() -> None:
    OUT_DIR.mkdir(parents=True, exist_ok=True)
    make_fools_mate()
    make_stalemate()
    print(f"wrote demo gifs in {OUT_DIR}")


if __name__ == "__main__":
    main()
