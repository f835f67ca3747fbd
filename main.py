"""Command-line utilities for the chess rules engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from chessrules.constants import WHITE, Color, parse_color
from chessrules.game import Game
from chessrules.move import Position
from chessrules.perft import perft, perft_divide


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chess rules engine utilities")
    parser.add_argument("--board", type=Path, help="JSON file holding an 8x8 grid of cell labels")
    parser.add_argument("--side", type=parse_color, default=WHITE, help="Side to move (White/Black)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    subparsers.add_parser("show", help="Print the board and game status")

    legal_parser = subparsers.add_parser("legal", help="List legal moves")
    legal_parser.add_argument("square", nargs="?", help="Only moves from this row,col square")

    play_parser = subparsers.add_parser("play", help="Apply moves given as row,col:row,col")
    play_parser.add_argument("moves", nargs="+", help="Moves such as 6,5:5,5")

    perft_parser = subparsers.add_parser("perft", help="Run perft")
    perft_parser.add_argument("depth", type=int, help="Perft depth")
    perft_parser.add_argument("--divide", action="store_true", help="Show per-move split")

    return parser


def load_game(board_path: Path | None, side: Color) -> Game:
    if board_path is None:
        return Game(side_to_move=side)
    labels = json.loads(board_path.read_text(encoding="utf-8"))
    return Game.from_labels(labels, side_to_move=side)


def print_status(game: Game) -> None:
    print(game.board)
    print(f"side={game.side_to_move} status={game.status()} check={game.in_check()}")
    winner = game.winner()
    if winner is not None:
        print(f"winner={winner}")


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        game = load_game(args.board, args.side)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))

    if args.command == "legal":
        if args.square:
            try:
                origin = Position.parse(args.square)
            except ValueError as exc:
                parser.error(str(exc))
            for target in sorted(game.legal_moves_for(origin)):
                print(f"{origin} to {target}")
        else:
            for move in sorted(game.all_legal_moves()):
                print(move)
        return 0

    if args.command == "play":
        for text in args.moves:
            from_key, _, to_key = text.partition(":")
            if not game.move_piece(from_key, to_key):
                print(f"rejected {text}", file=sys.stderr)
                print_status(game)
                return 1
        print_status(game)
        return 0

    if args.command == "perft":
        if args.divide:
            for move, count in perft_divide(game.board, game.side_to_move, args.depth).items():
                print(f"{move}: {count}")
        else:
            print(perft(game.board, game.side_to_move, args.depth))
        return 0

    print_status(game)
    return 0


if __name__ == "__main__":
    sys.exit(run())
