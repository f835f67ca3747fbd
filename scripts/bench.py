#!/usr/bin/env python3
"""Generate reproducible benchmark CSVs for the rules engine."""

from __future__ import annotations

import argparse
import csv
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from chessrules.constants import BLACK, WHITE
from chessrules.game import Game
from chessrules.move import Move
from chessrules.perft import perft


@dataclass(frozen=True)
class PositionCase:
    name: str
    moves: tuple[tuple[str, str], ...]


def _write_csv(path: Path, fieldnames: list[str], rows: list[dict[str, object]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def build_game(case: PositionCase) -> Game:
    game = Game()
    for from_square, to_square in case.moves:
        if not game.attempt_move(Move.from_squares(from_square, to_square)):
            raise ValueError(f"{case.name}: illegal setup move {from_square}{to_square}")
    return game


def run_perft_bench(depths_by_case: dict[PositionCase, list[int]]) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for case, depths in depths_by_case.items():
        for depth in depths:
            game = build_game(case)
            start = perf_counter()
            nodes = perft(game.board, game.side_to_move, depth)
            elapsed_ms = (perf_counter() - start) * 1000.0
            nps = int(nodes / max(elapsed_ms / 1000.0, 1e-9))
            rows.append(
                {
                    "position": case.name,
                    "depth": depth,
                    "nodes": nodes,
                    "elapsed_ms": round(elapsed_ms, 3),
                    "nps": nps,
                }
            )
    return rows


def run_legality_bench(cases: list[PositionCase], repeats: int) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    for case in cases:
        game = build_game(case)
        for side in (WHITE, BLACK):
            sided = Game(game.board.copy(), side)
            start = perf_counter()
            for _ in range(repeats):
                moves = sided.all_legal_moves()
            elapsed_ms = (perf_counter() - start) * 1000.0
            rows.append(
                {
                    "position": case.name,
                    "side": side.value,
                    "legal_moves": len(moves),
                    "repeats": repeats,
                    "elapsed_ms": round(elapsed_ms, 3),
                    "ms_per_call": round(elapsed_ms / repeats, 3),
                }
            )
    return rows


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate rules engine benchmark CSV files")
    parser.add_argument(
        "--metrics-dir",
        default=str(ROOT / "docs" / "metrics"),
        help="Output directory for CSV metrics",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=50,
        help="Legal move generation calls per position and side",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    metrics_dir = Path(args.metrics_dir)

    start = PositionCase("start", ())
    open_game = PositionCase(
        "open_game",
        (("e2", "e4"), ("e7", "e5"), ("g1", "f3"), ("b8", "c6"), ("f1", "c4"), ("g8", "f6")),
    )

    perft_rows = run_perft_bench(
        {
            start: [1, 2, 3],
            # Depth 3 already dominates the run on the open position.
            open_game: [1, 2, 3],
        }
    )
    legality_rows = run_legality_bench([start, open_game], repeats=args.repeats)

    perft_path = metrics_dir / "perft_metrics.csv"
    legality_path = metrics_dir / "legality_metrics.csv"

    _write_csv(
        perft_path,
        fieldnames=["position", "depth", "nodes", "elapsed_ms", "nps"],
        rows=perft_rows,
    )
    _write_csv(
        legality_path,
        fieldnames=["position", "side", "legal_moves", "repeats", "elapsed_ms", "ms_per_call"],
        rows=legality_rows,
    )

    print(f"wrote {perft_path}")
    print(f"wrote {legality_path}")


if __name__ == "__main__":
    main()
