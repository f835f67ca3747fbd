#!/usr/bin/env python3
"""Chart the CSVs written by ``scripts/bench.py`` into one SVG."""

from __future__ import annotations

import argparse
import csv
from itertools import groupby
from pathlib import Path

import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[1]


def read_rows(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return list(csv.DictReader(handle))


def plot_perft(ax: plt.Axes, rows: list[dict[str, str]]) -> None:
    """Elapsed time per perft depth, one line per start position (log scale)."""
    rows = sorted(rows, key=lambda row: (row["position"], int(row["depth"])))
    for position, group in groupby(rows, key=lambda row: row["position"]):
        series = list(group)
        ax.plot(
            [int(row["depth"]) for row in series],
            [float(row["elapsed_ms"]) for row in series],
            marker="s",
            label=position,
        )
    ax.set_yscale("log")
    ax.set_xlabel("perft depth")
    ax.set_ylabel("elapsed (ms)")
    ax.set_title("perft cost")
    ax.legend()


def plot_legality(ax: plt.Axes, rows: list[dict[str, str]]) -> None:
    names = [f"{row['position']} ({row['side']})" for row in rows]
    timings = [float(row["ms_per_call"]) for row in rows]
    bars = ax.barh(names, timings, color="tab:olive")
    ax.bar_label(bars, labels=[f"{row['legal_moves']} legal" for row in rows], padding=3)
    ax.invert_yaxis()
    ax.set_xlabel("ms per all_legal_moves() call")
    ax.set_title("legal move generation")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--metrics-dir", type=Path, default=ROOT / "docs" / "metrics")
    parser.add_argument("--output", type=Path, default=ROOT / "docs" / "visuals" / "rules-benchmarks.svg")
    args = parser.parse_args()

    fig, (left, right) = plt.subplots(1, 2, figsize=(13, 5), layout="constrained")
    plot_perft(left, read_rows(args.metrics_dir / "perft_metrics.csv"))
    plot_legality(right, read_rows(args.metrics_dir / "legality_metrics.csv"))

    args.output.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(args.output)
    plt.close(fig)
    print(f"wrote {args.output}")


if __name__ == "__main__":
    main()
