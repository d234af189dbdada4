#!/usr/bin/env python3

"""Tally which player each turn lands on over many simulated rounds.

Usage:
    python scripts/check_selection.py --players 6 --rounds 20000
"""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

import numpy as np

if __package__ is None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))

from spinbottle.dynamic.ring import MAX_PLAYERS, MIN_PLAYERS, compute_layout
from spinbottle.dynamic.selection import SelectionEngine


def tally(players: int, rounds: int, seed: int) -> np.ndarray:
    """Return a (turn, player) count matrix."""

    engine = SelectionEngine(compute_layout(players), rng=random.Random(seed))
    counts = np.zeros((players, players), dtype=np.int64)
    for _ in range(rounds):
        engine.reset()
        for turn in range(players):
            result = engine.spin()
            engine.commit_selection(result.selected_id)
            counts[turn, result.selected_id - 1] += 1
    return counts


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Check turn distribution of the selection engine")
    parser.add_argument("--players", type=int, default=6, choices=range(MIN_PLAYERS, MAX_PLAYERS + 1))
    parser.add_argument("--rounds", type=int, default=10_000)
    parser.add_argument("--seed", type=int, default=101)
    args = parser.parse_args(argv)

    counts = tally(args.players, args.rounds, args.seed)
    shares = counts / args.rounds
    expected = 1.0 / args.players
    worst = float(np.max(np.abs(shares - expected)))

    print(f"players={args.players} rounds={args.rounds} expected share={expected:.4f}")
    for turn, row in enumerate(shares, 1):
        cells = " ".join(f"{share:.3f}" for share in row)
        print(f"turn {turn:>2}: {cells}")
    print(f"max deviation from uniform: {worst:.4f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
