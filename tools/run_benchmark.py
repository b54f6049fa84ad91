#!/usr/bin/env python3
"""
Tactical Benchmark Runner

Runs the tactical test suite and compares alpha-beta against plain minimax
on a set of positions to show how many nodes pruning saves.

Usage:
    python tools/run_benchmark.py [--seed 42] [--verbose]
"""

import sys
import argparse
import random
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from tictactoe_engine.board.representation import position_from_string
from tictactoe_engine.board.state import Mark, Position
from tictactoe_engine.utils.testing import compare_pruning, run_tactics_suite

PRUNING_POSITIONS = [
    ("empty 3x3", Position.empty(3, Mark.X)),
    ("centre opening", position_from_string("___/_x_/___")),
    ("corner opening", position_from_string("x__/___/___")),
    ("opposite corners", position_from_string("x__/_o_/__x")),
]


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_benchmark(seed: int, verbose: bool = False):
    """
    Run the tactical suite and the pruning comparison.

    Args:
        seed: Seed for successor shuffling
        verbose: If True, print detailed results for each position
    """
    rng = random.Random(seed)

    print("=" * 80)
    print("TIC-TAC-TOE ENGINE BENCHMARK")
    print("=" * 80)
    print("Search: Minimax with Alpha-Beta Pruning (full depth)")
    print(f"Seed: {seed}")
    print("=" * 80)

    suite = run_tactics_suite(rng=rng, verbose=verbose)
    print(f"\nTactics: {suite['score']}/{suite['total']} ({suite['percentage']:.1f}%)")
    print(f"Avg time per position: {format_time(suite['avg_time'])}")

    failed = [r for r in suite['results'] if not r.correct]
    if failed:
        print("\n  Failed positions:")
        for r in failed:
            print(f"    {r.position.id}: Expected {r.position.best_moves}, got {r.found_move}")

    print("\n" + "=" * 80)
    print("PRUNING COMPARISON")
    print("=" * 80)
    print(f"{'Position':<20} {'Value':<8} {'AB nodes':>12} {'MM nodes':>12} {'Saved':>8} {'AB time':>10} {'MM time':>10}")
    print("-" * 80)

    mismatches = 0
    for name, position in PRUNING_POSITIONS:
        r = compare_pruning(position, rng=rng)
        if r['alpha_beta_value'] != r['minimax_value']:
            mismatches += 1
        saved = 100 * (1 - r['alpha_beta_nodes'] / r['minimax_nodes'])
        print(
            f"{name:<20} {r['alpha_beta_value']:<8} {r['alpha_beta_nodes']:>12,} "
            f"{r['minimax_nodes']:>12,} {saved:>7.1f}% "
            f"{format_time(r['alpha_beta_time']):>10} {format_time(r['minimax_time']):>10}"
        )

    print("=" * 80)
    if mismatches:
        print(f"WARNING: {mismatches} position(s) where pruning changed the value")
    return suite['score'] == suite['total'] and mismatches == 0


def main():
    parser = argparse.ArgumentParser(
        description="Run the tactical suite and pruning comparison",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed for successor shuffling",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed results for each position",
    )

    args = parser.parse_args()
    ok = run_benchmark(args.seed, verbose=args.verbose)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
