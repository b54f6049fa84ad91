#!/usr/bin/env python3
"""
Self-Play Runner

Plays the engine against itself many times and tallies the outcomes. On a
3x3 board every game must be drawn.

Usage:
    python tools/run_selfplay.py --games 100 [--size 3] [--seed 42]
"""

import sys
import argparse
import logging
import random
from collections import Counter
from pathlib import Path
from typing import Optional

from tqdm import tqdm

sys.path.insert(0, str(Path(__file__).parent.parent))

from tictactoe_engine.board.representation import position_to_string
from tictactoe_engine.board.state import MIN_BOARD_SIZE, Mark, Outcome
from tictactoe_engine.utils.testing import play_self_play_game

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def run_selfplay(games: int, size: int, seed: Optional[int], alternate: bool) -> Counter:
    """
    Play a batch of self-play games.

    Args:
        games: Number of games
        size: Board dimension
        seed: Seed for successor shuffling (None for random)
        alternate: If True, O moves first in every other game

    Returns:
        Counter of Outcome -> number of games
    """
    rng = random.Random(seed)
    tally = Counter()
    openings = Counter()

    for game in tqdm(range(games), desc="Self-play"):
        first = Mark.O if alternate and game % 2 else Mark.X
        outcome, history = play_self_play_game(size, rng, first)
        tally[outcome] += 1
        openings[position_to_string(history[1]).replace("\n", "/")] += 1

        if outcome != Outcome.DRAW:
            logger.warning(f"Game {game} ended {outcome.value}:\n{position_to_string(history[-1])}")

    logger.info(f"Distinct openings played: {len(openings)}")
    return tally


def main():
    parser = argparse.ArgumentParser(
        description="Play the engine against itself",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--games",
        type=int,
        default=100,
        help="Number of games to play",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=3,
        help="Board dimension N",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (None for random)",
    )
    parser.add_argument(
        "--alternate",
        action="store_true",
        help="Let O move first in every other game",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    if args.games <= 0:
        parser.error(f"--games must be positive, got {args.games}")
    if args.size < MIN_BOARD_SIZE:
        parser.error(f"--size must be >= {MIN_BOARD_SIZE}, got {args.size}")

    tally = run_selfplay(args.games, args.size, args.seed, args.alternate)

    print("=" * 60)
    print(f"SELF-PLAY RESULTS ({args.games} games, {args.size}x{args.size})")
    print("=" * 60)
    for outcome in (Outcome.X_WINS, Outcome.O_WINS, Outcome.DRAW):
        count = tally[outcome]
        print(f"  {outcome.value:<6} {count:>6} ({100 * count / args.games:.1f}%)")
    print("=" * 60)


if __name__ == "__main__":
    main()
