"""
Console Game Interface

This module runs games in the terminal, either the engine against itself or
a human against the engine.

Modes:
    - bot: Engine plays both sides (X moves first)
    - human: Human against the engine; two coin tosses decide who moves
      first and who plays X. Any other mode token falls back to this one.

Human Input:
    Moves are typed as "row column", both 1-based:

        insert row and column of a free square [(x,y), 1<=x<=3, 1<=y<=3]
        2 2

    Malformed input, out-of-range cells and occupied cells are rejected and
    the prompt is repeated; the engine never sees an invalid move.

Logging:
    Session events go to <log_dir>/engine.log (default ~/.tictactoe).
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from tictactoe_engine.board.representation import position_to_string
from tictactoe_engine.board.state import (
    Mark,
    Outcome,
    Position,
    apply_move,
    is_terminal,
    move_between,
)
from tictactoe_engine.config import EngineConfig
from tictactoe_engine.search.minimax import find_best_move

MODES = ("bot", "human")
DEFAULT_MODE = "human"


def setup_logger(debug=False, log_dir: Optional[Path] = None):
    """
    Setup file-based logger for game sessions.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level
        log_dir: Directory for engine.log (default: ~/.tictactoe)

    Returns:
        Configured logger instance
    """
    log_dir = Path(log_dir) if log_dir else Path.home() / ".tictactoe"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "engine.log"

    logger = logging.getLogger("tictactoe_engine")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def parse_move(text: str, size: int) -> Tuple[int, int]:
    """
    Parse a human move typed as "row column" (1-based).

    Args:
        text: Raw input line, e.g. "2 3" or "2,3"
        size: Board dimension

    Returns:
        Tuple of (row, col), 0-based

    Raises:
        ValueError: If the text is not two integers in range
    """
    tokens = text.replace(",", " ").split()
    if len(tokens) != 2:
        raise ValueError(f"Expected two numbers, got {text!r}")

    row, col = (int(token) for token in tokens)
    if not (1 <= row <= size and 1 <= col <= size):
        raise ValueError(f"Row and column must be between 1 and {size}")

    return row - 1, col - 1


class GameSession:
    """
    Console game driver.

    Holds the current position and alternates between the engine and the
    human (or the engine and itself) until the game is over.

    Attributes:
        config: Session configuration
        rng: Random generator for coin tosses and the engine's move order
        logger: Session logger

    Methods:
        run: Play one game in the given mode
        play_bot_vs_bot: Engine against itself
        play_human_vs_bot: Human against the engine
        read_human_move: Prompt until the human enters a legal move
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize a game session.

        Args:
            config: Session configuration (default: EngineConfig())
        """
        self.config = config if config else EngineConfig()
        self.rng = self.config.make_rng()
        self.logger = setup_logger(debug=self.config.debug, log_dir=self.config.log_dir)
        self.logger.info("=== Tic-tac-toe session started ===")
        self.logger.info(f"Config: {self.config}")

    def run(self, mode: str = DEFAULT_MODE) -> Outcome:
        """
        Play one game.

        Args:
            mode: "bot" for self-play, "human" for human vs engine. Unknown
                modes fall back to "human".

        Returns:
            Final outcome of the game
        """
        if mode not in MODES:
            self.logger.warning(f"Unknown mode {mode!r}, using {DEFAULT_MODE!r}")
            mode = DEFAULT_MODE

        self.logger.info(f"Starting game: mode={mode}")
        try:
            if mode == "bot":
                outcome = self.play_bot_vs_bot()
            else:
                outcome = self.play_human_vs_bot()
        except Exception as e:
            self.logger.error(f"Game aborted: {e}", exc_info=True)
            raise

        self.logger.info(f"Game over: {outcome.value}")
        return outcome

    def play_bot_vs_bot(self) -> Outcome:
        """Let the engine play both sides, X first."""
        position = Position.empty(self.config.board_size, Mark.X)
        self.show(position)

        terminal, outcome = is_terminal(position)
        while not terminal:
            position = self.bot_move(position)
            if self.config.step:
                input()
            terminal, outcome = is_terminal(position)

        self.announce(outcome)
        return outcome

    def play_human_vs_bot(self) -> Outcome:
        """Play the human against the engine after two coin tosses."""
        human_first = self.toss()
        human_mark = Mark.X if self.toss() else Mark.O
        bot_mark = human_mark.opponent()

        print(f"You are with {human_mark.symbol}, bot is with {bot_mark.symbol}")
        print("You go first!" if human_first else "Bot goes first!")
        self.logger.info(
            f"Human plays {human_mark.symbol}, "
            f"{'human' if human_first else 'bot'} moves first"
        )

        first_mark = human_mark if human_first else bot_mark
        position = Position.empty(self.config.board_size, first_mark)
        self.show(position)

        terminal, outcome = is_terminal(position)
        while not terminal:
            if position.side_to_move == human_mark:
                position = self.read_human_move(position)
                self.show(position)
            else:
                position = self.bot_move(position)
            terminal, outcome = is_terminal(position)

        self.announce(outcome)
        return outcome

    def read_human_move(self, position: Position) -> Position:
        """
        Prompt until the human enters a legal move, then apply it.

        Returns:
            Position after the human's move
        """
        size = position.size
        while True:
            print(
                f"insert row and column of a free square "
                f"[(x,y), 1<=x<={size}, 1<=y<={size}]"
            )
            sys.stdout.flush()
            text = input()
            try:
                row, col = parse_move(text, size)
                new_position = apply_move(position, row, col)
            except ValueError as e:
                self.logger.debug(f"Rejected human move {text!r}: {e}")
                print(f"Invalid move: {e}")
                continue

            self.logger.info(f"Human move: {row + 1} {col + 1}")
            return new_position

    def bot_move(self, position: Position) -> Position:
        """Let the engine move for the side to move and print the result."""
        maximizing = position.side_to_move == Mark.X
        new_position, value, nodes = find_best_move(position, maximizing, self.rng)
        row, col = move_between(position, new_position)

        self.logger.info(
            f"Bot move ({position.side_to_move.symbol}): {row + 1} {col + 1}, "
            f"value={value}, nodes={nodes}"
        )
        print("Bot move:")
        self.show(new_position)
        return new_position

    def toss(self) -> bool:
        return self.rng.random() < 0.5

    def show(self, position: Position):
        print(position_to_string(position))
        print()
        sys.stdout.flush()

    def announce(self, outcome: Outcome):
        if outcome == Outcome.DRAW:
            print("Game ends in a draw!")
        else:
            print(f"{outcome.winner.symbol} wins the game!")
        sys.stdout.flush()


def main(argv: Optional[List[str]] = None):
    """Command line entry point."""
    parser = argparse.ArgumentParser(
        description="Play N×N tic-tac-toe against an optimal engine",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "mode",
        nargs="?",
        default=DEFAULT_MODE,
        help="'bot' for engine self-play, 'human' to play against the engine",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=3,
        help="Board dimension N (N >= 3)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible games",
    )
    parser.add_argument(
        "--step",
        action="store_true",
        help="Wait for Enter between moves in bot mode",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    try:
        config = EngineConfig(
            board_size=args.size,
            seed=args.seed,
            step=args.step,
            debug=args.debug,
        )
    except ValueError as e:
        parser.error(str(e))

    session = GameSession(config)
    session.run(args.mode)
