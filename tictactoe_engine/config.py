"""
Engine configuration.
"""

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from tictactoe_engine.board.state import MIN_BOARD_SIZE

logger = logging.getLogger(__name__)

# Largest board the full-depth search finishes on in reasonable time
MAX_PRACTICAL_BOARD_SIZE = 3


@dataclass
class EngineConfig:
    """Configuration for a game session.

    Board size, randomness and logging settings in one place, so a game
    can be reproduced from its config alone.
    """

    board_size: int = 3
    """Board dimension N (N x N board, must be >= 3)"""

    seed: Optional[int] = None
    """Seed for coin tosses and successor shuffling (None for random)"""

    step: bool = False
    """Wait for Enter between moves in bot vs bot games"""

    debug: bool = False
    """Log at DEBUG level instead of INFO"""

    log_dir: Path = field(default_factory=lambda: Path.home() / ".tictactoe")
    """Directory for the engine log file"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.log_dir = Path(self.log_dir)

        if not isinstance(self.board_size, int) or self.board_size < MIN_BOARD_SIZE:
            raise ValueError(
                f"board_size must be an integer >= {MIN_BOARD_SIZE}, got {self.board_size}"
            )

        if self.board_size > MAX_PRACTICAL_BOARD_SIZE:
            logger.warning(
                f"board_size={self.board_size}: full-depth search may not finish "
                f"in reasonable time above {MAX_PRACTICAL_BOARD_SIZE}"
            )

    def make_rng(self) -> random.Random:
        """Create the session's random generator."""
        return random.Random(self.seed)

    def __repr__(self) -> str:
        return (
            f"EngineConfig(board_size={self.board_size}, seed={self.seed}, "
            f"step={self.step}, debug={self.debug}, log_dir={self.log_dir})"
        )
