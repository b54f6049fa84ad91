"""
Board State

This module holds the game position and every rule of the game: applying a
move, generating successors, detecting terminal positions and scoring them.

Mark Encoding:
    EMPTY =  0
    X     =  1  (maximizing player)
    O     = -1  (minimizing player)

With this encoding a line of N cells is complete exactly when the absolute
value of its sum equals N, so terminal detection reduces to a handful of
numpy reductions.

Board Orientation:
    - Row 0 is the top row
    - Column 0 is the left column
    - Anti-diagonal runs from (N-1, 0) to (0, N-1)
"""

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

import numpy as np

MIN_BOARD_SIZE = 3


class Mark(IntEnum):
    """Cell contents, also used to name the side to move."""

    EMPTY = 0
    X = 1
    O = -1

    @property
    def symbol(self) -> str:
        return {0: "_", 1: "x", -1: "o"}[self.value]

    def opponent(self) -> "Mark":
        if self == Mark.X:
            return Mark.O
        if self == Mark.O:
            return Mark.X
        return Mark.EMPTY


class Outcome(Enum):
    """Result reported by is_terminal()."""

    NONE = "none"
    X_WINS = "x"
    O_WINS = "o"
    DRAW = "draw"

    @staticmethod
    def win_for(mark: Mark) -> "Outcome":
        if mark == Mark.X:
            return Outcome.X_WINS
        if mark == Mark.O:
            return Outcome.O_WINS
        raise ValueError("EMPTY cannot win")

    @property
    def winner(self) -> Optional[Mark]:
        if self == Outcome.X_WINS:
            return Mark.X
        if self == Outcome.O_WINS:
            return Mark.O
        return None


@dataclass(frozen=True, eq=False)
class Position:
    """
    Immutable game position.

    Attributes:
        cells: (N, N) int8 array of Mark values, read-only
        plies: Number of marks placed so far (non-empty cells)
        side_to_move: Mark placed by the next move

    Use Position.empty() for the initial position and apply_move() or
    generate_successors() for everything else. from_cells() exists for
    setting up arbitrary positions (tests, puzzles, parsed boards).
    """

    cells: np.ndarray
    plies: int
    side_to_move: Mark

    def __post_init__(self):
        # Own a private copy so no outside reference can alter the grid
        cells = np.array(self.cells, dtype=np.int8)
        cells.flags.writeable = False
        object.__setattr__(self, "cells", cells)

    @classmethod
    def empty(cls, size: int = MIN_BOARD_SIZE, side_to_move: Mark = Mark.X) -> "Position":
        """
        Create the empty starting position.

        Raises:
            ValueError: If size < 3 or side_to_move is EMPTY
        """
        if size < MIN_BOARD_SIZE:
            raise ValueError(f"Board size must be >= {MIN_BOARD_SIZE}, got {size}")
        if side_to_move == Mark.EMPTY:
            raise ValueError("side_to_move must be X or O")
        return cls(np.zeros((size, size), dtype=np.int8), 0, Mark(side_to_move))

    @classmethod
    def from_cells(cls, cells, side_to_move: Mark) -> "Position":
        """
        Create a position from an arbitrary grid of mark values.

        The ply count is derived from the grid, so the plies invariant
        holds by construction.

        Raises:
            ValueError: If the grid is not square, smaller than 3x3, or
                contains values other than -1, 0 and 1
        """
        values = np.array(cells)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise ValueError(f"Board must be square, got shape {values.shape}")
        if values.shape[0] < MIN_BOARD_SIZE:
            raise ValueError(
                f"Board size must be >= {MIN_BOARD_SIZE}, got {values.shape[0]}"
            )
        # Checked before the int8 cast, which would truncate or overflow
        if not np.issubdtype(values.dtype, np.number) or not np.isin(
            values, (Mark.EMPTY, Mark.X, Mark.O)
        ).all():
            raise ValueError("Board contains values other than EMPTY, X and O")
        if side_to_move == Mark.EMPTY:
            raise ValueError("side_to_move must be X or O")
        grid = values.astype(np.int8)
        return cls(grid, int(np.count_nonzero(grid)), Mark(side_to_move))

    @property
    def size(self) -> int:
        return self.cells.shape[0]

    def mark_at(self, row: int, col: int) -> Mark:
        return Mark(int(self.cells[row, col]))

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row, col] == Mark.EMPTY

    def empty_cells(self) -> List[Tuple[int, int]]:
        """Row-major list of (row, col) for every empty cell."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.cells == Mark.EMPTY)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.side_to_move == other.side_to_move
            and self.plies == other.plies
            and np.array_equal(self.cells, other.cells)
        )

    def __hash__(self) -> int:
        return hash((self.cells.tobytes(), self.size, self.side_to_move))

    def __repr__(self) -> str:
        rows = "/".join(
            "".join(Mark(int(v)).symbol for v in row) for row in self.cells
        )
        return f"Position('{rows}', plies={self.plies}, to_move={self.side_to_move.symbol})"


def apply_move(
    position: Position, row: int, col: int, mark: Optional[Mark] = None
) -> Position:
    """
    Place the side to move's mark on an empty cell.

    This is the only way a position advances: successor generation and the
    console driver's human moves both go through here.

    Args:
        position: Parent position (left untouched)
        row: Row index (0-based)
        col: Column index (0-based)
        mark: Optional mark to check against the side to move

    Returns:
        New Position with plies + 1 and the side to move flipped

    Raises:
        ValueError: If the cell is out of range or occupied, or if mark is
            not the side to move
    """
    size = position.size
    if not (0 <= row < size and 0 <= col < size):
        raise ValueError(f"Cell ({row}, {col}) is outside the {size}x{size} board")
    if mark is not None and mark != position.side_to_move:
        raise ValueError(
            f"It is {position.side_to_move.symbol}'s turn, not {Mark(mark).symbol}'s"
        )
    if not position.is_empty(row, col):
        raise ValueError(f"Cell ({row}, {col}) is already occupied")

    cells = position.cells.copy()
    cells[row, col] = position.side_to_move
    return Position(cells, position.plies + 1, position.side_to_move.opponent())


def generate_successors(
    position: Position, rng: Optional[random.Random] = None
) -> List[Position]:
    """
    Generate every position reachable with one move, in random order.

    The shuffle makes the search's first-seen tie-break pick a different
    optimal move from run to run instead of always the top-left one.

    Args:
        position: Parent position
        rng: Random generator used for the shuffle (fresh one if None)

    Returns:
        List of N*N - plies successors; empty when the board is full
    """
    successors = [apply_move(position, row, col) for row, col in position.empty_cells()]
    if rng is None:
        rng = random.Random()
    rng.shuffle(successors)
    return successors


def is_terminal(position: Position) -> Tuple[bool, Outcome]:
    """
    Check whether the game is over.

    Lines are checked in a fixed order: main diagonal, anti-diagonal, rows
    top to bottom, columns left to right. The first complete line decides
    the winner.

    Returns:
        (is_terminal, outcome) where outcome is NONE for live positions
    """
    size = position.size
    if position.plies < 2 * size - 1:
        return False, Outcome.NONE

    cells = position.cells
    sums = np.concatenate(
        (
            [np.trace(cells), np.trace(np.flipud(cells))],
            cells.sum(axis=1),
            cells.sum(axis=0),
        )
    )
    complete = np.flatnonzero(np.abs(sums) == size)
    if complete.size:
        return True, Outcome.win_for(Mark(int(np.sign(sums[complete[0]]))))

    if position.plies == size * size:
        return True, Outcome.DRAW

    return False, Outcome.NONE


def utility(position: Position, outcome: Outcome) -> int:
    """
    Score a position from X's (the maximizer's) point of view.

    Faster wins score higher and slower losses score less negative; the
    N*N + 1 offset keeps every decided game strictly away from a draw.

    Returns:
        (N*N + 1) - plies for an X win, -(N*N + 1) + plies for an O win,
        0 otherwise
    """
    base = position.size * position.size + 1
    if outcome == Outcome.O_WINS:
        return -base + position.plies
    if outcome == Outcome.X_WINS:
        return base - position.plies
    return 0


def move_between(before: Position, after: Position) -> Tuple[int, int]:
    """
    Find the cell filled when going from one position to its successor.

    Raises:
        ValueError: If the positions do not differ by exactly one cell
    """
    if before.size != after.size:
        raise ValueError("Positions have different board sizes")
    changed = np.argwhere(before.cells != after.cells)
    if len(changed) != 1:
        raise ValueError(f"Expected exactly one changed cell, found {len(changed)}")
    row, col = changed[0]
    return int(row), int(col)
