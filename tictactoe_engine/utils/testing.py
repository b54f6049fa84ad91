"""
Engine Testing and Benchmarking

This module provides test positions and measurement helpers for checking
that the search plays perfectly and for seeing how much work pruning saves.

Test Suites:
    Tactical positions: small boards where the correct move is known.
       - Wins in one (the engine must take them)
       - Forced blocks (the engine must stop a threat)
       - Fork defence (only edge replies hold the draw)

Measurements:
    - Self-play: optimal play from the empty 3x3 board must end in a draw
    - Pruning comparison: alpha-beta vs plain minimax node counts and values
"""

import random
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from tictactoe_engine.board.representation import position_from_string
from tictactoe_engine.board.state import Mark, Outcome, Position, is_terminal, move_between
from tictactoe_engine.search.minimax import find_best_move, minimax


@dataclass
class TestPosition:
    """
    A test position with expected best move(s).

    Attributes:
        id: Position identifier (e.g., "TT.01")
        board: Board in compact text form, e.g. "xx_/oo_/___"
        best_moves: Acceptable (row, col) cells, 0-based
        description: Human-readable description of the position

    """
    __test__ = False

    id: str
    board: str
    best_moves: List[Tuple[int, int]]
    description: str = ""

    def to_position(self) -> Position:
        return position_from_string(self.board)


@dataclass
class TestResult:
    """
    Result of testing a single position.

    Attributes:
        position: The test position
        found_move: Cell the engine played, (row, col)
        value: Minimax value of the position
        correct: Whether the engine played an accepted move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of nodes visited

    """
    __test__ = False

    position: TestPosition
    found_move: Tuple[int, int]
    value: float
    correct: bool
    time_taken: float
    nodes_searched: int = 0


TACTICAL_POSITIONS = [
    TestPosition(
        id="TT.01",
        board="xx_/oo_/___",
        best_moves=[(0, 2)],
        description="X wins at once instead of blocking O's row"
    ),
    TestPosition(
        id="TT.02",
        board="oo_/xx_/x__",
        best_moves=[(0, 2)],
        description="O completes the top row"
    ),
    TestPosition(
        id="TT.03",
        board="oo_/_x_/___",
        best_moves=[(0, 2)],
        description="X must block the top row"
    ),
    TestPosition(
        id="TT.04",
        board="xx_/_o_/___",
        best_moves=[(0, 2)],
        description="O must block the top row"
    ),
    TestPosition(
        id="TT.05",
        board="x__/_o_/__x",
        best_moves=[(0, 1), (1, 0), (1, 2), (2, 1)],
        description="O answers opposite corners on an edge; a corner loses to a fork"
    ),
    TestPosition(
        id="TT.06",
        board="xxx_/ooo_/xo__/o___",
        best_moves=[(0, 3)],
        description="4x4: X completes the top row before O completes two lines"
    ),
]


def evaluate_position(
    position: TestPosition,
    rng: Optional[random.Random] = None,
    verbose: bool = False,
) -> TestResult:
    """
    Evaluate a single test position.

    Args:
        position: Test position to evaluate
        rng: Random generator for successor order
        verbose: If True, print detailed output

    Returns:
        TestResult with engine's move and whether it was correct
    """
    board = position.to_position()

    if verbose:
        print(f"\nTesting {position.id}: {position.description}")
        print(f"Board: {position.board}")
        print(f"Expected moves: {position.best_moves}")

    start_time = time.time()
    best_position, value, nodes = find_best_move(board, rng=rng)
    time_taken = time.time() - start_time

    found_move = move_between(board, best_position)
    correct = found_move in position.best_moves

    if verbose:
        print(f"Engine found: {found_move} (value: {value})")
        print(f"Nodes searched: {nodes:,}")
        print(f"Time: {time_taken:.3f}s")
        print(f"Result: {'✓ CORRECT' if correct else '✗ WRONG'}")

    return TestResult(
        position=position,
        found_move=found_move,
        value=value,
        correct=correct,
        time_taken=time_taken,
        nodes_searched=nodes,
    )


def run_tactics_suite(
    positions: Optional[List[TestPosition]] = None,
    rng: Optional[random.Random] = None,
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    Run the tactical test suite.

    Args:
        positions: Positions to test (default: TACTICAL_POSITIONS)
        rng: Random generator for successor order
        verbose: If True, print detailed results

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of TestResult objects
            - avg_time: Average time per position
    """
    if positions is None:
        positions = TACTICAL_POSITIONS

    if verbose:
        print("=" * 70)
        print("TACTICAL TEST SUITE")
        print("=" * 70)

    results = [evaluate_position(p, rng=rng, verbose=verbose) for p in positions]

    correct_count = sum(1 for r in results if r.correct)
    total_time = sum(r.time_taken for r in results)
    percentage = 100 * correct_count / len(positions) if positions else 0.0
    avg_time = total_time / len(positions) if positions else 0.0

    if verbose:
        print("\n" + "=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Score: {correct_count}/{len(positions)} ({percentage:.1f}%)")
        print(f"Average time: {avg_time:.3f}s")
        print(f"Total time: {total_time:.3f}s")

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': percentage,
        'results': results,
        'avg_time': avg_time,
    }


def play_self_play_game(
    size: int = 3,
    rng: Optional[random.Random] = None,
    first: Mark = Mark.X,
) -> Tuple[Outcome, List[Position]]:
    """
    Let the engine play both sides from the empty board.

    Args:
        size: Board dimension
        rng: Random generator for successor order
        first: Mark that moves first

    Returns:
        Tuple of (outcome, positions) where positions starts with the empty
        board and ends with the final position
    """
    if rng is None:
        rng = random.Random()

    position = Position.empty(size, first)
    history = [position]

    terminal, outcome = is_terminal(position)
    while not terminal:
        position, _, _ = find_best_move(position, position.side_to_move == Mark.X, rng)
        history.append(position)
        terminal, outcome = is_terminal(position)

    return outcome, history


def compare_pruning(
    position: Position,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Search a position with and without pruning.

    Args:
        position: Position to search (side to move decides who maximizes)
        rng: Random generator for successor order

    Returns:
        Dictionary with:
            - alpha_beta_value / minimax_value: Root values (always equal)
            - alpha_beta_nodes / minimax_nodes: Positions visited
            - alpha_beta_time / minimax_time: Seconds spent
    """
    if rng is None:
        rng = random.Random()

    start_time = time.time()
    _, alpha_beta_value, alpha_beta_nodes = find_best_move(position, rng=rng)
    alpha_beta_time = time.time() - start_time

    nodes = [0]
    start_time = time.time()
    minimax_value, _ = minimax(position, rng=rng, nodes_searched=nodes)
    minimax_time = time.time() - start_time

    return {
        'alpha_beta_value': alpha_beta_value,
        'minimax_value': minimax_value,
        'alpha_beta_nodes': alpha_beta_nodes,
        'minimax_nodes': nodes[0],
        'alpha_beta_time': alpha_beta_time,
        'minimax_time': minimax_time,
    }
