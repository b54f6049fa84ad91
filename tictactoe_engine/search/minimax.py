"""
Minimax Search with Alpha-Beta Pruning

This module implements the adversarial search that picks the bot's moves.
The game tree of a small board is explored to the end, so the value
returned is the exact game-theoretic value, not a heuristic estimate.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Alpha-Beta: Prunes branches that cannot change the result
    - Tie-break: Among equal values the first successor seen is kept.
      Successors come out of generate_successors() shuffled, so repeated
      searches can pick different (equally optimal) moves.

Values:
    Scores come from utility() and are always from X's point of view.
    X maximizes, O minimizes.

Algorithm Complexity:
    - Minimax: O(b^d) with b = d = number of empty cells
    - Alpha-Beta: O(b^(d/2)) with perfect move ordering

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import logging
import random
import time
from typing import List, Optional, Tuple

from tictactoe_engine.board.state import (
    Mark,
    Position,
    generate_successors,
    is_terminal,
    utility,
)

logger = logging.getLogger(__name__)

SearchResult = Tuple[float, Position]


def max_value(
    position: Position,
    alpha: float,
    beta: float,
    rng: random.Random,
    nodes_searched: Optional[List[int]] = None,
) -> SearchResult:
    """
    Best result X can force from this position.

    Args:
        position: Position with X to choose
        alpha: Best value X can already guarantee higher up the tree
        beta: Best value O can already guarantee higher up the tree
        rng: Random generator for successor order
        nodes_searched: Optional mutable list [count] of positions visited

    Returns:
        (value, chosen successor). On a terminal position the position
        itself is returned with its utility.
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    terminal, outcome = is_terminal(position)
    if terminal:
        return utility(position, outcome), position

    best_value, best_position = -float("inf"), None
    for successor in generate_successors(position, rng):
        value, _ = min_value(successor, alpha, beta, rng, nodes_searched)
        if value > best_value:
            best_value, best_position = value, successor

        # Beta cutoff: O already has something better elsewhere
        if best_value >= beta:
            return best_value, best_position

        if best_value > alpha:
            alpha = best_value

    return best_value, best_position


def min_value(
    position: Position,
    alpha: float,
    beta: float,
    rng: random.Random,
    nodes_searched: Optional[List[int]] = None,
) -> SearchResult:
    """
    Best result O can force from this position.

    Mirror image of max_value(): keeps the lowest value and cuts off once
    it drops to alpha or below.
    """
    if nodes_searched is not None:
        nodes_searched[0] += 1

    terminal, outcome = is_terminal(position)
    if terminal:
        return utility(position, outcome), position

    best_value, best_position = float("inf"), None
    for successor in generate_successors(position, rng):
        value, _ = max_value(successor, alpha, beta, rng, nodes_searched)
        if value < best_value:
            best_value, best_position = value, successor

        # Alpha cutoff: X already has something better elsewhere
        if best_value <= alpha:
            return best_value, best_position

        if best_value < beta:
            beta = best_value

    return best_value, best_position


def minimax(
    position: Position,
    maximizing: Optional[bool] = None,
    rng: Optional[random.Random] = None,
    nodes_searched: Optional[List[int]] = None,
) -> SearchResult:
    """
    Plain minimax without pruning.

    Visits the whole game tree below the position. Used as a reference to
    check that pruning never changes the value and to measure how many
    nodes pruning saves.

    Args:
        position: Root position
        maximizing: True to search for X, False for O (default: side to move)
        rng: Random generator for successor order
        nodes_searched: Optional mutable list [count] of positions visited

    Returns:
        (value, chosen successor) with the same first-seen tie-break as
        the pruned search
    """
    if maximizing is None:
        maximizing = position.side_to_move == Mark.X
    if rng is None:
        rng = random.Random()
    if nodes_searched is not None:
        nodes_searched[0] += 1

    terminal, outcome = is_terminal(position)
    if terminal:
        return utility(position, outcome), position

    best_value = -float("inf") if maximizing else float("inf")
    best_position = None
    for successor in generate_successors(position, rng):
        value, _ = minimax(successor, not maximizing, rng, nodes_searched)
        if maximizing and value > best_value:
            best_value, best_position = value, successor
        elif not maximizing and value < best_value:
            best_value, best_position = value, successor

    return best_value, best_position


def find_best_move(
    position: Position,
    maximizing: Optional[bool] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Position, float, int]:
    """
    Search the position and return the chosen successor with statistics.

    Args:
        position: Current position
        maximizing: True if the side to choose is X (default: side to move)
        rng: Random generator for successor order (fresh one if None)

    Returns:
        Tuple of (best_position, value, nodes)
            - best_position: Successor one ply deeper, or the position
              itself if it is already terminal
            - value: Exact minimax value from X's point of view
            - nodes: Number of positions visited
    """
    if maximizing is None:
        maximizing = position.side_to_move == Mark.X
    if rng is None:
        rng = random.Random()

    nodes = [0]
    start_time = time.time()

    if maximizing:
        value, best_position = max_value(
            position, -float("inf"), float("inf"), rng, nodes
        )
    else:
        value, best_position = min_value(
            position, -float("inf"), float("inf"), rng, nodes
        )

    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.debug(
        f"Search complete: maximizing={maximizing}, value={value}, "
        f"nodes={nodes[0]}, time={elapsed_ms}ms"
    )

    return best_position, value, nodes[0]


def alpha_beta_search(
    position: Position,
    maximizing: Optional[bool] = None,
    rng: Optional[random.Random] = None,
) -> Position:
    """
    Return the optimal next position.

    Args:
        position: Current position
        maximizing: True if the side to choose is X (default: side to move)
        rng: Random generator for successor order

    Returns:
        The chosen successor (the position itself if already terminal)
    """
    best_position, _, _ = find_best_move(position, maximizing, rng)
    return best_position
