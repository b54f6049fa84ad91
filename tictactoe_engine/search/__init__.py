"""
Search Module

This module implements the adversarial search. The primary algorithm is
minimax with alpha-beta pruning, searched to the end of the game.

Key Components:
    - alpha_beta_search: Returns the optimal next position
    - find_best_move: Same search, plus value and node count
    - max_value / min_value: The mutually recursive pruning search
    - minimax: Unpruned reference search

"""

from tictactoe_engine.search.minimax import (
    alpha_beta_search,
    find_best_move,
    max_value,
    min_value,
    minimax,
)

__all__ = ['alpha_beta_search', 'find_best_move', 'max_value', 'min_value', 'minimax']
