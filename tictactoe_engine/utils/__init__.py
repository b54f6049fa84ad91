"""
Utilities Module

This module provides utility functions for testing and benchmarking the
engine.

Key Components:
    - Tactical test suite: positions with known best moves
    - Self-play: the engine against itself from the empty board
    - Pruning comparison: alpha-beta vs plain minimax

Success Metrics:
    - Tactical suite: every position solved
    - Self-play on 3x3: every game drawn
"""

from tictactoe_engine.utils.testing import (
    compare_pruning,
    evaluate_position,
    play_self_play_game,
    run_tactics_suite,
)

__all__ = [
    'compare_pruning',
    'evaluate_position',
    'play_self_play_game',
    'run_tactics_suite',
]
