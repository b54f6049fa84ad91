"""
Board Module

This module provides the game position and the rules of N×N tic-tac-toe,
plus text conversion for display and input.

Key Components:
    - Position: Immutable board, ply count and side to move
    - apply_move / generate_successors: Move application and generation
    - is_terminal / utility: Game-over detection and scoring
    - position_to_string / position_from_string: Text rendering and parsing

Data Flow:
    Position → generate_successors() → [Position, ...] → search
"""

from tictactoe_engine.board.state import (
    Mark,
    Outcome,
    Position,
    apply_move,
    generate_successors,
    is_terminal,
    move_between,
    utility,
)
from tictactoe_engine.board.representation import (
    position_from_string,
    position_to_string,
)

__all__ = [
    'Mark',
    'Outcome',
    'Position',
    'apply_move',
    'generate_successors',
    'is_terminal',
    'move_between',
    'utility',
    'position_from_string',
    'position_to_string',
]
