"""
Console Interface

This module provides the terminal front end: a game loop for engine
self-play and for human vs engine games, human move parsing, and logging
setup.

Usage:
    python -m tictactoe_engine.cli          # human vs engine
    python -m tictactoe_engine.cli bot      # engine vs engine
    python -m tictactoe_engine.cli --size 4 --seed 7 bot
"""

from tictactoe_engine.cli.interface import GameSession, main, parse_move

__all__ = ['GameSession', 'main', 'parse_move']
