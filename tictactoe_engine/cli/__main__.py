"""
Main entry point for playing tic-tac-toe in the terminal.

Usage:
    python -m tictactoe_engine.cli [bot|human]
"""

from tictactoe_engine.cli.interface import main

if __name__ == "__main__":
    main()
