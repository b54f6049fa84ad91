"""
Tic-tac-toe Engine

An N×N tic-tac-toe player built on exhaustive minimax search with
alpha-beta pruning. A line is won by filling a full row, column or
diagonal.

## Architecture

The engine is organized into several key modules:

1. **board**: Game position and rules
   - Immutable Position backed by a read-only numpy grid
   - Move application, successor generation, terminal detection, utility
   - Text rendering and parsing

2. **search**: Search algorithms
   - Minimax with alpha-beta pruning, searched to the end of the game
   - Unpruned minimax for verification

3. **cli**: Console game loop
   - Engine self-play and human vs engine
   - Human move parsing and validation

4. **utils**: Testing and benchmarking utilities
   - Tactical test positions
   - Self-play and pruning comparison

## Quick Start

### As a Python Library

```python
import random
from tictactoe_engine.board import Position, Mark
from tictactoe_engine.search import find_best_move

position = Position.empty(3, Mark.X)
best, value, nodes = find_best_move(position, rng=random.Random(7))
print(f"Value: {value}, nodes: {nodes}")
```

### In the Terminal

```bash
python -m tictactoe_engine.cli bot
```

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from tictactoe_engine.board import Mark, Outcome, Position
from tictactoe_engine.config import EngineConfig
from tictactoe_engine.search import alpha_beta_search, find_best_move

__all__ = [
    'Mark',
    'Outcome',
    'Position',
    'EngineConfig',
    'alpha_beta_search',
    'find_best_move',
]
