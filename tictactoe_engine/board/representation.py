"""
Board Representation for Display and Input

This module converts positions to and from text, and maps between flat
cell indices and (row, column) coordinates.

Text Format:
    Rendering prints one row per line with cells between bars:

        |x|_|o|
        |_|x|_|
        |o|_|_|

    Parsing accepts that rendering back, or a compact form with rows
    separated by "/":

        "x_o/_x_/o__"

    Cells are "x", "o", and "_" (or ".") for empty; bars and whitespace
    inside a row are ignored.

Cell Indexing:
    - Index 0 = top-left cell
    - Index N*N - 1 = bottom-right cell
    - Row-major order
"""

import re
from typing import Optional, Tuple

from tictactoe_engine.board.state import Mark, Position

SYMBOL_TO_MARK = {
    "_": Mark.EMPTY,
    ".": Mark.EMPTY,
    "x": Mark.X,
    "o": Mark.O,
}


def cell_to_coordinates(index: int, size: int) -> Tuple[int, int]:
    """
    Convert a flat cell index to (row, col) coordinates.

    Args:
        index: Cell index (0 to size*size - 1)
        size: Board dimension

    Returns:
        Tuple of (row, col), both 0-based
    """
    if not 0 <= index < size * size:
        raise ValueError(f"Cell index {index} out of range for size {size}")
    return index // size, index % size


def coordinates_to_cell(row: int, col: int, size: int) -> int:
    """
    Convert (row, col) coordinates to a flat cell index.

    Args:
        row: Row index (0-based)
        col: Column index (0-based)
        size: Board dimension

    Returns:
        Cell index (0 to size*size - 1)
    """
    if not (0 <= row < size and 0 <= col < size):
        raise ValueError(f"Cell ({row}, {col}) out of range for size {size}")
    return row * size + col


def position_to_string(position: Position) -> str:
    """Render a position as bar-separated rows, one per line."""
    lines = []
    for row in position.cells:
        lines.append("|" + "|".join(Mark(int(v)).symbol for v in row) + "|")
    return "\n".join(lines)


def position_from_string(text: str, side_to_move: Optional[Mark] = None) -> Position:
    """
    Parse a board from text.

    Args:
        text: Board rows separated by "/" or newlines
        side_to_move: Mark to move next. When omitted it is inferred from
            the mark counts: equal counts means X to move, one extra mark
            means the other side is to move.

    Returns:
        Parsed Position

    Raises:
        ValueError: If the text contains unknown symbols, the rows are not
            square, or the mark counts cannot come from alternating play
    """
    rows = []
    for raw_row in re.split(r"[/\n]", text.strip()):
        symbols = re.sub(r"[|\s]", "", raw_row).lower()
        if not symbols:
            continue
        row = []
        for symbol in symbols:
            if symbol not in SYMBOL_TO_MARK:
                raise ValueError(f"Unknown board symbol: {symbol!r}")
            row.append(SYMBOL_TO_MARK[symbol])
        rows.append(row)

    if not rows or any(len(row) != len(rows) for row in rows):
        raise ValueError(f"Board must be square, got rows {[len(r) for r in rows]}")

    x_count = sum(row.count(Mark.X) for row in rows)
    o_count = sum(row.count(Mark.O) for row in rows)

    if abs(x_count - o_count) > 1:
        raise ValueError(f"Impossible mark counts: {x_count} x, {o_count} o")

    if side_to_move is None:
        if x_count > o_count:
            side_to_move = Mark.O
        elif o_count > x_count:
            side_to_move = Mark.X
        else:
            side_to_move = Mark.X

    return Position.from_cells(rows, side_to_move)
