"""Utility helpers for the game engine."""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from .board import Board
from .tetromino import Piece, Shape


def collides(board: Board, shape: Shape, anchor_col: int, anchor_row: int) -> bool:
    """Return ``True`` if ``shape`` placed at the given anchor would collide.

    A block collides when it lies left of column ``0``, right of the last
    column, below the last row, or on an occupied cell.  There is no check
    against the top edge: blocks above row ``0`` are allowed and never touch
    the board.  The shape does not have to belong to the active piece, which
    lets callers test a rotation before committing it.
    """

    for local_row, local_col in np.argwhere(shape):
        x = anchor_col + int(local_col)
        y = anchor_row + int(local_row)
        if x < 0 or x >= board.width or y >= board.height:
            return True
        if y >= 0 and board.is_occupied(x, y):
            return True
    return False


def render_grid(board: Board, active: Optional[Piece] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    Renderers can draw the result as a single 2D array without locking the
    piece.  Blocks of the piece that sit above the board are left out.
    """

    grid = board.grid.tolist()
    if active is not None:
        for col, row in active.blocks():
            if board.in_bounds(col, row):
                grid[row][col] = 1
    return grid


def format_grid(grid: List[List[int]]) -> str:
    """Return ``grid`` as text, ``#`` for occupied cells and ``.`` otherwise."""

    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)
