"""Board representation for the playfield."""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Shape


# Default dimensions of the board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]

EMPTY = 0
OCCUPIED = 1


def create_empty_grid(cols: int = WIDTH, rows: int = HEIGHT) -> Grid:
    """Return a new empty grid of ``rows`` rows by ``cols`` columns."""

    return np.zeros((rows, cols), dtype=np.uint8)


def compact_rows(grid: Grid) -> Tuple[Grid, int]:
    """Drop every full row of ``grid`` and refill from the top.

    Returns the compacted grid together with the number of rows removed.  The
    remaining rows keep their relative order and the result always has the
    same shape as ``grid``.  A row with no columns has no empty cell and so
    counts as full.
    """

    full_rows = np.all(grid != EMPTY, axis=1)
    cleared = int(np.count_nonzero(full_rows))
    if not cleared:
        return grid, 0
    remaining = grid[~full_rows]
    new_rows = np.zeros((cleared, grid.shape[1]), dtype=grid.dtype)
    return np.vstack((new_rows, remaining)), cleared


class Board:
    """Grid of settled cells, row ``0`` at the top."""

    def __init__(self, cols: int = WIDTH, rows: int = HEIGHT) -> None:
        self.grid: Grid = create_empty_grid(cols, rows)

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_occupied(self, col: int, row: int) -> bool:
        """Return ``True`` if the cell at ``(col, row)`` is occupied.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        if not self.in_bounds(col, row):
            raise IndexError("Cell out of bounds")
        return bool(self.grid[row, col] != EMPTY)

    def merge(self, shape: Shape, anchor_col: int, anchor_row: int) -> None:
        """Copy the occupied cells of ``shape`` into the grid.

        The caller is expected to have checked for collisions already.  Any
        cell landing outside the board raises before the grid is modified.

        Raises:
            IndexError: If a block of ``shape`` falls outside the board.
        """

        local = np.argwhere(shape)
        if local.size == 0:
            return

        rows = local[:, 0] + anchor_row
        cols = local[:, 1] + anchor_col
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")

        self.grid[rows, cols] = OCCUPIED

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed."""

        self.grid, cleared = compact_rows(self.grid)
        return cleared
