"""Shape catalog and the active falling piece.

Each of the seven shapes is stored as a small 2D occupancy array describing the
piece relative to its own top-left origin.  The catalog templates are
read-only; pieces always work on a private copy obtained through
:func:`clone_shape` so that rotating a piece never alters the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Tuple

import numpy as np
from numpy.typing import NDArray

Shape = NDArray[np.uint8]


class ShapeName(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    L = "L"
    J = "J"
    T = "T"
    S = "S"
    Z = "Z"


def _template(rows: List[List[int]]) -> Shape:
    shape = np.array(rows, dtype=np.uint8)
    shape.flags.writeable = False
    return shape


# Spawn orientation of every shape.
_TEMPLATES: Mapping[ShapeName, Shape] = MappingProxyType(
    {
        ShapeName.I: _template([[1, 1, 1, 1]]),
        ShapeName.O: _template([[1, 1], [1, 1]]),
        ShapeName.L: _template([[1, 0], [1, 0], [1, 1]]),
        ShapeName.J: _template([[0, 1], [0, 1], [1, 1]]),
        ShapeName.T: _template([[1, 1, 1], [0, 1, 0]]),
        ShapeName.S: _template([[0, 1, 1], [1, 1, 0]]),
        ShapeName.Z: _template([[1, 1, 0], [0, 1, 1]]),
    }
)


def shapes_by_name() -> Mapping[ShapeName, Shape]:
    """Return the read-only mapping of shape templates."""

    return _TEMPLATES


def clone_shape(name: ShapeName) -> Shape:
    """Return a fresh, writable copy of the template for ``name``.

    Raises:
        KeyError: If ``name`` is not one of the catalog shapes.
    """

    return np.array(_TEMPLATES[name], dtype=np.uint8, copy=True)


def rotate(shape: Shape) -> Shape:
    """Return ``shape`` rotated by a quarter turn.

    The rotation transposes the layout and then reverses the order of the
    resulting rows.  A new array is returned and ``shape`` itself is left
    untouched, so the result can be tested for collisions before it is
    committed.  Four successive rotations give back the original layout.
    """

    return np.array(shape.T[::-1], dtype=np.uint8, copy=True)


@dataclass
class Piece:
    """Active falling piece.

    ``col`` and ``row`` form the anchor: the board coordinate of the top-left
    corner of ``shape``.
    """

    name: ShapeName
    shape: Shape
    col: int = 0
    row: int = 0

    @classmethod
    def from_catalog(cls, name: ShapeName, col: int = 0, row: int = 0) -> "Piece":
        shape = clone_shape(name)
        return cls(ShapeName(name), shape, col, row)

    def move(self, dx: int, dy: int) -> None:
        """Shift the anchor by ``dx`` columns and ``dy`` rows."""

        self.col += dx
        self.row += dy

    def rotated(self) -> Shape:
        """Return the layout this piece would have after one rotation."""

        return rotate(self.shape)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the ``(col, row)`` board coordinates of the occupied cells."""

        return [
            (self.col + int(local_col), self.row + int(local_row))
            for local_row, local_col in np.argwhere(self.shape)
        ]
