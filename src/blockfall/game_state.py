"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import random

from .board import Board
from .config import GameConfig
from .tetromino import Piece, Shape, ShapeName
from .utils import collides


class Phase(str, Enum):
    """Lifecycle of a game session."""

    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Mutable state for a game session.

    ``rng`` picks the spawned shapes; pass a seeded :class:`random.Random` for
    a reproducible sequence.  When omitted one is created from
    ``config.seed``.
    """

    config: GameConfig = field(default_factory=GameConfig)
    rng: Optional[random.Random] = None
    board: Board = field(init=False)
    active: Optional[Piece] = None
    score: int = 0
    phase: Phase = Phase.RUNNING

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.config.seed)
        self.board = Board(self.config.cols, self.config.rows)

    def _random_shape(self) -> ShapeName:
        """Return a uniformly chosen shape name."""

        return self.rng.choice(list(ShapeName))

    def spawn_piece(self) -> Piece:
        """Spawn and return a new active piece.

        The piece is a fresh copy of a random catalog shape anchored on row
        ``0`` just left of the board's centre column.  It replaces whatever
        piece was active before.
        """

        self.active = Piece.from_catalog(self._random_shape(), self.config.spawn_col, 0)
        return self.active

    def piece_collides(self, shape: Optional[Shape] = None, dx: int = 0, dy: int = 0) -> bool:
        """Return ``True`` if the active piece would collide once offset.

        ``shape`` replaces the active piece's layout for the test, which is how
        rotations are checked before they are applied.
        """

        if self.active is None:
            raise RuntimeError("No active piece")
        if shape is None:
            shape = self.active.shape
        return collides(self.board, shape, self.active.col + dx, self.active.row + dy)

    def lock_active(self) -> int:
        """Merge the active piece into the board, clear rows and score them.

        Returns the number of cleared rows.  The active slot is left pointing
        at the locked piece until the next :meth:`spawn_piece`.
        """

        if self.active is None:
            raise RuntimeError("No active piece")
        self.board.merge(self.active.shape, self.active.col, self.active.row)
        cleared = self.board.clear_full_rows()
        self.score += cleared * self.config.points_per_line
        return cleared
