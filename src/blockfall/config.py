"""Configuration for a game session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .board import HEIGHT, WIDTH
from .tetromino import shapes_by_name


# Milliseconds between automatic downward moves
TICK_INTERVAL_MS = 500
# Points awarded for every cleared row
POINTS_PER_LINE = 10


def _minimum_size() -> Tuple[int, int]:
    """Return the smallest ``(cols, rows)`` on which every shape can spawn."""

    shapes = shapes_by_name().values()
    width = max(shape.shape[1] for shape in shapes)
    height = max(shape.shape[0] for shape in shapes)
    # The spawn column is ``cols // 2 - 1``; find the first width that fits.
    cols = width
    while cols // 2 - 1 + width > cols:
        cols += 1
    return cols, height


@dataclass(frozen=True)
class GameConfig:
    """Board size, gravity cadence and scoring for one game.

    ``seed`` makes the sequence of spawned shapes reproducible; ``None`` draws
    from the operating system's entropy.
    """

    cols: int = WIDTH
    rows: int = HEIGHT
    tick_interval_ms: float = TICK_INTERVAL_MS
    points_per_line: int = POINTS_PER_LINE
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        # Every catalog shape must fit on an empty board at the spawn anchor.
        min_cols, min_rows = _minimum_size()
        if self.cols < min_cols or self.rows < min_rows:
            raise ValueError(
                f"Board must be at least {min_cols}x{min_rows}, got {self.cols}x{self.rows}"
            )
        if self.tick_interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {self.tick_interval_ms}")
        if self.points_per_line < 0:
            raise ValueError(f"Points per line must not be negative, got {self.points_per_line}")

    @property
    def spawn_col(self) -> int:
        """Anchor column of freshly spawned pieces."""

        return self.cols // 2 - 1
