"""Engine for a small real-time falling-block puzzle game."""

from .board import Board, compact_rows, create_empty_grid
from .config import GameConfig
from .controller import GameController
from .game_state import GameState, Phase
from .scheduler import FrameScheduler, Scheduler
from .tetromino import Piece, ShapeName, clone_shape, rotate, shapes_by_name
from .utils import collides, format_grid, render_grid

__all__ = [
    "Board",
    "GameConfig",
    "GameController",
    "GameState",
    "Phase",
    "Piece",
    "ShapeName",
    "FrameScheduler",
    "Scheduler",
    "clone_shape",
    "collides",
    "compact_rows",
    "create_empty_grid",
    "format_grid",
    "render_grid",
    "rotate",
    "shapes_by_name",
]
