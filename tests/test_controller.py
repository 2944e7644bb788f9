import random

import pytest

from blockfall.config import GameConfig
from blockfall.controller import GameController
from blockfall.game_state import Phase
from blockfall.scheduler import FrameScheduler
from blockfall.tetromino import Piece, ShapeName


class Recorder:
    """Collect every call made to the controller's collaborators."""

    def __init__(self) -> None:
        self.frames = []
        self.scores = []
        self.finals = []

    def render(self, board, shape, anchor_col, anchor_row):
        self.frames.append((shape.tolist(), anchor_col, anchor_row))

    def controller(self, config=None, seed=3):
        scheduler = FrameScheduler()
        controller = GameController(
            config or GameConfig(),
            scheduler,
            rng=random.Random(seed),
            render=self.render,
            on_score_changed=self.scores.append,
            on_game_over=self.finals.append,
        )
        return controller, scheduler


def test_start_spawns_and_renders():
    rec = Recorder()
    controller, scheduler = rec.controller()
    assert controller.phase is None
    controller.start()
    state = controller.state
    assert controller.phase is Phase.RUNNING
    assert state.score == 0
    assert state.board.grid.shape == (20, 10)
    assert (state.active.col, state.active.row) == (4, 0)
    assert rec.scores == [0]
    assert len(rec.frames) == 1
    assert scheduler.active_count == 1


def test_commands_before_start_are_ignored():
    rec = Recorder()
    controller, _ = rec.controller()
    controller.move_left()
    controller.rotate_cw()
    controller.tick()
    assert rec.frames == []
    assert controller.state is None


def test_start_twice_keeps_single_tick_stream():
    rec = Recorder()
    controller, scheduler = rec.controller()
    controller.start()
    controller.state.board.grid[19] = 1
    controller.start()
    assert scheduler.active_count == 1
    assert controller.state.board.grid.shape == (20, 10)
    assert not controller.state.board.grid.any()
    row_before = controller.state.active.row
    scheduler.advance(500)
    assert controller.state.active.row == row_before + 1


def test_move_left_into_wall_still_renders():
    rec = Recorder()
    controller, _ = rec.controller()
    controller.start()
    controller.state.active = Piece.from_catalog(ShapeName.T, col=0, row=5)
    rec.frames.clear()
    controller.move_left()
    assert (controller.state.active.col, controller.state.active.row) == (0, 5)
    assert rec.frames == [([[1, 1, 1], [0, 1, 0]], 0, 5)]


def test_moves_apply_offsets():
    rec = Recorder()
    controller, _ = rec.controller()
    controller.start()
    controller.state.active = Piece.from_catalog(ShapeName.O, col=4, row=5)
    controller.move_left()
    controller.move_left()
    controller.move_right()
    controller.soft_drop()
    assert (controller.state.active.col, controller.state.active.row) == (3, 6)
    assert len(rec.frames) == 5


def test_move_blocked_by_settled_cells():
    rec = Recorder()
    controller, _ = rec.controller()
    controller.start()
    controller.state.board.grid[6, 6] = 1
    controller.state.active = Piece.from_catalog(ShapeName.O, col=4, row=5)
    rec.frames.clear()
    controller.move_right()
    assert controller.state.active.col == 4
    assert rec.frames == [([[1, 1], [1, 1]], 4, 5)]
    controller.soft_drop()
    assert controller.state.active.row == 6


def test_blocked_soft_drop_still_renders():
    rec = Recorder()
    controller, _ = rec.controller()
    controller.start()
    controller.state.active = Piece.from_catalog(ShapeName.O, col=4, row=18)
    rec.frames.clear()
    controller.soft_drop()
    assert controller.state.active.row == 18
    assert rec.frames == [([[1, 1], [1, 1]], 4, 18)]
    # Soft drop never locks; only a tick does.
    assert not controller.state.board.grid.any()


def test_rotation_applied_when_free():
    controller, _ = Recorder().controller()
    controller.start()
    controller.state.active = Piece.from_catalog(ShapeName.I, col=3, row=5)
    controller.rotate_cw()
    assert controller.state.active.shape.tolist() == [[1], [1], [1], [1]]
    assert (controller.state.active.col, controller.state.active.row) == (3, 5)


def test_blocked_rotation_is_discarded():
    rec = Recorder()
    controller, _ = rec.controller()
    controller.start()
    # A vertical I in the last column cannot lie down past the right wall.
    controller.state.active = Piece.from_catalog(ShapeName.I, col=9, row=10)
    controller.state.active.shape = controller.state.active.rotated()
    rec.frames.clear()
    controller.rotate_cw()
    assert controller.state.active.shape.tolist() == [[1], [1], [1], [1]]
    assert len(rec.frames) == 1


def test_rotation_does_not_touch_catalog():
    controller, _ = Recorder().controller()
    controller.start()
    controller.state.active = Piece.from_catalog(ShapeName.L, col=3, row=5)
    controller.rotate_cw()
    assert Piece.from_catalog(ShapeName.L).shape.tolist() == [[1, 0], [1, 0], [1, 1]]


def test_tick_applies_gravity():
    rec = Recorder()
    controller, scheduler = rec.controller()
    controller.start()
    row = controller.state.active.row
    scheduler.advance(1500)
    assert controller.state.active.row == row + 3
    assert len(rec.frames) == 4


def test_locking_clears_row_and_scores():
    rec = Recorder()
    controller, _ = rec.controller()
    controller.start()
    board = controller.state.board
    board.grid[19, 0:4] = 1
    board.grid[19, 8:10] = 1
    board.grid[18, 0] = 1
    controller.state.active = Piece.from_catalog(ShapeName.I, col=4, row=18)

    controller.tick()
    assert controller.state.active.row == 19
    controller.tick()

    assert controller.score == 10
    assert rec.scores == [0, 10]
    assert not board.grid[0].any()
    assert board.grid[19].tolist() == [1, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    assert board.grid.shape == (20, 10)
    assert (controller.state.active.col, controller.state.active.row) == (4, 0)
    assert controller.phase is Phase.RUNNING


def test_points_per_line_is_configurable():
    rec = Recorder()
    controller, _ = rec.controller(GameConfig(cols=5, rows=6, points_per_line=25))
    controller.start()
    board = controller.state.board
    board.grid[4:6, 0:3] = 1
    controller.state.active = Piece.from_catalog(ShapeName.O, col=3, row=4)
    controller.tick()
    assert controller.score == 50
    assert rec.scores == [0, 50]
    assert not board.grid.any()


def test_lock_without_clear_keeps_score():
    rec = Recorder()
    controller, _ = rec.controller()
    controller.start()
    controller.state.active = Piece.from_catalog(ShapeName.O, col=0, row=18)
    controller.tick()
    assert controller.score == 0
    assert rec.scores == [0]
    assert controller.state.board.grid[18:, 0:2].all()


def test_seeded_games_spawn_same_sequence():
    names = []
    for _ in range(2):
        controller, _ = Recorder().controller(seed=11)
        controller.start()
        sequence = [controller.state.active.name]
        for _ in range(5):
            sequence.append(controller.spawn().name)
        names.append(sequence)
    assert names[0] == names[1]


def test_spawn_requires_started_game():
    controller, _ = Recorder().controller()
    with pytest.raises(RuntimeError):
        controller.spawn()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"cols": 0},
        {"cols": 4},
        {"rows": 0},
        {"rows": 2},
        {"tick_interval_ms": 0},
        {"points_per_line": -1},
    ],
)
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_spawn_column_is_left_of_centre():
    assert GameConfig().spawn_col == 4
    assert GameConfig(cols=7).spawn_col == 2


@pytest.mark.parametrize("name", list(ShapeName))
def test_every_shape_falls_and_locks_on_smallest_board(name):
    rec = Recorder()
    controller, scheduler = rec.controller(GameConfig(cols=5, rows=3))
    controller.start()
    config = controller.config
    controller.state.active = Piece.from_catalog(name, config.spawn_col, 0)
    for _ in range(4):
        scheduler.advance(config.tick_interval_ms)
    # Pieces that never move leave column 0 empty, so locked cells stay put.
    assert controller.state.board.grid.any()
    assert controller.phase in (Phase.RUNNING, Phase.GAME_OVER)
    assert controller.state.board.grid.shape == (3, 5)
