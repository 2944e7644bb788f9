"""Tick-driven state machine tying the board, pieces and scoring together.

:class:`GameController` owns a single :class:`GameState` and exposes the
commands a front-end needs: ``start`` plus the four piece commands.  Gravity
arrives through ``tick``, which the controller registers with its scheduler on
``start``.  Every command and tick runs to completion before the next one and
ends with a call to the ``render`` collaborator, so front-ends only ever draw
consistent state.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from .board import Board
from .config import GameConfig
from .game_state import GameState, Phase
from .scheduler import FrameScheduler, Scheduler
from .tetromino import Piece, Shape


LOGGER = logging.getLogger(__name__)

RenderFn = Callable[[Board, Shape, int, int], None]
ScoreFn = Callable[[int], None]


def _ignore(*_args) -> None:
    return None


class GameController:
    """Run one game at a time on behalf of a front-end.

    Args:
        config: Board size, tick interval and scoring.
        scheduler: Where the periodic ``tick`` is registered.  Defaults to a
            :class:`FrameScheduler` the owner advances manually.
        rng: Random source for spawned shapes, shared across restarts.
            Defaults to ``random.Random(config.seed)``.
        render: Called as ``render(board, shape, anchor_col, anchor_row)``
            after every state change.
        on_score_changed: Called with the new score on start and whenever rows
            are cleared.
        on_game_over: Called once with the final score when the game ends.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        scheduler: Optional[Scheduler] = None,
        *,
        rng: Optional[random.Random] = None,
        render: Optional[RenderFn] = None,
        on_score_changed: Optional[ScoreFn] = None,
        on_game_over: Optional[ScoreFn] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.scheduler = scheduler if scheduler is not None else FrameScheduler()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.render = render or _ignore
        self.on_score_changed = on_score_changed or _ignore
        self.on_game_over = on_game_over or _ignore
        self.state: Optional[GameState] = None
        self._tick_handle: Optional[int] = None

    @property
    def running(self) -> bool:
        return self.state is not None and self.state.phase is Phase.RUNNING

    @property
    def phase(self) -> Optional[Phase]:
        """Current phase, ``None`` before the first :meth:`start`."""

        return self.state.phase if self.state else None

    @property
    def score(self) -> int:
        return self.state.score if self.state else 0

    # Internal helpers -------------------------------------------------
    def _cancel_ticks(self) -> None:
        if self._tick_handle is not None:
            self.scheduler.cancel(self._tick_handle)
            self._tick_handle = None

    def _render(self) -> None:
        state = self.state
        if state is None or state.active is None:
            return
        self.render(state.board, state.active.shape, state.active.col, state.active.row)

    def _shift(self, dx: int, dy: int) -> None:
        if not self.running:
            return
        if not self.state.piece_collides(dx=dx, dy=dy):
            self.state.active.move(dx, dy)
        self._render()

    # Public API -------------------------------------------------------
    def start(self) -> None:
        """Begin a new game, replacing any game in progress.

        The previous tick stream is cancelled before the new one is scheduled,
        so repeated calls never leave two streams running.
        """

        self._cancel_ticks()
        self.state = GameState(self.config, self.rng)
        self.spawn()
        LOGGER.info(
            "Game started on a %dx%d board", self.config.cols, self.config.rows
        )
        self.on_score_changed(self.state.score)
        self._render()
        self._tick_handle = self.scheduler.schedule_interval(
            self.tick, self.config.tick_interval_ms
        )

    def spawn(self) -> Piece:
        """Replace the active piece with a freshly spawned one."""

        if self.state is None:
            raise RuntimeError("Game has not been started")
        piece = self.state.spawn_piece()
        LOGGER.debug("Spawned %s at (%d, %d)", piece.name.value, piece.col, piece.row)
        return piece

    def tick(self) -> None:
        """Advance game time by one step.

        The active piece falls one row if it can.  Otherwise it locks, full
        rows are cleared and scored, and the next piece spawns.  A spawned
        piece that already collides ends the game after a final render.
        """

        if not self.running:
            return
        state = self.state
        if not state.piece_collides(dy=1):
            state.active.move(0, 1)
            self._render()
            return

        active = state.active
        LOGGER.debug("Locking %s at (%d, %d)", active.name.value, active.col, active.row)
        cleared = state.lock_active()
        if cleared:
            LOGGER.info("Cleared %d row(s). Score: %d", cleared, state.score)
            self.on_score_changed(state.score)

        self.spawn()
        topped_out = state.piece_collides()
        self._render()
        if topped_out:
            self.game_over()

    def move_left(self) -> None:
        self._shift(-1, 0)

    def move_right(self) -> None:
        self._shift(1, 0)

    def soft_drop(self) -> None:
        self._shift(0, 1)

    def rotate_cw(self) -> None:
        """Rotate the active piece unless the rotated layout would collide."""

        if not self.running:
            return
        rotated = self.state.active.rotated()
        if not self.state.piece_collides(shape=rotated):
            self.state.active.shape = rotated
        self._render()

    def game_over(self) -> None:
        """End the current game and report the final score.

        Ticking stops and further commands are ignored until :meth:`start`.
        """

        if not self.running:
            return
        self._cancel_ticks()
        self.state.phase = Phase.GAME_OVER
        LOGGER.info("Game over. Score: %d", self.state.score)
        self.on_game_over(self.state.score)
