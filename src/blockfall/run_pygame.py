"""Simple pygame front-end for the game engine.

The window is a thin shell around :class:`~blockfall.controller.GameController`:
it draws whatever the controller renders, forwards arrow keys as commands and
feeds the frame clock into the controller's scheduler so gravity follows real
time.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import numpy as np
import pygame

from .board import Board
from .config import GameConfig
from .controller import GameController
from .scheduler import FrameScheduler
from .tetromino import Shape

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
SETTLED_COLOR = (0, 170, 255)
FALLING_COLOR = (255, 170, 0)

LOGGER = logging.getLogger(__name__)


def _draw_cell(screen: pygame.Surface, col: int, row: int, color) -> None:
    rect = pygame.Rect(col * CELL_SIZE, row * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)
    pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_board(screen: pygame.Surface, board: Board) -> None:
    """Render the settled cells."""

    for row, col in np.argwhere(board.grid):
        _draw_cell(screen, int(col), int(row), SETTLED_COLOR)


def draw_piece(screen: pygame.Surface, shape: Shape, anchor_col: int, anchor_row: int) -> None:
    """Render the falling piece, skipping any blocks above the board."""

    for local_row, local_col in np.argwhere(shape):
        row = anchor_row + int(local_row)
        if row >= 0:
            _draw_cell(screen, anchor_col + int(local_col), row, FALLING_COLOR)


class PygameRenderer:
    """Render callback drawing a full frame onto ``screen``."""

    def __init__(self, screen: pygame.Surface) -> None:
        self.screen = screen

    def __call__(self, board: Board, shape: Shape, anchor_col: int, anchor_row: int) -> None:
        self.screen.fill(BACKGROUND)
        draw_board(self.screen, board)
        draw_piece(self.screen, shape, anchor_col, anchor_row)
        pygame.display.flip()


def handle_key(event: pygame.event.Event, controller: GameController) -> None:
    """Translate a key press into a controller command."""

    if event.key in (pygame.K_RETURN, pygame.K_r):
        controller.start()
    elif event.key == pygame.K_LEFT:
        controller.move_left()
    elif event.key == pygame.K_RIGHT:
        controller.move_right()
    elif event.key == pygame.K_DOWN:
        controller.soft_drop()
    elif event.key == pygame.K_UP:
        controller.rotate_cw()


def show_score(score: int) -> None:
    pygame.display.set_caption(f"Blockfall - Score: {score}")


def show_game_over(final_score: int) -> None:
    pygame.display.set_caption(f"Blockfall - Game Over! Score: {final_score}")


class GameRunner:
    """Own the pygame window and the loop feeding the controller."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.scheduler = FrameScheduler()
        self._running = False
        self._controller: Optional[GameController] = None

    async def _run_loop(self) -> None:
        pygame.init()
        screen = pygame.display.set_mode(
            (self.config.cols * CELL_SIZE, self.config.rows * CELL_SIZE)
        )
        clock = pygame.time.Clock()
        self._controller = GameController(
            self.config,
            self.scheduler,
            render=PygameRenderer(screen),
            on_score_changed=show_score,
            on_game_over=show_game_over,
        )
        self._controller.start()

        self._running = True
        while self._running:
            dt = clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    handle_key(event, self._controller)
            self.scheduler.advance(dt)
            # Yield to the host event loop to keep it responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def run(self) -> None:
        """Run the window until it is closed."""

        asyncio.run(self._run_loop())


def main(config: Optional[GameConfig] = None) -> None:
    GameRunner(config).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
