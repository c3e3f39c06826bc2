"""Simple pygame front-end for the engine.

The engine itself knows nothing about pygame: this module turns key presses
into :class:`~blockfall.game.Action` values, feeds them to a
:class:`~blockfall.runner.GameRunner` one per frame and draws the snapshots
it returns.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pygame

from .game import Action, GameView, MenuView
from .runner import GameRunner
from .settings import Settings
from .tetromino import PIECE_VALUES, PREVIEW_SIZE, TetrominoType

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60
# Columns reserved right of the field for the preview and score
SIDEBAR_CELLS = PREVIEW_SIZE + 2

LOGGER = logging.getLogger(__name__)

# Colours for each tetromino type
SHAPE_COLORS = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (128, 0, 128),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 165, 0),
}

# Mapping from the integer stored in the board grid to a colour
CELL_COLORS = {0: (0, 0, 0)}
for shape, value in PIECE_VALUES.items():
    CELL_COLORS[value] = SHAPE_COLORS[shape]

KEY_ACTIONS: Dict[int, Action] = {
    pygame.K_UP: Action.UP,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_SPACE: Action.DROP,
    pygame.K_RETURN: Action.DROP,
    pygame.K_ESCAPE: Action.ESCAPE,
}


def key_action(event: pygame.event.Event) -> Optional[Action]:
    """Return the action bound to a ``KEYDOWN`` event, if any."""

    if event.type != pygame.KEYDOWN:
        return None
    return KEY_ACTIONS.get(event.key)


def draw_cells(screen: pygame.Surface, grid, left: int = 0, top: int = 0) -> None:
    """Render a grid of colour indices with its top-left cell at ``(left, top)``."""

    for r, row in enumerate(grid):
        for c, value in enumerate(row):
            rect = pygame.Rect(
                (left + c) * CELL_SIZE, (top + r) * CELL_SIZE, CELL_SIZE, CELL_SIZE
            )
            pygame.draw.rect(screen, CELL_COLORS[int(value)], rect)
            pygame.draw.rect(screen, (50, 50, 50), rect, 1)


class PygameView:
    """Window drawing game and menu snapshots."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        size = (
            (settings.cols + SIDEBAR_CELLS) * CELL_SIZE,
            settings.rows * CELL_SIZE,
        )
        self.screen = pygame.display.set_mode(size)
        self.font = pygame.font.Font(None, CELL_SIZE)
        pygame.display.set_caption("blockfall")

    def draw_game(self, view: GameView) -> None:
        self.screen.fill((0, 0, 0))
        draw_cells(self.screen, view.main)
        draw_cells(self.screen, view.preview, left=self.settings.cols + 1, top=1)
        label = self.font.render(f"Score: {view.score}", True, (255, 255, 255))
        self.screen.blit(
            label, ((self.settings.cols + 1) * CELL_SIZE, (PREVIEW_SIZE + 2) * CELL_SIZE)
        )
        pygame.display.flip()

    def draw_menu(self, view: MenuView) -> None:
        self.screen.fill((0, 0, 0))
        for i, line in enumerate(menu_lines(view)):
            text = self.font.render(line, True, (255, 255, 255))
            self.screen.blit(text, (CELL_SIZE, (i + 2) * CELL_SIZE))
        pygame.display.flip()


def menu_lines(view: MenuView) -> List[str]:
    """Return the menu as text lines, marking the selected entry."""

    lines = []
    for i, (label, selectable) in enumerate(view.items):
        if i == view.selected:
            lines.append(f"> {label}")
        elif selectable:
            lines.append(f"  {label}")
        else:
            lines.append(label)
    return lines


def main(settings: Optional[Settings] = None, seed: Optional[int] = None) -> None:
    """Open a window and play until the player picks Exit or closes it."""

    settings = settings or Settings()
    pygame.init()
    try:
        view = PygameView(settings)
        clock = pygame.time.Clock()
        runner = GameRunner(settings, pygame.time.get_ticks, seed=seed)
        pending: List[Action] = []

        def poll() -> Optional[Action]:
            clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    LOGGER.info("Window closed")
                    runner.stop()
                    return None
                action = key_action(event)
                if action is not None:
                    pending.append(action)
            # One action per tick; extra key presses wait for later frames.
            return pending.pop(0) if pending else None

        runner.run(poll, view.draw_game, view.draw_menu)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
