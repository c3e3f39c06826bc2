"""Per-tick game state machine.

A driver calls :meth:`Game.frame` once per loop iteration with the current
timestamp and at most one :class:`Action`.  The game never reads a clock of
its own, so a session is fully determined by the timestamps, the actions and
the bag's random generator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from .bag import Bag
from .board import Board, Grid
from .game_state import Drop, Fall, GameOver, GameState, Start
from .menu import Menu, PauseItem, game_over_menu, pause_menu
from .settings import Settings
from .tetromino import PREVIEW_SIZE, Block, TetrominoType, preview
from .utils import render_grid


LOGGER = logging.getLogger(__name__)


class Action(Enum):
    """Discrete player input delivered with a tick."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    DROP = "drop"
    ESCAPE = "escape"


class Signal(Enum):
    """Control results that replace a render snapshot."""

    RESTART = "restart"
    EXIT = "exit"
    IDLE = "idle"


@dataclass(frozen=True)
class GameView:
    """Snapshot of the playfield with the active piece merged in."""

    main: Grid
    preview: Grid
    score: int


@dataclass(frozen=True)
class MenuView:
    """Snapshot of a menu overlay."""

    items: Tuple[Tuple[str, bool], ...]
    selected: Optional[int]


GameChange = Union[GameView, MenuView, Signal]


def line_score(lines: int) -> int:
    """Return the points for clearing ``lines`` rows with a single lock."""

    return lines * (lines + 1) // 2


class Game:
    """Falling-block game driven by discrete ticks."""

    def __init__(self, settings: Settings, start: float = 0, *, bag: Optional[Bag] = None) -> None:
        self.settings = settings
        self.board = Board(settings.rows, settings.cols)
        self.bag = bag if bag is not None else Bag()
        self.state: GameState = Start()
        self.overlay: Optional[Menu] = None
        self.score = 0
        self.lines = 0
        self._moment = start
        self._paused = False

    @property
    def paused(self) -> bool:
        """``True`` while the pause menu (not the game-over menu) is shown."""

        return self.overlay is not None and self._paused

    def frame(self, now: float, action: Optional[Action] = None) -> GameChange:
        """Advance the game by one tick and report what the driver should do."""

        if self.overlay is not None:
            signal = self._menu_input(self.overlay, action)
            if signal is not None:
                return signal
        elif action is Action.ESCAPE:
            self._pause()
        elif isinstance(self.state, Start):
            self._spawn(self.bag.draw())
        elif isinstance(self.state, Fall):
            if not self._fall(self.state, now, action):
                return Signal.IDLE
        elif isinstance(self.state, Drop):
            self._lock(self.state)
        elif isinstance(self.state, GameOver):
            self.overlay = game_over_menu()
        else:
            raise RuntimeError(f"Unknown game state {self.state!r}")
        return self.view()

    # Menu overlay ----------------------------------------------------
    def _pause(self) -> None:
        self.overlay = pause_menu()
        self._paused = True
        LOGGER.info("Paused with score %d", self.score)

    def _resume(self) -> None:
        self.overlay = None
        self._paused = False
        LOGGER.info("Resumed")

    def _menu_input(self, menu: Menu, action: Optional[Action]) -> Optional[Signal]:
        if action is Action.ESCAPE and self._paused:
            self._resume()
        elif action is Action.UP:
            menu.up()
        elif action is Action.DOWN:
            menu.down()
        elif action is Action.DROP:
            choice = menu.select()
            if choice is PauseItem.CONTINUE:
                self._resume()
            elif choice is PauseItem.RESTART:
                LOGGER.info("Restart requested")
                return Signal.RESTART
            elif choice is PauseItem.EXIT:
                LOGGER.info("Exit requested")
                return Signal.EXIT
            else:
                raise RuntimeError(f"Menu selection {choice!r} has no effect")
        else:
            return Signal.IDLE
        return None

    # States ----------------------------------------------------------
    def _spawn(self, kind: TetrominoType) -> None:
        """Spawn ``kind`` and either start it falling or end the game."""

        block = Block.spawn(kind, self.board.width)
        upcoming = self.bag.draw()
        if self.board.collides(block):
            self.state = GameOver()
            LOGGER.info("Game over with score %d after %d lines", self.score, self.lines)
        else:
            self.state = Fall(block, upcoming)
            LOGGER.debug("Spawned %s, next %s", kind.value, upcoming.value)

    def _fall(self, state: Fall, now: float, action: Optional[Action]) -> bool:
        """Apply input and gravity to the falling block.

        Returns whether anything visibly changed.  A downward move that fails
        hands the block over to :class:`Drop`.
        """

        board = self.board
        block = state.block
        landed = False
        changed = False
        if action is Action.LEFT:
            changed = board.try_move(block, -1, 0)
        elif action is Action.RIGHT:
            changed = board.try_move(block, 1, 0)
        elif action is Action.UP:
            changed = board.try_rotate(block)
        elif action is Action.DOWN:
            self._moment = now
            changed = board.try_move(block, 0, 1)
            landed = not changed
        elif action is Action.DROP:
            changed = board.drop(block) > 0
            landed = True

        if not landed and now - self._moment >= self.settings.delay:
            self._moment = now
            if board.try_move(block, 0, 1):
                changed = True
            else:
                landed = True

        if landed:
            self.state = state.land()
        return changed

    def _lock(self, state: Drop) -> None:
        lines = self.board.consume(state.block)
        if lines:
            self.score += line_score(lines)
            self.lines += lines
            LOGGER.info("Cleared %d line(s). Score: %d", lines, self.score)
        else:
            LOGGER.debug("Locked %s at (%d, %d)", state.block.kind.value, state.block.x, state.block.y)
        self._spawn(state.upcoming)

    # Rendering -------------------------------------------------------
    def view(self) -> Union[GameView, MenuView]:
        """Return the snapshot a renderer should draw for the current state."""

        if self.overlay is not None:
            return MenuView(tuple(self.overlay.labels()), self.overlay.selected)
        if isinstance(self.state, (Fall, Drop)):
            return GameView(
                main=render_grid(self.board, self.state.block),
                preview=preview(self.state.upcoming),
                score=self.score,
            )
        return GameView(
            main=render_grid(self.board),
            preview=np.zeros((PREVIEW_SIZE, PREVIEW_SIZE), dtype=np.uint8),
            score=self.score,
        )
