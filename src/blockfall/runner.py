"""Driver loop tying a clock and an input source to a :class:`Game`."""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from .bag import Bag
from .game import Action, Game, GameChange, GameView, MenuView, Signal
from .settings import Settings


LOGGER = logging.getLogger(__name__)


class GameRunner:
    """Manage successive games with restart and exit handling.

    ``clock`` returns the current timestamp in the unit of
    ``settings.delay``.  All games started by one runner share a single random
    generator, so a seeded runner replays the same piece sequence.
    """

    def __init__(
        self,
        settings: Settings,
        clock: Callable[[], float],
        *,
        seed: Optional[int] = None,
    ) -> None:
        self.settings = settings
        self._clock = clock
        self._rng = random.Random(seed)
        self._running = True
        self.games = 0
        self.game = self._new_game()

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Stop the runner; further steps return ``None``."""

        self._running = False

    def _new_game(self) -> Game:
        self.games += 1
        LOGGER.info("Game %d started", self.games)
        return Game(self.settings, self._clock(), bag=Bag(rng=self._rng))

    def step(self, action: Optional[Action] = None) -> Optional[GameChange]:
        """Run one tick and return what should be rendered.

        A restart replaces the game and returns its first frame; an exit stops
        the runner and returns ``None``.
        """

        if not self._running:
            return None
        change = self.game.frame(self._clock(), action)
        if change is Signal.RESTART:
            self.game = self._new_game()
            return self.game.frame(self._clock())
        if change is Signal.EXIT:
            self._running = False
            LOGGER.info("Stopped after %d game(s)", self.games)
            return None
        return change

    def run(
        self,
        poll: Callable[[], Optional[Action]],
        draw_game: Callable[[GameView], None],
        draw_menu: Callable[[MenuView], None],
    ) -> None:
        """Tick until the player exits, drawing every non-idle change."""

        while self._running:
            change = self.step(poll())
            if isinstance(change, GameView):
                draw_game(change)
            elif isinstance(change, MenuView):
                draw_menu(change)
