"""Construction parameters for a game."""

from __future__ import annotations

from dataclasses import dataclass

from .board import MIN_SIZE

# Dimensions of the standard field.
WIDTH = 10
HEIGHT = 20

# Milliseconds between automatic downward moves
GRAVITY_MS = 500


@dataclass(frozen=True)
class Settings:
    """Field size and gravity delay.

    ``delay`` is measured in the same unit as the timestamps handed to
    :meth:`blockfall.game.Game.frame` (milliseconds for the bundled drivers).
    """

    cols: int = WIDTH
    rows: int = HEIGHT
    delay: float = GRAVITY_MS

    def __post_init__(self) -> None:
        if self.cols < MIN_SIZE or self.rows < MIN_SIZE:
            raise ValueError(
                f"Field must be at least {MIN_SIZE}x{MIN_SIZE}, got {self.cols}x{self.rows}"
            )
        if self.delay < 0:
            raise ValueError(f"Fall delay must not be negative, got {self.delay}")
