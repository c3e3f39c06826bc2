"""States of a game session.

Exactly one of these variants describes a running game.  ``Fall`` and
``Drop`` own the active block together with the kind shown in the preview;
moving between them hands the same block over to the new variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .tetromino import Block, TetrominoType


@dataclass(frozen=True)
class Start:
    """No piece has been spawned yet."""


@dataclass
class Fall:
    """``block`` is falling under gravity and player control."""

    block: Block
    upcoming: TetrominoType

    def land(self) -> "Drop":
        return Drop(self.block, self.upcoming)


@dataclass
class Drop:
    """``block`` has landed and locks on the next tick."""

    block: Block
    upcoming: TetrominoType


@dataclass(frozen=True)
class GameOver:
    """A freshly spawned piece overlapped the stack."""


GameState = Union[Start, Fall, Drop, GameOver]
