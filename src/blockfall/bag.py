"""Bag randomizer producing piece kinds in balanced batches."""

from __future__ import annotations

import random
from typing import List, Optional

from .tetromino import TetrominoType

# Number of complete kind sets added on every refill.
BAG_SIZE = 3


class Bag:
    """Draw tetromino kinds without replacement from refilled batches.

    When empty, the bag is refilled with ``batch`` copies of all seven kinds.
    Each draw removes the entry at a uniformly random index, so over every
    refill each kind appears exactly ``batch`` times.
    """

    def __init__(self, batch: int = BAG_SIZE, rng: Optional[random.Random] = None) -> None:
        if batch < 1:
            raise ValueError(f"Bag batch size must be positive, got {batch}")
        self.batch = batch
        self._rng = rng if rng is not None else random.Random()
        self._pending: List[TetrominoType] = []

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def pending(self) -> List[TetrominoType]:
        return list(self._pending)

    @property
    def capacity(self) -> int:
        """Number of kinds added by one refill."""

        return self.batch * len(TetrominoType)

    def refill(self) -> None:
        self._pending.extend(list(TetrominoType) * self.batch)

    def draw(self) -> TetrominoType:
        if not self._pending:
            self.refill()
        return self._pending.pop(self._rng.randrange(len(self._pending)))
