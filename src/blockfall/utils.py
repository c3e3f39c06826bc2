"""Utility helpers for building render snapshots."""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .board import Board, Grid
from .tetromino import Block


def render_grid(board: Board, active: Optional[Block] = None) -> Grid:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece).  Cells of the piece above the visible field are skipped.
    """

    grid = board.grid.copy()
    if active is not None:
        for r, c, value in active.cells():
            if 0 <= r < board.height and 0 <= c < board.width:
                grid[r, c] = np.uint8(value)
    return grid


def format_grid(grid: Iterable[Iterable[int]], filled: str = "#", empty: str = ".") -> str:
    """Return ``grid`` as lines of text, one character per cell."""

    return "\n".join("".join(filled if cell else empty for cell in row) for row in grid)
