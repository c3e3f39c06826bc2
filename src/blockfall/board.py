"""Board representation for the playfield."""

from __future__ import annotations

from typing import Iterable, Optional, Set, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Block

# Smallest field the spawn and kick geometry can work with.
MIN_SIZE = 4

Grid = NDArray[np.uint8]


def create_empty_grid(rows: int, cols: int) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((rows, cols), dtype=np.uint8)


class Board:
    """Matrix of placed cells, ``0`` meaning empty and ``1``-``7`` a piece colour.

    Row ``0`` is the top of the field.  The board answers collision and bounds
    queries for a :class:`~blockfall.tetromino.Block` and performs the
    speculative moves and rotations used by the game loop.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows < MIN_SIZE or cols < MIN_SIZE:
            raise ValueError(
                f"Board must be at least {MIN_SIZE}x{MIN_SIZE}, got {rows}x{cols}"
            )
        self.height = rows
        self.width = cols
        self.grid: Grid = create_empty_grid(rows, cols)

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the in-bounds cell at ``(row, col)`` is empty."""

        return self.get_cell(row, col) == 0

    # Queries ---------------------------------------------------------
    def _coordinates(self, block: Block) -> Tuple[NDArray[np.intp], NDArray[np.intp]]:
        rows, cols = np.nonzero(block.shape())
        return rows + block.y, cols + block.x

    def collides(self, block: Block) -> bool:
        """Return ``True`` if any cell of ``block`` overlaps a placed cell.

        Cells outside the board, including rows above the top used while a
        piece spawns, never collide; bounds are checked by :meth:`overflows`.
        """

        rows, cols = self._coordinates(block)
        inside = (rows >= 0) & (rows < self.height) & (cols >= 0) & (cols < self.width)
        return bool(np.any(self.grid[rows[inside], cols[inside]] != 0))

    def overflows(self, block: Block) -> bool:
        """Return ``True`` if ``block`` leaves the sides or bottom of the board.

        Rows above the top are allowed.
        """

        rows, cols = self._coordinates(block)
        return bool(np.any((cols < 0) | (cols >= self.width) | (rows >= self.height)))

    def fits(self, block: Block) -> bool:
        return not self.overflows(block) and not self.collides(block)

    # Speculative changes ---------------------------------------------
    def try_move(self, block: Block, dx: int, dy: int) -> bool:
        """Move ``block`` by ``(dx, dy)`` if the new position fits.

        Returns whether the move was accepted; a rejected move leaves the piece
        where it was.
        """

        block.begin(block.x + dx, block.y + dy, block.rotation)
        ok = self.fits(block)
        block.end(ok)
        return ok

    def try_rotate(self, block: Block) -> bool:
        """Rotate ``block`` one step, trying each wall kick in table order.

        The first kick offset that yields a fitting piece is kept.  If none do,
        the piece is left unchanged and ``False`` is returned.
        """

        rotation = block.rotation.next(block.arity)
        for dx, dy in block.kicks():
            block.begin(block.x + dx, block.y + dy, rotation)
            ok = self.fits(block)
            block.end(ok)
            if ok:
                return True
        return False

    def drop_distance(self, block: Block) -> int:
        """Return how many rows ``block`` can fall before touching anything.

        For every column the piece spans, the gap between the piece's lowest
        cell and the first placed cell below it (or the floor) is measured; the
        smallest gap wins.
        """

        rows, cols = self._coordinates(block)
        distance = self.height
        for col in np.unique(cols):
            lowest = int(rows[cols == col].max())
            start = max(lowest + 1, 0)
            below = np.flatnonzero(self.grid[start:, col])
            highest = start + int(below[0]) if below.size else self.height
            distance = min(distance, highest - lowest - 1)
        return distance

    def drop(self, block: Block) -> int:
        """Hard-drop ``block`` in place and return the distance it fell."""

        distance = self.drop_distance(block)
        block.y += distance
        return distance

    # Mutation --------------------------------------------------------
    def lock(self, block: Block) -> Set[int]:
        """Write ``block``'s cells into the grid and return the rows touched.

        Cells still above the visible field are dropped silently.
        """

        affected: Set[int] = set()
        for row, col, value in block.cells():
            if 0 <= row < self.height and 0 <= col < self.width:
                self.grid[row, col] = np.uint8(value)
                affected.add(row)
        return affected

    def clear_full_rows(self, rows: Optional[Iterable[int]] = None) -> int:
        """Clear completed rows and return how many were removed.

        Only ``rows`` are examined when given, otherwise the whole board; rows
        outside the board are ignored.  Each removed row is replaced by an
        empty row at the top.
        """

        if rows is None:
            candidates = np.arange(self.height)
        else:
            inside = {row for row in rows if 0 <= row < self.height}
            candidates = np.array(sorted(inside), dtype=np.intp)
        if candidates.size == 0:
            return 0
        full = candidates[np.all(self.grid[candidates] != 0, axis=1)]
        cleared = int(full.size)
        if cleared:
            remaining = np.delete(self.grid, full, axis=0)
            new_rows = create_empty_grid(cleared, self.width)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def consume(self, block: Block) -> int:
        """Lock ``block`` and clear any rows it completed."""

        return self.clear_full_rows(self.lock(block))
