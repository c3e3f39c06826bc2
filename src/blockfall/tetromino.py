"""Tetromino catalog and the active falling piece.

The seven piece kinds form a closed set, so shapes, rotation arity and wall
kick tables are plain lookups keyed by :class:`TetrominoType` rather than a
class hierarchy.  Shapes are square ``uint8`` matrices whose nonzero cells
carry the kind's colour index; rotated shapes are derived on demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

Shape = NDArray[np.uint8]
Kick = Tuple[int, int]

PREVIEW_SIZE = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    T = "T"
    J = "J"
    L = "L"
    S = "S"
    Z = "Z"
    O = "O"


class RotationArity(Enum):
    """How many distinct rotation states a kind cycles through."""

    NONE = 1
    HALF = 2
    FULL = 4


class Rotation(IntEnum):
    """Rotation state of a piece; the value is the number of clockwise turns."""

    DEFAULT = 0
    CW = 1
    REVERSE = 2
    CCW = 3

    def next(self, arity: RotationArity) -> "Rotation":
        """Return the state reached by one rotation step for ``arity``."""

        if arity is RotationArity.FULL:
            return Rotation((self + 1) % 4)
        if arity is RotationArity.HALF:
            if self is Rotation.DEFAULT:
                return Rotation.CCW
            if self is Rotation.CCW:
                return Rotation.DEFAULT
        elif arity is RotationArity.NONE and self is Rotation.DEFAULT:
            return Rotation.DEFAULT
        raise RuntimeError(f"Unreachable rotation {self.name} for arity {arity.name}")


def _shape(rows: List[List[int]]) -> Shape:
    shape = np.array(rows, dtype=np.uint8)
    shape.setflags(write=False)
    return shape


# Spawn orientation of every kind.  Most shapes reserve a blank leading row,
# which is why pieces spawn one row above the visible field.
_BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _shape([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.T: _shape([[0, 2, 0], [2, 2, 2], [0, 0, 0]]),
    TetrominoType.J: _shape([[3, 0, 0], [3, 3, 3], [0, 0, 0]]),
    TetrominoType.L: _shape([[0, 0, 4], [4, 4, 4], [0, 0, 0]]),
    TetrominoType.S: _shape([[0, 5, 5], [5, 5, 0], [0, 0, 0]]),
    TetrominoType.Z: _shape([[6, 6, 0], [0, 6, 6], [0, 0, 0]]),
    TetrominoType.O: _shape([[7, 7], [7, 7]]),
}

# Mapping from ``TetrominoType`` to the integer stored in the grid.
PIECE_VALUES: Dict[TetrominoType, int] = {
    kind: int(shape.max()) for kind, shape in _BASE_SHAPES.items()
}

_ARITY: Dict[TetrominoType, RotationArity] = {
    TetrominoType.I: RotationArity.HALF,
    TetrominoType.T: RotationArity.FULL,
    TetrominoType.J: RotationArity.FULL,
    TetrominoType.L: RotationArity.FULL,
    TetrominoType.S: RotationArity.HALF,
    TetrominoType.Z: RotationArity.HALF,
    TetrominoType.O: RotationArity.NONE,
}

_FULL_KICKS: Dict[Rotation, Tuple[Kick, ...]] = {
    Rotation.DEFAULT: ((0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)),
    Rotation.CW: ((0, 0), (1, 0), (1, -1), (0, 2), (1, 2)),
    Rotation.REVERSE: ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    Rotation.CCW: ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
}

_SZ_KICKS: Dict[Rotation, Tuple[Kick, ...]] = {
    Rotation.DEFAULT: ((0, 0), (1, 0), (1, 1), (0, -2), (1, -2)),
    Rotation.CCW: ((0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)),
}

_I_KICKS: Dict[Rotation, Tuple[Kick, ...]] = {
    Rotation.DEFAULT: ((0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)),
    Rotation.CCW: ((0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)),
}

_KICKS: Dict[TetrominoType, Dict[Rotation, Tuple[Kick, ...]]] = {
    TetrominoType.I: _I_KICKS,
    TetrominoType.T: _FULL_KICKS,
    TetrominoType.J: _FULL_KICKS,
    TetrominoType.L: _FULL_KICKS,
    TetrominoType.S: _SZ_KICKS,
    TetrominoType.Z: _SZ_KICKS,
}

_O_KICKS: Tuple[Kick, ...] = ((0, 0),)


def base_shape(kind: TetrominoType) -> Shape:
    """Return the read-only spawn-orientation matrix for ``kind``."""

    return _BASE_SHAPES[kind]


def rotation_arity(kind: TetrominoType) -> RotationArity:
    return _ARITY[kind]


def rotated_shape(kind: TetrominoType, rotation: Rotation) -> Shape:
    """Return ``kind``'s shape turned clockwise ``rotation`` quarter turns.

    The result is a new square matrix of the same side as the base shape.
    ``np.rot90`` turns counter-clockwise for positive ``k``, hence the sign.
    """

    return np.ascontiguousarray(np.rot90(_BASE_SHAPES[kind], k=-int(rotation)))


def wall_kicks(kind: TetrominoType, rotation: Rotation) -> Tuple[Kick, ...]:
    """Return the kick offsets tried when rotating ``kind`` out of ``rotation``.

    The first offset is always ``(0, 0)`` so a plain in-place rotation is
    attempted before any kicked alternative.
    """

    if kind is TetrominoType.O:
        return _O_KICKS
    try:
        return _KICKS[kind][rotation]
    except KeyError:
        raise RuntimeError(
            f"Unreachable rotation {rotation.name} for {kind.value} piece"
        ) from None


def preview(kind: TetrominoType) -> Shape:
    """Return a fixed 4x4 preview matrix of ``kind`` in spawn orientation."""

    shape = _BASE_SHAPES[kind]
    side = shape.shape[0]
    grid = np.zeros((PREVIEW_SIZE, PREVIEW_SIZE), dtype=np.uint8)
    col = 1 if side < 3 else 0
    row = 1 if side < PREVIEW_SIZE else 0
    grid[row:row + side, col:col + side] = shape
    return grid


@dataclass
class Block:
    """Active falling piece in the game.

    ``x`` and ``y`` locate the top-left corner of the piece's square shape
    matrix on the board (``y`` may be negative while the piece is above the
    visible field).  A single pending speculative change can be opened with
    :meth:`begin` and resolved with :meth:`commit` or :meth:`revert`.
    """

    kind: TetrominoType
    rotation: Rotation = Rotation.DEFAULT
    x: int = 0
    y: int = 0
    _saved: Optional[Tuple[int, int, Rotation]] = field(
        default=None, init=False, repr=False, compare=False
    )

    @classmethod
    def spawn(cls, kind: TetrominoType, cols: int) -> "Block":
        """Create a piece of ``kind`` centred above a field ``cols`` wide."""

        side = _BASE_SHAPES[kind].shape[0]
        return cls(kind, Rotation.DEFAULT, cols // 2 - (side + 1) // 2, -1)

    @property
    def arity(self) -> RotationArity:
        return rotation_arity(self.kind)

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.kind]

    @property
    def pending(self) -> bool:
        """``True`` while a speculative change awaits commit or revert."""

        return self._saved is not None

    def shape(self) -> Shape:
        return rotated_shape(self.kind, self.rotation)

    def cells(self) -> List[Tuple[int, int, int]]:
        """Return ``(row, col, value)`` for every occupied cell on the board."""

        shape = self.shape()
        rows, cols = np.nonzero(shape)
        return [
            (self.y + int(r), self.x + int(c), int(shape[r, c]))
            for r, c in zip(rows, cols)
        ]

    def kicks(self) -> Tuple[Kick, ...]:
        return wall_kicks(self.kind, self.rotation)

    def begin(self, x: int, y: int, rotation: Rotation) -> None:
        """Tentatively move to ``(x, y, rotation)``, remembering the old triple."""

        if self._saved is not None:
            raise RuntimeError("A speculative change is already pending")
        self._saved = (self.x, self.y, self.rotation)
        self.x, self.y, self.rotation = x, y, rotation

    def commit(self) -> None:
        self._saved = None

    def revert(self) -> None:
        if self._saved is not None:
            self.x, self.y, self.rotation = self._saved
            self._saved = None

    def end(self, ok: bool) -> None:
        """Commit the pending change when ``ok`` is true, revert it otherwise."""

        if ok:
            self.commit()
        else:
            self.revert()
