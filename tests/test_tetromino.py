from __future__ import annotations

import numpy as np
import pytest

from blockfall.tetromino import (
    PIECE_VALUES,
    Block,
    Rotation,
    RotationArity,
    TetrominoType,
    base_shape,
    preview,
    rotated_shape,
    rotation_arity,
    wall_kicks,
)


def test_piece_values_match_shape_colours() -> None:
    assert [PIECE_VALUES[t] for t in TetrominoType] == [1, 2, 3, 4, 5, 6, 7]
    for kind in TetrominoType:
        colours = set(np.unique(base_shape(kind)).tolist()) - {0}
        assert colours == {PIECE_VALUES[kind]}


def test_rotation_cycles_by_arity() -> None:
    assert Rotation.DEFAULT.next(RotationArity.NONE) is Rotation.DEFAULT
    assert Rotation.DEFAULT.next(RotationArity.HALF) is Rotation.CCW
    assert Rotation.CCW.next(RotationArity.HALF) is Rotation.DEFAULT

    state = Rotation.DEFAULT
    seen = []
    for _ in range(4):
        state = state.next(RotationArity.FULL)
        seen.append(state)
    assert seen == [Rotation.CW, Rotation.REVERSE, Rotation.CCW, Rotation.DEFAULT]


def test_impossible_rotation_states_raise() -> None:
    with pytest.raises(RuntimeError):
        Rotation.CW.next(RotationArity.HALF)
    with pytest.raises(RuntimeError):
        Rotation.CCW.next(RotationArity.NONE)
    with pytest.raises(RuntimeError):
        wall_kicks(TetrominoType.I, Rotation.REVERSE)


def test_every_kick_table_starts_in_place() -> None:
    for kind in TetrominoType:
        rotation = Rotation.DEFAULT
        arity = Block(kind).arity
        for _ in range(arity.value):
            assert wall_kicks(kind, rotation)[0] == (0, 0)
            rotation = rotation.next(arity)


def test_rotated_shapes() -> None:
    assert rotated_shape(TetrominoType.T, Rotation.CW).tolist() == [
        [0, 2, 0],
        [0, 2, 2],
        [0, 2, 0],
    ]
    assert rotated_shape(TetrominoType.T, Rotation.REVERSE).tolist() == [
        [0, 0, 0],
        [2, 2, 2],
        [0, 2, 0],
    ]
    vertical = rotated_shape(TetrominoType.I, Rotation.CCW)
    assert vertical[:, 1].tolist() == [1, 1, 1, 1]
    assert int(np.count_nonzero(vertical)) == 4
    o_shape = base_shape(TetrominoType.O)
    for rotation in Rotation:
        assert np.array_equal(rotated_shape(TetrominoType.O, rotation), o_shape)


def test_preview_is_four_by_four() -> None:
    assert preview(TetrominoType.O).tolist() == [
        [0, 0, 0, 0],
        [0, 7, 7, 0],
        [0, 7, 7, 0],
        [0, 0, 0, 0],
    ]
    assert preview(TetrominoType.T).tolist() == [
        [0, 0, 0, 0],
        [0, 2, 0, 0],
        [2, 2, 2, 0],
        [0, 0, 0, 0],
    ]
    assert np.array_equal(preview(TetrominoType.I), base_shape(TetrominoType.I))


def test_spawn_centres_piece_above_field() -> None:
    assert (Block.spawn(TetrominoType.I, 10).x, Block.spawn(TetrominoType.I, 10).y) == (3, -1)
    assert Block.spawn(TetrominoType.T, 10).x == 3
    assert Block.spawn(TetrominoType.O, 10).x == 4
    assert Block.spawn(TetrominoType.T, 10).rotation is Rotation.DEFAULT


def test_cells_are_absolute_coordinates() -> None:
    block = Block(TetrominoType.T, x=3, y=-1)
    assert sorted(block.cells()) == [(-1, 4, 2), (0, 3, 2), (0, 4, 2), (0, 5, 2)]


def test_speculative_change_commit_and_revert() -> None:
    block = Block(TetrominoType.J, x=2, y=5)
    block.begin(3, 6, Rotation.CW)
    assert block.pending
    with pytest.raises(RuntimeError):
        block.begin(4, 7, Rotation.REVERSE)
    block.revert()
    assert (block.x, block.y, block.rotation) == (2, 5, Rotation.DEFAULT)
    assert not block.pending

    block.begin(3, 6, Rotation.CW)
    block.end(True)
    assert (block.x, block.y, block.rotation) == (3, 6, Rotation.CW)
    assert not block.pending


def test_block_arity_follows_kind() -> None:
    assert rotation_arity(TetrominoType.O) is RotationArity.NONE
    assert rotation_arity(TetrominoType.Z) is RotationArity.HALF
    for kind in TetrominoType:
        assert Block(kind).arity is rotation_arity(kind)
