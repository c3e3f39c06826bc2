from __future__ import annotations

import random
from collections import Counter

import pytest

from blockfall.bag import BAG_SIZE, Bag
from blockfall.tetromino import TetrominoType


def test_bag_holds_each_kind_batch_times() -> None:
    bag = Bag(batch=2, rng=random.Random(0))
    drawn = [bag.draw() for _ in range(14)]
    assert len(bag) == 0
    assert Counter(drawn) == {kind: 2 for kind in TetrominoType}


def test_exhausted_bag_refills_on_next_draw() -> None:
    bag = Bag(rng=random.Random(1))
    assert bag.capacity == 7 * BAG_SIZE
    for _ in range(bag.capacity):
        bag.draw()
    assert len(bag) == 0
    bag.draw()
    assert len(bag) == bag.capacity - 1


def test_seeded_bags_repeat_sequence() -> None:
    first = Bag(rng=random.Random(42))
    second = Bag(rng=random.Random(42))
    assert [first.draw() for _ in range(30)] == [second.draw() for _ in range(30)]


def test_pending_is_a_copy() -> None:
    bag = Bag(batch=1)
    bag.refill()
    pending = bag.pending
    pending.clear()
    assert len(bag) == 7


def test_batch_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Bag(batch=0)
