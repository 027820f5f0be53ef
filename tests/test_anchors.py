"""
Tests for the candidate-corner pool (truckpack.packers.anchors).
"""

from __future__ import annotations

from truckpack.geometry import Dimensions, Position, ORIGIN
from truckpack.packers.anchors import AnchorPool, anchor_sort_key


CUBE = Dimensions(1.0, 1.0, 1.0)
TRUCK = Dimensions(length=2.0, width=2.0, height=2.0)


def test_new_pool_holds_only_origin():
    pool = AnchorPool()
    assert len(pool) == 1
    assert ORIGIN in pool
    assert pool.ordered() == [ORIGIN]


def test_pools_are_independent():
    a = AnchorPool()
    b = AnchorPool()
    a.consume(ORIGIN)
    assert len(a) == 0
    assert ORIGIN in b


def test_propose_adds_right_top_front():
    pool = AnchorPool()
    pool.consume(ORIGIN)
    added = pool.propose(ORIGIN, Dimensions(length=0.5, width=0.7, height=0.3), TRUCK)
    assert added == [
        Position(0.7, 0.0, 0.0),
        Position(0.0, 0.3, 0.0),
        Position(0.0, 0.0, 0.5),
    ]
    assert len(pool) == 3


def test_ordered_is_bottom_then_back_then_left():
    pool = AnchorPool()
    pool.consume(ORIGIN)
    pool.propose(ORIGIN, CUBE, TRUCK)
    assert pool.ordered() == [
        Position(1.0, 0.0, 0.0),  # y=0, z=0
        Position(0.0, 0.0, 1.0),  # y=0, z=1
        Position(0.0, 1.0, 0.0),  # y=1
    ]


def test_sort_key_breaks_ties_on_x():
    assert sorted(
        [Position(0.5, 0.0, 0.0), Position(0.2, 0.0, 0.0)], key=anchor_sort_key
    ) == [Position(0.2, 0.0, 0.0), Position(0.5, 0.0, 0.0)]


def test_propose_skips_points_on_or_past_far_walls():
    pool = AnchorPool()
    pool.consume(ORIGIN)
    added = pool.propose(ORIGIN, CUBE, Dimensions(1.0, 1.0, 1.0))
    assert added == []
    assert len(pool) == 0


def test_propose_deduplicates_exact_coordinates():
    pool = AnchorPool()
    pool.consume(ORIGIN)
    truck = Dimensions(length=2.4, width=2.4, height=1.2)
    pallet = Dimensions(1.2, 1.2, 1.2)

    pool.propose(ORIGIN, pallet, truck)            # (1.2,0,0), (0,0,1.2)
    right = Position(1.2, 0.0, 0.0)
    front = Position(0.0, 0.0, 1.2)
    pool.consume(right)
    pool.propose(right, pallet, truck)             # (1.2,0,1.2)
    pool.consume(front)
    added = pool.propose(front, pallet, truck)     # (1.2,0,1.2) again

    assert added == []
    assert list(pool) == [Position(1.2, 0.0, 1.2)]


def test_near_duplicates_are_kept():
    pool = AnchorPool()
    pool.propose(ORIGIN, CUBE, TRUCK)
    added = pool.propose(ORIGIN, Dimensions(1.0, 1.0 + 1e-12, 1.0), TRUCK)
    assert Position(1.0 + 1e-12, 0.0, 0.0) in added
    assert len(pool) == 5


def test_consume_removes_only_that_anchor():
    pool = AnchorPool()
    pool.propose(ORIGIN, CUBE, TRUCK)
    pool.consume(Position(0.0, 1.0, 0.0))
    assert Position(0.0, 1.0, 0.0) not in pool
    assert len(pool) == 3
