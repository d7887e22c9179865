import math

import pytest

from lumentrace.aabb import AABB
from lumentrace.ray import Ray
from lumentrace.vector import Vec3

UNIT = AABB.from_points(Vec3(0.0, 0.0, 0.0), Vec3(1.0, 1.0, 1.0))


def test_from_points_orders_corners():
    a = Vec3(3.0, -1.0, 2.0)
    b = Vec3(-2.0, 4.0, 0.5)
    assert AABB.from_points(a, b) == AABB.from_points(b, a)
    box = AABB.from_points(a, b)
    assert box.x == (b.x, a.x)
    assert box.y == (a.y, b.y)


def test_from_points_pads_flat_axis():
    box = AABB.from_points(Vec3(1.0, 2.0, 3.0), Vec3(1.0, 5.0, 6.0))
    lo, hi = box.x
    assert hi - lo >= 0.001 - 1e-12
    assert math.isclose((lo + hi) / 2, 1.0)
    assert box.y == (2.0, 5.0)


def test_axis_interval():
    assert [UNIT.axis_interval(i) for i in range(3)] == [UNIT.x, UNIT.y, UNIT.z]
    with pytest.raises(IndexError):
        UNIT.axis_interval(3)


def test_union_encloses_both_and_is_idempotent():
    other = AABB.from_points(Vec3(-2.0, 0.5, 0.5), Vec3(0.5, 3.0, 0.7))
    u = UNIT.union(other)
    for box in (UNIT, other):
        for axis in range(3):
            assert u.axis_interval(axis)[0] <= box.axis_interval(axis)[0]
            assert u.axis_interval(axis)[1] >= box.axis_interval(axis)[1]
    assert u.union(u) == u
    assert UNIT.union(other) == other.union(UNIT)


def test_longest_axis():
    assert AABB.from_points(Vec3(0, 0, 0), Vec3(1, 3, 2)).longest_axis() == 1
    assert AABB.from_points(Vec3(0, 0, 0), Vec3(5, 3, 2)).longest_axis() == 0
    assert AABB.from_points(Vec3(0, 0, 0), Vec3(1, 3, 9)).longest_axis() == 2


def test_hit_through_center():
    r = Ray(Vec3(-1.0, 0.5, 0.5), Vec3(1.0, 0.0, 0.0))
    assert UNIT.hit(r, 0.0, math.inf)


def test_hit_misses_beside_box():
    r = Ray(Vec3(-1.0, 2.0, 0.5), Vec3(1.0, 0.0, 0.0))
    assert not UNIT.hit(r, 0.0, math.inf)


def test_hit_respects_t_range():
    r = Ray(Vec3(-1.0, 0.5, 0.5), Vec3(1.0, 0.0, 0.0))
    assert not UNIT.hit(r, 0.0, 0.5)
    assert not UNIT.hit(r, 2.5, math.inf)


def test_hit_from_negative_direction():
    r = Ray(Vec3(0.5, 0.5, 5.0), Vec3(0.0, 0.0, -1.0))
    assert UNIT.hit(r, 0.0, math.inf)


def test_shifted_round_trip():
    offset = Vec3(2.5, -1.0, 10.0)
    moved = UNIT.shifted(offset)
    assert moved.x[0] - UNIT.x[0] == pytest.approx(offset.x)
    back = moved.shifted(-offset)
    for axis in range(3):
        assert back.axis_interval(axis) == pytest.approx(UNIT.axis_interval(axis))