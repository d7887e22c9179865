"""Axis-aligned bounding boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .ray import Ray
from .vector import Vec3

_MIN_WIDTH = 0.001

Interval = tuple[float, float]


def _pad(interval: Interval) -> Interval:
    lo, hi = interval
    if hi - lo < _MIN_WIDTH:
        return lo - _MIN_WIDTH / 2, hi + _MIN_WIDTH / 2
    return interval


def _inverse(d: float) -> float:
    return 1.0 / d if d != 0.0 else math.copysign(math.inf, d)


@dataclass(frozen=True, slots=True)
class AABB:
    """A box given by one closed interval per axis.

    The constructor stores the intervals as given; ``from_points`` widens
    any axis thinner than 0.001 so that flat objects still have volume.
    """

    x: Interval
    y: Interval
    z: Interval

    @classmethod
    def from_points(cls, a: Vec3, b: Vec3) -> AABB:
        """The box spanned by two opposite corners, in any order."""
        return cls(
            _pad((min(a.x, b.x), max(a.x, b.x))),
            _pad((min(a.y, b.y), max(a.y, b.y))),
            _pad((min(a.z, b.z), max(a.z, b.z))),
        )

    def axis_interval(self, axis: int) -> Interval:
        return (self.x, self.y, self.z)[axis]

    def union(self, other: AABB) -> AABB:
        """The smallest box enclosing both boxes."""
        return AABB(
            *(
                (min(mine[0], theirs[0]), max(mine[1], theirs[1]))
                for mine, theirs in zip((self.x, self.y, self.z), (other.x, other.y, other.z))
            )
        )

    def longest_axis(self) -> int:
        x_size = self.x[1] - self.x[0]
        y_size = self.y[1] - self.y[0]
        z_size = self.z[1] - self.z[0]
        if x_size > y_size:
            return 0 if x_size > z_size else 2
        return 1 if y_size > z_size else 2

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> bool:
        """Slab test: does the ray pass through the box within (tmin, tmax)?"""
        for axis in range(3):
            lo, hi = self.axis_interval(axis)
            orig = r.origin[axis]
            inv = _inverse(r.direction[axis])
            t0 = (lo - orig) * inv
            t1 = (hi - orig) * inv
            if t0 < t1:
                if t0 > ray_tmin:
                    ray_tmin = t0
                if t1 < ray_tmax:
                    ray_tmax = t1
            else:
                if t1 > ray_tmin:
                    ray_tmin = t1
                if t0 < ray_tmax:
                    ray_tmax = t0
            if ray_tmax <= ray_tmin:
                return False
        return True

    def shifted(self, offset: Vec3) -> AABB:
        """This box moved by ``offset``."""
        return AABB(
            (self.x[0] + offset.x, self.x[1] + offset.x),
            (self.y[0] + offset.y, self.y[1] + offset.y),
            (self.z[0] + offset.z, self.z[1] + offset.z),
        )