"""Triangles."""

from __future__ import annotations

from .aabb import AABB
from .hit_record import HitRecord
from .hittable import Hittable
from .material import Material
from .ray import Ray
from .vector import Vec3

_PARALLEL_EPS = 1e-8


class Triangle(Hittable):
    """The triangle with corners ``a``, ``b`` and ``c``.

    The stored normal is ``(b - a) x (c - a)``, not scaled to unit length.
    """

    def __init__(self, a: Vec3, b: Vec3, c: Vec3, mat: Material) -> None:
        self.a = a
        self.b = b
        self.c = c
        self.normal = (b - a).cross(c - a)
        self.D = self.normal.dot(self.normal)
        self.mat = mat
        lo = Vec3(min(a.x, b.x, c.x), min(a.y, b.y, c.y), min(a.z, b.z, c.z))
        hi = Vec3(max(a.x, b.x, c.x), max(a.y, b.y, c.y), max(a.z, b.z, c.z))
        self._box = AABB.from_points(lo, hi)

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        denom = self.normal.dot(r.direction)
        if -_PARALLEL_EPS < denom < _PARALLEL_EPS:
            return None

        d = -self.normal.dot(self.a)
        t = -(self.normal.dot(r.origin) + d) / denom
        if t < ray_tmin or t > ray_tmax:
            return None

        p = r.at(t)
        na = (self.c - self.b).cross(p - self.b)
        nb = (self.a - self.c).cross(p - self.c)
        nc = (self.b - self.a).cross(p - self.a)
        weights = (self.normal.dot(n) / self.D for n in (na, nb, nc))
        if any(w < 0 for w in weights):
            return None

        rec = HitRecord(p=p, t=t, mat=self.mat)
        rec.set_face_normal(r, self.normal)
        return rec

    def bounding_box(self) -> AABB:
        return self._box