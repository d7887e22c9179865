"""Parallelograms and boxes built from them."""

from __future__ import annotations

import math

from .aabb import AABB
from .hit_record import HitRecord
from .hittable import HittableList
from .hittable import Hittable
from .material import Material
from .ray import Ray
from .rng import rnd_double, rnd_int
from .vector import Vec3

_PARALLEL_EPS = 1e-8
_PDF_TMIN = 0.0001


class Quad(Hittable):
    """The parallelogram with corner ``Q`` and edges ``u`` and ``v``."""

    def __init__(self, Q: Vec3, u: Vec3, v: Vec3, mat: Material) -> None:
        self.Q = Q
        self.u = u
        self.v = v
        n = u.cross(v)
        self.w = n / n.dot(n)
        self.area = n.length()
        self.normal = n.unit()
        self.D = self.normal.dot(Q)
        self.mat = mat
        diagonal = AABB.from_points(Q, Q + u + v)
        self._box = diagonal.union(AABB.from_points(Q + u, Q + v))

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        denom = self.normal.dot(r.direction)
        if -_PARALLEL_EPS < denom < _PARALLEL_EPS:
            return None

        t = (self.D - self.normal.dot(r.origin)) / denom
        if t < ray_tmin or t > ray_tmax:
            return None

        intersection = r.at(t)
        planar = intersection - self.Q
        alpha = self.w.dot(planar.cross(self.v))
        beta = self.w.dot(self.u.cross(planar))
        if not (0 <= alpha <= 1 and 0 <= beta <= 1):
            return None

        rec = HitRecord(p=intersection, t=t, u=alpha, v=beta, mat=self.mat)
        rec.set_face_normal(r, self.normal)
        return rec

    def bounding_box(self) -> AABB:
        return self._box

    def _density(self, r: Ray, ray_tmax: float) -> tuple[float, float] | None:
        rec = self.hit(r, _PDF_TMIN, ray_tmax)
        if rec is None:
            return None
        direction = r.direction
        dist_sqr = rec.t * rec.t * direction.length_squared()
        cosine = abs(direction.dot(rec.normal) / direction.length())
        return dist_sqr / (cosine * self.area), rec.t

    def pdf_value(self, origin: Vec3, direction: Vec3) -> float:
        """Solid-angle density of sampling this quad from ``origin``."""
        found = self._density(Ray(origin, direction), math.inf)
        return 0.0 if found is None else found[0]

    def random(self, origin: Vec3) -> Vec3:
        """Direction from ``origin`` to a uniformly chosen point on the quad."""
        point = self.Q + self.u * rnd_double() + self.v * rnd_double()
        return point - origin


class Cube(HittableList):
    """An axis-aligned box of six quads spanning two opposite corners.

    Faces are stored as top, front, right, back, left, bottom.
    """

    def __init__(self, a: Vec3, b: Vec3, mat: Material) -> None:
        lo = Vec3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))
        hi = Vec3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))

        dx = Vec3(hi.x - lo.x, 0.0, 0.0)
        dy = Vec3(0.0, hi.y - lo.y, 0.0)
        dz = Vec3(0.0, 0.0, hi.z - lo.z)

        front = Quad(Vec3(lo.x, lo.y, hi.z), dx, dy, mat)
        right = Quad(Vec3(hi.x, lo.y, hi.z), -dz, dy, mat)
        back = Quad(Vec3(hi.x, lo.y, lo.z), -dx, dy, mat)
        left = Quad(Vec3(lo.x, lo.y, lo.z), dz, dy, mat)
        top = Quad(Vec3(lo.x, hi.y, hi.z), dx, -dz, mat)
        bottom = Quad(Vec3(lo.x, lo.y, lo.z), dx, dz, mat)

        super().__init__((top, front, right, back, left, bottom))

    def pdf_value(self, origin: Vec3, direction: Vec3) -> float:
        """Density of the nearest face the direction strikes, or zero."""
        r = Ray(origin, direction)
        nearest = math.inf
        answer = 0.0
        for face in self:
            found = face._density(r, nearest)
            if found is not None and found[0] > 0:
                answer, nearest = found
        return answer

    def random(self, origin: Vec3) -> Vec3:
        """A direction towards one of the top, front or right faces."""
        return self[rnd_int(0, 2)].random(origin)