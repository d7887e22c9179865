"""Moved and rotated instances of other hittables."""

from __future__ import annotations

import itertools
import math

from .aabb import AABB
from .hit_record import HitRecord
from .hittable import Hittable
from .ray import Ray
from .vector import Vec3


class Translate(Hittable):
    """``obj`` displaced by ``offset``."""

    def __init__(self, obj: Hittable, offset: Vec3) -> None:
        self.obj = obj
        self.offset = offset
        self._box = obj.bounding_box().shifted(offset)

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        rec = self.obj.hit(Ray(r.origin - self.offset, r.direction), ray_tmin, ray_tmax)
        if rec is None:
            return None
        rec.p = rec.p + self.offset
        return rec

    def bounding_box(self) -> AABB:
        return self._box

    def pdf_value(self, origin: Vec3, direction: Vec3) -> float:
        return self.obj.pdf_value(origin - self.offset, direction)

    def random(self, origin: Vec3) -> Vec3:
        return self.obj.random(origin - self.offset)


class RotateY(Hittable):
    """``obj`` turned by ``angle`` degrees about the y axis."""

    def __init__(self, obj: Hittable, angle: float) -> None:
        self.obj = obj
        rad = math.radians(angle)
        self.sin_theta = math.sin(rad)
        self.cos_theta = math.cos(rad)

        box = obj.bounding_box()
        lo = [math.inf] * 3
        hi = [-math.inf] * 3
        for x, y, z in itertools.product(box.x, box.y, box.z):
            corner = self._to_world(Vec3(x, y, z))
            for axis in range(3):
                lo[axis] = min(lo[axis], corner[axis])
                hi[axis] = max(hi[axis], corner[axis])
        self._box = AABB.from_points(Vec3(*lo), Vec3(*hi))

    def _to_object(self, v: Vec3) -> Vec3:
        return Vec3(
            self.cos_theta * v.x - self.sin_theta * v.z,
            v.y,
            self.sin_theta * v.x + self.cos_theta * v.z,
        )

    def _to_world(self, v: Vec3) -> Vec3:
        return Vec3(
            self.cos_theta * v.x + self.sin_theta * v.z,
            v.y,
            -self.sin_theta * v.x + self.cos_theta * v.z,
        )

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        rotated = Ray(self._to_object(r.origin), self._to_object(r.direction))
        rec = self.obj.hit(rotated, ray_tmin, ray_tmax)
        if rec is None:
            return None
        rec.p = self._to_world(rec.p)
        rec.normal = self._to_world(rec.normal)
        return rec

    def bounding_box(self) -> AABB:
        return self._box

    def pdf_value(self, origin: Vec3, direction: Vec3) -> float:
        return self.obj.pdf_value(self._to_object(origin), self._to_object(direction))

    def random(self, origin: Vec3) -> Vec3:
        return self._to_world(self.obj.random(self._to_object(origin)))