"""Spheres."""

from __future__ import annotations

import math

from .aabb import AABB
from .hit_record import HitRecord
from .hittable import Hittable
from .material import Material
from .onb import Onb
from .ray import Ray
from .rng import rnd_double
from .vector import Vec3


def _sphere_uv(p: Vec3) -> tuple[float, float]:
    """Surface coordinates of a point on the unit sphere."""
    theta = math.acos(min(max(-p.y, -1.0), 1.0))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi


def _random_to_sphere(radius: float, dist_sqr: float) -> Vec3:
    r1 = rnd_double()
    r2 = rnd_double()
    value = 1.0 - radius * radius / dist_sqr
    z = math.sqrt(value) if value > 0 else 0.0
    z = 1 + r2 * (z - 1)
    phi = 2 * math.pi * r1
    s = math.sqrt(max(0.0, 1 - z * z))
    return Vec3(math.cos(phi) * s, math.sin(phi) * s, z)


class Sphere(Hittable):
    """A sphere; a negative radius is treated as zero."""

    def __init__(self, center: Vec3, radius: float, mat: Material) -> None:
        self.center = center
        self.radius = radius if radius > 0 else 0.0
        rvec = Vec3(radius, radius, radius)
        self._box = AABB.from_points(center - rvec, center + rvec)
        self.mat = mat

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        oc = self.center - r.origin
        a = r.direction.length_squared()
        h = r.direction.dot(oc)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)
        root = (h - sqrtd) / a
        if root <= ray_tmin or ray_tmax <= root:
            root = (h + sqrtd) / a
            if root <= ray_tmin or ray_tmax <= root:
                return None

        p = r.at(root)
        outward_normal = (p - self.center) / self.radius
        u, v = _sphere_uv(outward_normal)
        rec = HitRecord(p=p, t=root, u=u, v=v, mat=self.mat)
        rec.set_face_normal(r, outward_normal)
        return rec

    def bounding_box(self) -> AABB:
        return self._box

    def pdf_value(self, origin: Vec3, direction: Vec3) -> float:
        """Uniform density over the cone of directions that see the sphere."""
        if self.hit(Ray(origin, direction), 0.001, math.inf) is None:
            return 0.0
        dist_sqr = (self.center - origin).length_squared()
        value = 1.0 - self.radius * self.radius / dist_sqr
        cos_theta_max = math.sqrt(value) if value > 0 else 0.0
        solid_angle = 2 * math.pi * (1.0 - cos_theta_max)
        return 1 / solid_angle

    def random(self, origin: Vec3) -> Vec3:
        """A direction from ``origin`` uniformly inside the sphere's cone."""
        direction = self.center - origin
        uvw = Onb.from_normal(direction)
        return uvw.transform(_random_to_sphere(self.radius, direction.length_squared()))