"""Volumes of uniform fog or smoke."""

from __future__ import annotations

import math
import sys

from .aabb import AABB
from .hit_record import HitRecord
from .hittable import Hittable
from .material import Isotropic
from .ray import Ray
from .rng import rnd_double
from .texture import Texture
from .vector import Vec3

_EXIT_GAP = 0.0001


class ConstantMedium(Hittable):
    """A participating medium of given density filling a closed boundary.

    Entry and exit points are searched along the whole positive ray,
    regardless of the interval the caller asks about.
    """

    def __init__(self, boundary: Hittable, density: float, albedo: Texture | Vec3) -> None:
        self.boundary = boundary
        self.neg_inv_density = -1.0 / density
        self.phase_function = Isotropic(albedo)

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        rec1 = self.boundary.hit(r, sys.float_info.min, math.inf)
        if rec1 is None:
            return None
        rec2 = self.boundary.hit(r, rec1.t + _EXIT_GAP, math.inf)
        if rec2 is None:
            return None
        if rec1.t >= rec2.t:
            return None
        t1 = max(rec1.t, 0.0)

        ray_length = r.direction.length()
        dist_in_medium = (rec2.t - t1) * ray_length
        sample = rnd_double()
        hit_dist = self.neg_inv_density * math.log(sample) if sample > 0 else math.inf
        if hit_dist > dist_in_medium:
            return None

        t = t1 + hit_dist / ray_length
        return HitRecord(
            p=r.at(t),
            normal=Vec3(1.0, 0.0, 0.0),
            t=t,
            front_face=True,
            mat=self.phase_function,
        )

    def bounding_box(self) -> AABB:
        return self.boundary.bounding_box()