"""The record of where a ray struck a surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .ray import Ray
from .vector import Vec3


@dataclass
class HitRecord:
    """Point, normal, ray parameter, surface coordinates and material of a hit."""

    p: Vec3 = field(default_factory=Vec3)
    normal: Vec3 = field(default_factory=Vec3)
    t: float = 0.0
    u: float = 0.0
    v: float = 0.0
    front_face: bool = False
    mat: Any = None

    def set_face_normal(self, r: Ray, outward_normal: Vec3) -> None:
        """Store a normal that always faces against the incoming ray."""
        self.front_face = r.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal