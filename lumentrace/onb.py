"""Orthonormal bases."""

from __future__ import annotations

from dataclasses import dataclass

from .vector import Vec3


@dataclass(frozen=True, slots=True)
class Onb:
    """A right-angled frame of three unit axes ``u``, ``v`` and ``w``."""

    u: Vec3
    v: Vec3
    w: Vec3

    @classmethod
    def from_normal(cls, n: Vec3) -> Onb:
        """Build a basis whose ``w`` axis points along ``n``."""
        w = n.unit()
        helper = Vec3(0.0, 1.0, 0.0) if abs(w.x) > 0.9 else Vec3(1.0, 0.0, 0.0)
        v = w.cross(helper).unit()
        u = w.cross(v).unit()
        return cls(u, v, w)

    def transform(self, v: Vec3) -> Vec3:
        """Express local coordinates ``v`` in world space."""
        return self.u * v.x + self.v * v.y + self.w * v.z