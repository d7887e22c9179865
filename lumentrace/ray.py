"""Rays with an origin and a direction."""

from __future__ import annotations

from dataclasses import dataclass

from .vector import Vec3


@dataclass(frozen=True, slots=True)
class Ray:
    """A half-line ``origin + t * direction``."""

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Point reached after travelling ``t`` units of direction."""
        return self.direction * t + self.origin