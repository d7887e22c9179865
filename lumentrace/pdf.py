"""Probability densities over directions, used for importance sampling."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from .hittable import Hittable
from .onb import Onb
from .rng import rnd_double
from .vector import Vec3, random_cosine_direction, random_unit_vector


class Pdf(ABC):
    """A density over directions that can also be sampled."""

    @abstractmethod
    def value(self, direction: Vec3) -> float:
        """Density of ``direction``."""

    @abstractmethod
    def generate(self) -> Vec3:
        """A direction drawn from this density."""


class SpherePdf(Pdf):
    """Uniform over all directions."""

    def value(self, direction: Vec3) -> float:
        return 1 / (4 * math.pi)

    def generate(self) -> Vec3:
        return random_unit_vector()


class CosinePdf(Pdf):
    """Cosine-weighted over the hemisphere around a normal."""

    def __init__(self, w: Vec3) -> None:
        self.uvw = Onb.from_normal(w)

    def value(self, direction: Vec3) -> float:
        cosine_theta = direction.unit().dot(self.uvw.w)
        return cosine_theta / math.pi if cosine_theta > 0 else 0.0

    def generate(self) -> Vec3:
        return self.uvw.transform(random_cosine_direction())


class HittablePdf(Pdf):
    """Directions from an origin towards a hittable object."""

    def __init__(self, objects: Hittable, origin: Vec3) -> None:
        self.objects = objects
        self.origin = origin

    def value(self, direction: Vec3) -> float:
        return self.objects.pdf_value(self.origin, direction)

    def generate(self) -> Vec3:
        return self.objects.random(self.origin)


class MixturePdf(Pdf):
    """An even blend of two densities."""

    def __init__(self, p0: Pdf, p1: Pdf) -> None:
        self.p0 = p0
        self.p1 = p1

    def value(self, direction: Vec3) -> float:
        return 0.5 * self.p0.value(direction) + 0.5 * self.p1.value(direction)

    def generate(self) -> Vec3:
        if rnd_double() < 0.5:
            return self.p0.generate()
        return self.p1.generate()