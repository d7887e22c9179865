"""Objects a ray can strike, and lists of them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from .aabb import AABB
from .hit_record import HitRecord
from .ray import Ray
from .rng import rnd_int
from .vector import Vec3


class Hittable(ABC):
    """Something that can be intersected by a ray and bounded by a box."""

    @abstractmethod
    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        """The hit strictly inside the ray interval, or None."""

    @abstractmethod
    def bounding_box(self) -> AABB:
        """A box enclosing the whole object."""

    def pdf_value(self, origin: Vec3, direction: Vec3) -> float:
        """Density of sampling ``direction`` from ``origin`` towards this object."""
        return 0.0

    def random(self, origin: Vec3) -> Vec3:
        """A direction from ``origin`` sampled towards this object."""
        return Vec3(1.0, 0.0, 0.0)


class HittableList(Hittable):
    """An ordered collection of hittables, itself hittable."""

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self._objects: list[Hittable] = []
        self._box: AABB | None = None
        for obj in objects:
            self.add(obj)

    def add(self, obj: Hittable) -> None:
        box = obj.bounding_box()
        self._box = box if self._box is None else self._box.union(box)
        self._objects.append(obj)

    def __len__(self) -> int:
        return len(self._objects)

    def __getitem__(self, index: int) -> Hittable:
        return self._objects[index]

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self._objects)

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        """The closest hit among all members."""
        closest = ray_tmax
        result = None
        for obj in self._objects:
            rec = obj.hit(r, ray_tmin, closest)
            if rec is not None:
                closest = rec.t
                result = rec
        return result

    def bounding_box(self) -> AABB:
        if self._box is None:
            raise ValueError("an empty list has no bounding box")
        return self._box

    def box_of_range(self, start: int, end: int) -> AABB:
        """Box enclosing members ``start`` up to, not including, ``end``."""
        members = self._objects[start:end]
        if not members:
            raise ValueError(f"empty range [{start}, {end})")
        box = members[0].bounding_box()
        for obj in members[1:]:
            box = box.union(obj.bounding_box())
        return box

    def pdf_value(self, origin: Vec3, direction: Vec3) -> float:
        """Average of the members' densities; zero for an empty list."""
        if not self._objects:
            return 0.0
        weight = 1.0 / len(self._objects)
        return sum(weight * obj.pdf_value(origin, direction) for obj in self._objects)

    def random(self, origin: Vec3) -> Vec3:
        """A direction sampled towards one member chosen uniformly."""
        return self._objects[rnd_int(0, len(self._objects) - 1)].random(origin)