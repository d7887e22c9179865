"""Bounding volume hierarchies."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .aabb import AABB
from .hit_record import HitRecord
from .hittable import Hittable
from .ray import Ray


def _box_of(items: Sequence[Hittable]) -> AABB:
    box = items[0].bounding_box()
    for obj in items[1:]:
        box = box.union(obj.bounding_box())
    return box


class BvhNode(Hittable):
    """A binary tree node whose children are hittables or further nodes."""

    def __init__(self, left: Hittable, right: Hittable) -> None:
        self.left = left
        self.right = right
        self._box = left.bounding_box().union(right.bounding_box())

    @classmethod
    def from_list(cls, objects: Iterable[Hittable]) -> BvhNode:
        """Build a tree over ``objects``, splitting along the longest axis."""
        items = list(objects)
        if not items:
            raise ValueError("cannot build a hierarchy over no objects")
        return cls._build(items)

    @classmethod
    def _build(cls, items: list[Hittable]) -> BvhNode:
        if len(items) == 1:
            return cls(items[0], items[0])
        if len(items) == 2:
            return cls(items[0], items[1])
        axis = _box_of(items).longest_axis()
        items = sorted(items, key=lambda obj: obj.bounding_box().axis_interval(axis)[0])
        mid = len(items) // 2
        return cls(cls._build(items[:mid]), cls._build(items[mid:]))

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        if not self._box.hit(r, ray_tmin, ray_tmax):
            return None
        left = self.left.hit(r, ray_tmin, ray_tmax)
        right = self.right.hit(r, ray_tmin, left.t if left is not None else ray_tmax)
        return right if right is not None else left

    def bounding_box(self) -> AABB:
        return self._box