"""Triangle meshes loaded from Wavefront OBJ files."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from pathlib import Path

from .aabb import AABB
from .bvh import BvhNode
from .hit_record import HitRecord
from .hittable import Hittable, HittableList
from .material import Material
from .ray import Ray
from .triangle import Triangle
from .vector import Vec3

_SEARCH_DIRS = ("img", "../img", "../../img")

Face = tuple[int, int, int]


def _vertex_index(token: str, count: int) -> int:
    idx = int(token.split("/", 1)[0])
    if idx > 0:
        return idx - 1
    if idx < 0:
        return count + idx
    return -1


def parse_obj(text: str) -> tuple[list[Vec3], list[Face]]:
    """Read vertex positions and triangulated faces from OBJ text.

    Face indices are made zero-based; negative indices count back from the
    vertices read so far. Polygons are split into a fan of triangles.
    Indices are not range-checked.
    """
    vertices: list[Vec3] = []
    faces: list[Face] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        parts = line.split("#", 1)[0].split()
        if not parts:
            continue
        keyword, args = parts[0], parts[1:]
        try:
            if keyword == "v":
                if len(args) < 3:
                    raise ValueError("vertex needs three coordinates")
                vertices.append(Vec3(float(args[0]), float(args[1]), float(args[2])))
            elif keyword == "f":
                corners = [_vertex_index(token, len(vertices)) for token in args]
                first = corners[0] if corners else -1
                faces.extend(
                    (first, second, third) for second, third in zip(corners[1:], corners[2:])
                )
        except ValueError as exc:
            raise ValueError(f"line {line_no}: {exc}") from exc
    return vertices, faces


def _triangles(vertices: list[Vec3], faces: Iterable[Face], mat: Material) -> list[Triangle]:
    count = len(vertices)
    return [
        Triangle(vertices[a], vertices[b], vertices[c], mat)
        for a, b, c in faces
        if all(0 <= i < count for i in (a, b, c))
    ]


class Mesh(Hittable):
    """A set of triangles held in a bounding volume hierarchy."""

    def __init__(self, triangles: Iterable[Triangle]) -> None:
        self.triangles = HittableList(triangles)
        if not len(self.triangles):
            raise ValueError("a mesh needs at least one triangle")
        self.bvh = BvhNode.from_list(self.triangles)

    def hit(self, r: Ray, ray_tmin: float, ray_tmax: float) -> HitRecord | None:
        return self.bvh.hit(r, ray_tmin, ray_tmax)

    def bounding_box(self) -> AABB:
        return self.bvh.bounding_box()


def load_mesh(filename: str, mat: Material) -> Mesh | None:
    """Load ``filename`` from ``img/``, ``../img/`` or ``../../img/``.

    Returns None, after reporting the file, when it cannot be read, and
    None when it holds no usable triangle.
    """
    for directory in _SEARCH_DIRS:
        try:
            vertices, faces = parse_obj(Path(directory, filename).read_text())
        except (OSError, ValueError):
            continue
        triangles = _triangles(vertices, faces, mat)
        return Mesh(triangles) if triangles else None
    print(f"ERROR: Could not load mesh file {filename}", file=sys.stderr)
    return None