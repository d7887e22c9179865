"""Environment maps that colour rays escaping the scene."""

from __future__ import annotations

import math

from .ray import Ray
from .texture import Image, ImageTexture, Texture
from .vector import Vec3


class Skybox:
    """A texture wrapped around the scene as a sphere at infinity.

    ``source`` is a texture or the name of an image file, which is looked
    up the same way as image textures are. The direction used for the
    lookup is the ray direction taken relative to ``center``.
    """

    def __init__(self, source: str | Texture, center: Vec3 = Vec3()) -> None:
        self.texture = ImageTexture(Image.load(source)) if isinstance(source, str) else source
        self.center = center

    def value(self, r: Ray) -> Vec3:
        """Colour seen along the direction of ``r``."""
        normal = (r.direction - self.center).unit()
        theta = math.acos(min(max(-normal.y, -1.0), 1.0))
        phi = math.atan2(-normal.z, normal.x) + math.pi
        return self.texture.value(phi / (2 * math.pi), theta / math.pi, normal)