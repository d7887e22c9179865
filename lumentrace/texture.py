"""Surface textures and the image files that back them."""

from __future__ import annotations

import itertools
import math
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from PIL import Image as PILImage

from .rng import rnd_dbl, rnd_int
from .vector import Vec3

_POINT_COUNT = 256
_SEARCH_DIRS = ("img", "../img", "../../img")
_MISSING_PIXEL = (255, 0, 255)
_HDR_GAMMA = 1.0 / 2.2


def floor_int(value: float) -> int:
    """Integer floor as the renderer computes it.

    Positive values truncate; zero and negative values truncate after
    subtracting one, so whole non-positive numbers land one below.
    """
    if value > 0:
        return int(value)
    return int(value - 1)


class Texture(ABC):
    """A colour that varies over surface coordinates and position."""

    @abstractmethod
    def value(self, u: float, v: float, p: Vec3) -> Vec3:
        """Colour at surface coordinates ``(u, v)`` and point ``p``."""


@dataclass(frozen=True)
class SolidColor(Texture):
    """A single colour everywhere."""

    albedo: Vec3

    def value(self, u: float, v: float, p: Vec3) -> Vec3:
        return self.albedo


class CheckerTexture(Texture):
    """A 3D checkerboard alternating between two textures."""

    def __init__(self, scale: float, even: Texture, odd: Texture) -> None:
        self.inv_scale = 1.0 / scale
        self.even = even
        self.odd = odd

    @classmethod
    def from_colors(cls, scale: float, even: Vec3, odd: Vec3) -> CheckerTexture:
        return cls(scale, SolidColor(even), SolidColor(odd))

    def value(self, u: float, v: float, p: Vec3) -> Vec3:
        total = (
            floor_int(self.inv_scale * p.x)
            + floor_int(self.inv_scale * p.y)
            + floor_int(self.inv_scale * p.z)
        )
        chosen = self.even if total % 2 == 0 else self.odd
        return chosen.value(u, v, p)


def _ldr(channel: float) -> int:
    scaled = (channel**_HDR_GAMMA if channel > 0 else 0.0) * 255 + 0.5
    return int(min(max(scaled, 0.0), 255.0))


def _read_radiance(raw: bytes) -> tuple[int, int, bytes]:
    """Decode a Radiance RGBE file into 8-bit RGBA pixels."""
    if not (raw.startswith(b"#?RADIANCE\n") or raw.startswith(b"#?RGBE\n")):
        raise ValueError("not a Radiance HDR file")
    pos = raw.index(b"\n") + 1
    valid_format = False
    while True:
        end = raw.index(b"\n", pos)
        line = raw[pos:end]
        pos = end + 1
        if not line:
            break
        if line == b"FORMAT=32-bit_rle_rgbe":
            valid_format = True
    if not valid_format:
        raise ValueError("unsupported HDR format")

    end = raw.index(b"\n", pos)
    tokens = raw[pos:end].split()
    pos = end + 1
    if len(tokens) != 4 or tokens[0] != b"-Y" or tokens[2] != b"+X":
        raise ValueError("unsupported HDR data layout")
    height, width = int(tokens[1]), int(tokens[3])
    if width <= 0 or height <= 0:
        raise ValueError("invalid HDR dimensions")

    body = raw[pos:]
    flat = (
        width < 8
        or width >= 32768
        or len(body) < 4
        or body[0] != 2
        or body[1] != 2
        or body[2] & 0x80
    )
    if flat:
        size = width * height * 4
        if len(body) < size:
            raise ValueError("truncated HDR data")
        rgbe = body[:size]
    else:
        rgbe = _decode_rle(body, width, height)

    out = bytearray()
    for offset in range(0, width * height * 4, 4):
        r, g, b, e = rgbe[offset : offset + 4]
        if e:
            factor = math.ldexp(1.0, e - (128 + 8))
            out += bytes((_ldr(r * factor), _ldr(g * factor), _ldr(b * factor), 255))
        else:
            out += bytes((0, 0, 0, 255))
    return width, height, bytes(out)


def _decode_rle(body: bytes, width: int, height: int) -> bytearray:
    rgbe = bytearray(width * height * 4)
    pos = 0
    for j in range(height):
        header = body[pos : pos + 4]
        pos += 4
        if len(header) < 4 or header[0] != 2 or header[1] != 2:
            raise ValueError("invalid RLE scanline")
        if (header[2] << 8) | header[3] != width:
            raise ValueError("invalid decoded scanline length")
        line = [bytearray() for _ in range(4)]
        for channel in line:
            while len(channel) < width:
                count = body[pos]
                pos += 1
                if count > 128:
                    count -= 128
                    if count > width - len(channel):
                        raise ValueError("bad RLE data in HDR")
                    channel += bytes((body[pos],)) * count
                    pos += 1
                else:
                    if count == 0 or count > width - len(channel):
                        raise ValueError("bad RLE data in HDR")
                    channel += body[pos : pos + count]
                    pos += count
        base = j * width * 4
        for i in range(width):
            rgbe[base + i * 4 : base + i * 4 + 4] = bytes(ch[i] for ch in line)
    return rgbe


def _decode_file(path: Path) -> tuple[int, int, bytes]:
    raw = path.read_bytes()
    if raw.startswith(b"#?"):
        return _read_radiance(raw)
    with PILImage.open(path) as img:
        rgba = img.convert("RGBA")
        return rgba.width, rgba.height, rgba.tobytes()


@dataclass(frozen=True)
class Image:
    """Pixels of a loaded picture, four bytes (RGBA) per pixel."""

    width: int
    height: int
    data: bytes | None
    bytes_per_pixel: int = 4

    @property
    def bytes_per_scanline(self) -> int:
        return self.width * self.bytes_per_pixel

    @classmethod
    def load(cls, filename: str) -> Image:
        """Load ``filename`` from ``img/``, ``../img/`` or ``../../img/``.

        When none can be read an error is reported and an empty image,
        whose pixels all read as magenta, is returned.
        """
        for directory in _SEARCH_DIRS:
            try:
                width, height, data = _decode_file(Path(directory) / filename)
            except (OSError, ValueError, IndexError):
                continue
            return cls(width, height, data)
        print(f"ERROR: Could not load image file {filename}", file=sys.stderr)
        return cls(0, 0, None)

    def pixel_data(self, x: int, y: int) -> tuple[int, ...]:
        """Channel values of the pixel at ``(x, y)``, clamped to the image."""
        if self.data is None:
            return _MISSING_PIXEL
        x = min(max(x, 0), self.width - 1)
        y = min(max(y, 0), self.height - 1)
        offset = y * self.bytes_per_scanline + x * self.bytes_per_pixel
        return tuple(self.data[offset : offset + self.bytes_per_pixel])


@dataclass(frozen=True)
class ImageTexture(Texture):
    """A picture wrapped over surface coordinates."""

    image: Image

    def value(self, u: float, v: float, p: Vec3) -> Vec3:
        if self.image.height <= 0:
            return Vec3(0.0, 1.0, 1.0)
        u = min(max(u, 0.0), 1.0)
        v = 1.0 - min(max(v, 0.0), 1.0)
        pixel = self.image.pixel_data(int(u * self.image.width), int(v * self.image.height))
        return Vec3(pixel[0], pixel[1], pixel[2]) * (1.0 / 255.0)


def _generate_perm() -> list[int]:
    perm = list(range(_POINT_COUNT))
    for i in range(_POINT_COUNT - 1, 0, -1):
        target = rnd_int(0, i)
        perm[i], perm[target] = perm[target], perm[i]
    return perm


class Perlin:
    """Gradient noise over a 256-entry lattice of random unit vectors."""

    def __init__(self) -> None:
        self._randvec = [
            Vec3(rnd_dbl(-1, 1), rnd_dbl(-1, 1), rnd_dbl(-1, 1)).unit()
            for _ in range(_POINT_COUNT)
        ]
        self._perm_x = _generate_perm()
        self._perm_y = _generate_perm()
        self._perm_z = _generate_perm()

    def noise(self, p: Vec3) -> float:
        i, j, k = floor_int(p.x), floor_int(p.y), floor_int(p.z)
        u, v, w = p.x - i, p.y - j, p.z - k
        uu = u * u * (3 - 2 * u)
        vv = v * v * (3 - 2 * v)
        ww = w * w * (3 - 2 * w)
        accum = 0.0
        for di, dj, dk in itertools.product((0, 1), repeat=3):
            gradient = self._randvec[
                self._perm_x[(i + di) & 255]
                ^ self._perm_y[(j + dj) & 255]
                ^ self._perm_z[(k + dk) & 255]
            ]
            weight = Vec3(u - di, v - dj, w - dk)
            accum += (
                (di * uu + (1 - di) * (1 - uu))
                * (dj * vv + (1 - dj) * (1 - vv))
                * (dk * ww + (1 - dk) * (1 - ww))
                * gradient.dot(weight)
            )
        return accum

    def turb(self, p: Vec3, depth: int) -> float:
        """Absolute sum of ``depth`` octaves of noise."""
        accum = 0.0
        weight = 1.0
        for _ in range(depth):
            accum += weight * self.noise(p)
            weight *= 0.5
            p = p * 2
        return abs(accum)


class NoiseTexture(Texture):
    """A marble-like pattern driven by Perlin turbulence."""

    def __init__(self, scale: float) -> None:
        self.scale = scale
        self.perlin = Perlin()

    def value(self, u: float, v: float, p: Vec3) -> Vec3:
        s = self.scale * p.z + self.scale * p.x + 10 * self.perlin.turb(p, 7)
        return Vec3(0.5, 0.5, 0.5) * (1 + math.sin(s))