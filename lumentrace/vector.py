"""Three-component vectors, sampling helpers and RGBE pixel encoding."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

from .rng import rnd_dbl, rnd_double

_NEAR_ZERO = 1e-8


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector, also used for points and RGB colours."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, t: float) -> Vec3:
        if not isinstance(t, Real):
            return NotImplemented
        return Vec3(self.x * t, self.y * t, self.z * t)

    def __rmul__(self, t: float) -> Vec3:
        return self.__mul__(t)

    def __truediv__(self, t: float) -> Vec3:
        if not isinstance(t, Real):
            return NotImplemented
        return Vec3(self.x / t, self.y / t, self.z / t)

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def near_zero(self) -> bool:
        """True when every component is strictly within 1e-8 of zero."""
        return all(-_NEAR_ZERO < c < _NEAR_ZERO for c in (self.x, self.y, self.z))

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def unit(self) -> Vec3:
        """Return this vector scaled to length one."""
        return self / self.length()

    def attenuate(self, other: Vec3) -> Vec3:
        """Component-wise product."""
        return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)

    def illuminance(self) -> float:
        """Relative luminance of an RGB colour."""
        return 0.2126 * self.x + 0.7152 * self.y + 0.0722 * self.z


Color = Vec3
Point3 = Vec3


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Mirror ``v`` about the surface normal ``n``."""
    return v - n * (2 * v.dot(n))


def refract(v: Vec3, n: Vec3, etai_over_etat: float) -> Vec3:
    """Bend the unit direction ``v`` through a surface with normal ``n``."""
    cos_theta = min((-v).dot(n), 1.0)
    r_out_perp = (v + n * cos_theta) * etai_over_etat
    parallel_len = -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + n * parallel_len


def random_default_vector() -> Vec3:
    return Vec3(rnd_double(), rnd_double(), rnd_double())


def random_vector(low: float, high: float) -> Vec3:
    return Vec3(rnd_dbl(low, high), rnd_dbl(low, high), rnd_dbl(low, high))


def random_in_unit_sphere() -> Vec3:
    while True:
        v = random_vector(-1, 1)
        if v.length_squared() < 1:
            return v


def random_in_unit_disk() -> Vec3:
    while True:
        p = Vec3(rnd_dbl(-1, 1), rnd_dbl(-1, 1), 0.0)
        if p.length_squared() < 1:
            return p


def random_unit_vector() -> Vec3:
    return random_in_unit_sphere().unit()


def random_on_hemisphere(normal: Vec3) -> Vec3:
    v = random_unit_vector()
    return v if v.dot(normal) > 0.0 else -v


def random_cosine_direction() -> Vec3:
    """A unit direction around +z, distributed proportionally to cos(theta)."""
    r1 = rnd_double()
    r2 = rnd_double()
    phi = 2 * math.pi * r1
    return Vec3(
        math.cos(phi) * math.sqrt(r2),
        math.sin(phi) * math.sqrt(r2),
        math.sqrt(1 - r2),
    )


def _shared_exponent(max_rgb: float) -> int:
    exp = 128
    if max_rgb >= 256:
        while max_rgb > 256:
            max_rgb /= 2
            exp += 1
            if exp >= 255:
                return 255
        return exp
    while max_rgb < 256:
        max_rgb *= 2
        exp -= 1
        if exp <= 0:
            return 0
    return exp + 1


def _linear_to_gamma(value: float) -> float:
    return value ** (1.0 / 2.2) if value > 0 else 0.0


def encode_rgbe(color: Vec3, linear: bool) -> bytes:
    """Encode a colour as four RGBE bytes (mantissas then shared exponent).

    NaN channels count as zero. With ``linear`` set, a 1/2.2 gamma is applied
    before scaling.
    """
    channels = [0.0 if math.isnan(c) else c for c in (color.x, color.y, color.z)]
    if linear:
        channels = [255.999 * _linear_to_gamma(c) for c in channels]
    else:
        channels = [255.999 * c for c in channels]

    exp = _shared_exponent(max(channels))
    if exp > 0:
        factor = 2.0 ** (exp - 128)
        mantissas = [int(min(max(c / factor, 0.0), 255.0)) for c in channels]
    else:
        mantissas = [0, 0, 0]
    return bytes([*mantissas, exp])