"""Surface materials: how light scatters off, or is emitted by, a hit point."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .hit_record import HitRecord
from .pdf import CosinePdf, Pdf, SpherePdf
from .ray import Ray
from .rng import rnd_double
from .texture import SolidColor, Texture
from .vector import Vec3, random_unit_vector, reflect, refract

_BLACK = Vec3(0.0, 0.0, 0.0)


def _as_texture(source: Texture | Vec3) -> Texture:
    return source if isinstance(source, Texture) else SolidColor(source)


@dataclass
class ScatterRecord:
    """Outcome of a scattering event.

    Diffuse materials supply a ``pdf`` to sample from; specular ones set
    ``skip_pdf`` and give the single outgoing ray in ``skip_pdf_ray``.
    """

    attenuation: Vec3
    pdf: Pdf | None = None
    skip_pdf: bool = False
    skip_pdf_ray: Ray | None = None


def reflectance(cosine: float, refraction_index: float) -> float:
    """Schlick's approximation of the reflected fraction of light."""
    r0 = (1 - refraction_index) / (1 + refraction_index)
    r0 = r0 * r0
    return r0 + (1 - r0) * (1 - cosine) ** 5


class Material:
    """A material that neither scatters nor emits light."""

    def scatter(self, r_in: Ray, rec: HitRecord) -> ScatterRecord | None:
        """How ``r_in`` scatters at ``rec``, or None when it is absorbed."""
        return None

    def emitted(self, r_in: Ray, rec: HitRecord, u: float, v: float, p: Vec3) -> Vec3:
        """Light given off at the hit point."""
        return _BLACK

    def scattering_pdf(self, r_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        """Density with which this material scatters into ``scattered``."""
        return 0.0


class Lambertian(Material):
    """An ideal diffuse surface."""

    def __init__(self, albedo: Texture | Vec3) -> None:
        self.texture = _as_texture(albedo)

    def scatter(self, r_in: Ray, rec: HitRecord) -> ScatterRecord | None:
        return ScatterRecord(
            attenuation=self.texture.value(rec.u, rec.v, rec.p),
            pdf=CosinePdf(rec.normal),
            skip_pdf=False,
        )

    def scattering_pdf(self, r_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        cos_theta = rec.normal.dot(scattered.direction.unit())
        return 0.0 if cos_theta < 0 else cos_theta / math.pi


class Isotropic(Material):
    """Scatters uniformly in every direction; used inside participating media."""

    def __init__(self, albedo: Texture | Vec3) -> None:
        self.texture = _as_texture(albedo)

    def scatter(self, r_in: Ray, rec: HitRecord) -> ScatterRecord | None:
        return ScatterRecord(
            attenuation=self.texture.value(rec.u, rec.v, rec.p),
            pdf=SpherePdf(),
            skip_pdf=False,
        )

    def scattering_pdf(self, r_in: Ray, rec: HitRecord, scattered: Ray) -> float:
        return 1 / (4 * math.pi)


class Metal(Material):
    """A mirror-like surface, blurred by ``fuzz``.

    A fuzz outside [0, 1) is replaced by 1.
    """

    def __init__(self, albedo: Vec3, fuzz: float) -> None:
        self.albedo = albedo
        self.fuzz = fuzz if 0 <= fuzz < 1 else 1.0

    def scatter(self, r_in: Ray, rec: HitRecord) -> ScatterRecord | None:
        reflected = reflect(r_in.direction, rec.normal).unit()
        reflected = reflected + random_unit_vector() * self.fuzz
        return ScatterRecord(
            attenuation=self.albedo,
            pdf=None,
            skip_pdf=True,
            skip_pdf_ray=Ray(rec.p, reflected),
        )


class Dielectric(Material):
    """A clear refracting material such as glass or water."""

    def __init__(self, refraction_index: float) -> None:
        self.albedo = Vec3(1.0, 1.0, 1.0)
        self.refraction_index = refraction_index

    def scatter(self, r_in: Ray, rec: HitRecord) -> ScatterRecord | None:
        ri = 1.0 / self.refraction_index if rec.front_face else self.refraction_index
        unit_dir = r_in.direction.unit()
        cos_theta = min((-unit_dir).dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ri * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, ri) > rnd_double():
            direction = reflect(unit_dir, rec.normal)
        else:
            direction = refract(unit_dir, rec.normal, ri)

        return ScatterRecord(
            attenuation=self.albedo,
            pdf=None,
            skip_pdf=True,
            skip_pdf_ray=Ray(rec.p, direction),
        )


class DiffuseLight(Material):
    """An emitter that shines from its front face only."""

    def __init__(self, emit: Texture | Vec3) -> None:
        self.texture = _as_texture(emit)

    def emitted(self, r_in: Ray, rec: HitRecord, u: float, v: float, p: Vec3) -> Vec3:
        if not rec.front_face:
            return _BLACK
        return self.texture.value(u, v, p)