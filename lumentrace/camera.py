"""The camera: generates rays, integrates light and writes the image."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import BinaryIO

from .hittable import Hittable, HittableList
from .pdf import HittablePdf, MixturePdf
from .ray import Ray
from .rng import rnd_double
from .skybox import Skybox
from .vector import Vec3, encode_rgbe, random_in_unit_disk

SAMPLES_PER_BATCH = 64
Z_95_VALUE_SQR = 3.8416
MAX_TOLERANCE_SQR = 0.0025

_BLACK = Vec3(0.0, 0.0, 0.0)


def ray_color(
    r: Ray,
    depth: int,
    world: Hittable,
    priorities: HittableList,
    background: Vec3,
    sky: Skybox | None,
) -> Vec3:
    """Radiance arriving along ``r``, following at most ``depth`` bounces.

    Diffuse bounces are sampled from an even mix of the material's own
    density and a density aimed at the objects in ``priorities``.
    """
    if depth <= 0:
        return _BLACK

    rec = world.hit(r, 0.001, math.inf)
    if rec is None:
        return background if sky is None else sky.value(r)

    emission = rec.mat.emitted(r, rec, rec.u, rec.v, rec.p)
    srec = rec.mat.scatter(r, rec)
    if srec is None:
        return emission

    if srec.skip_pdf:
        incoming = ray_color(srec.skip_pdf_ray, depth - 1, world, priorities, background, sky)
        return srec.attenuation.attenuate(incoming)

    sampler = srec.pdf
    if len(priorities):
        sampler = MixturePdf(HittablePdf(priorities, rec.p), srec.pdf)

    bounce = Ray(rec.p, sampler.generate())
    pdf_value = sampler.value(bounce.direction)
    if not pdf_value > 0:
        return emission

    scatter_pdf = rec.mat.scattering_pdf(r, rec, bounce)
    incoming = ray_color(bounce, depth - 1, world, priorities, background, sky)
    return emission + srec.attenuation.attenuate(incoming) * (scatter_pdf / pdf_value)


def write_hdr(stream: BinaryIO, width: int, height: int, raster: bytes) -> None:
    """Write a flat Radiance RGBE image of four bytes per pixel."""
    if len(raster) != width * height * 4:
        raise ValueError(
            f"raster holds {len(raster)} bytes, expected {width * height * 4}"
        )
    header = f"#?RADIANCE\nFORMAT=32-bit_rle_rgbe\n\n-Y {height} +X {width}\n"
    stream.write(header.encode("ascii"))
    stream.write(raster)


@dataclass
class Camera:
    """View settings; ``initialize`` derives the viewport from them.

    Non-positive settings fall back to defaults when initialised: aspect
    ratio 1, width 100, 10 samples per pixel, depth 10, field of view 90
    degrees, and a focus distance of 1 when it is negative.
    """

    aspect_ratio: float = 1.0
    image_width: int = 100
    samples_per_pixel: int = 10
    max_depth: int = 10
    vfov: float = 90.0
    lookfrom: Vec3 = field(default_factory=Vec3)
    lookat: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, -1.0))
    vup: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    defocus_angle: float = 0.0
    focus_dist: float = 1.0
    background: Vec3 = field(default_factory=Vec3)
    sky: Skybox | None = None

    image_height: int = field(init=False, default=0)
    pixel_samples_scale: float = field(init=False, default=0.0)
    sqrt_spb: int = field(init=False, default=0)
    recip_sqrt_spb: float = field(init=False, default=0.0)
    center: Vec3 = field(init=False, default_factory=Vec3)
    pixel00_loc: Vec3 = field(init=False, default_factory=Vec3)
    pixel_delta_u: Vec3 = field(init=False, default_factory=Vec3)
    pixel_delta_v: Vec3 = field(init=False, default_factory=Vec3)
    u: Vec3 = field(init=False, default_factory=Vec3)
    v: Vec3 = field(init=False, default_factory=Vec3)
    w: Vec3 = field(init=False, default_factory=Vec3)
    defocus_disk_u: Vec3 = field(init=False, default_factory=Vec3)
    defocus_disk_v: Vec3 = field(init=False, default_factory=Vec3)

    def initialize(self) -> None:
        """Apply fallbacks and compute the viewport geometry."""
        self.aspect_ratio = self.aspect_ratio if self.aspect_ratio > 0 else 1.0
        self.image_width = self.image_width if self.image_width > 0 else 100
        self.samples_per_pixel = self.samples_per_pixel if self.samples_per_pixel > 0 else 10
        self.max_depth = self.max_depth if self.max_depth > 0 else 10

        self.pixel_samples_scale = 1.0 / self.samples_per_pixel
        self.image_height = max(int(self.image_width / self.aspect_ratio), 1)
        self.focus_dist = self.focus_dist if self.focus_dist >= 0 else 1.0

        self.sqrt_spb = int(math.sqrt(SAMPLES_PER_BATCH))
        self.recip_sqrt_spb = 1.0 / self.sqrt_spb

        self.center = self.lookfrom

        self.vfov = self.vfov if self.vfov > 0 else 90.0
        h = math.tan(math.radians(self.vfov) / 2)
        viewport_height = 2 * h * self.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        self.w = (self.lookfrom - self.lookat).unit()
        self.u = self.vup.cross(self.w).unit()
        self.v = self.w.cross(self.u)

        viewport_u = self.u * viewport_width
        viewport_v = self.v * -viewport_height
        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        upper_left = self.center - self.w * self.focus_dist - viewport_u / 2 - viewport_v / 2
        self.pixel00_loc = upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        defocus_radius = self.focus_dist * math.tan(math.radians(self.defocus_angle / 2.0))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def defocus_disk_sample(self) -> Vec3:
        """A random point on the lens disk around the camera centre."""
        p = random_in_unit_disk()
        return self.defocus_disk_u * p.x + self.defocus_disk_v * p.y + self.center

    def sample_square_stratified(self, s_i: int, s_j: int) -> Vec3:
        """A jittered offset in [-0.5, 0.5)^2 within sub-cell ``(s_i, s_j)``."""
        return Vec3(
            (s_i + rnd_double()) * self.recip_sqrt_spb - 0.5,
            (s_j + rnd_double()) * self.recip_sqrt_spb - 0.5,
            0.0,
        )

    def get_ray(self, i: int, j: int, s_i: int, s_j: int) -> Ray:
        """A ray through sub-cell ``(s_i, s_j)`` of pixel ``(i, j)``."""
        offset = self.sample_square_stratified(s_i, s_j)
        pixel_sample = (
            self.pixel00_loc
            + self.pixel_delta_u * (i + offset.x)
            + self.pixel_delta_v * (j + offset.y)
        )
        origin = self.center if self.defocus_angle <= 0 else self.defocus_disk_sample()
        return Ray(origin, pixel_sample - origin)

    def render_pixel(
        self, i: int, j: int, world: Hittable, priorities: HittableList
    ) -> Vec3:
        """Colour of pixel ``(i, j)``.

        Samples come in stratified batches; sampling stops early once the
        mean illuminance lies within the tolerance at 95% confidence.
        """
        if self.sqrt_spb <= 0:
            raise RuntimeError("camera must be initialised before rendering")

        pixel_color = _BLACK
        illum_sum = 0.0
        illum_sqr_sum = 0.0
        sample = 1
        while sample <= self.samples_per_pixel:
            for s_j in range(self.sqrt_spb):
                for s_i in range(self.sqrt_spb):
                    r = self.get_ray(i, j, s_i, s_j)
                    colour = ray_color(
                        r, self.max_depth, world, priorities, self.background, self.sky
                    )
                    illum = colour.illuminance()
                    illum_sum += illum
                    illum_sqr_sum += illum * illum
                    pixel_color = pixel_color + colour
                    sample += 1

            sig_sqr = (illum_sqr_sum * sample - illum_sum * illum_sum) / (sample * sample - sample)
            if Z_95_VALUE_SQR * sample * sig_sqr <= MAX_TOLERANCE_SQR * illum_sum * illum_sum:
                break

        return pixel_color * (1.0 / sample)

    def render(
        self, world: Hittable, priorities: HittableList, path: str = "image.hdr"
    ) -> None:
        """Render the scene and write it to ``path`` as a Radiance HDR file."""
        self.initialize()
        linear = self.sky is None
        with open(path, "wb") as stream:
            raster = bytearray()
            for j in range(self.image_height):
                print(
                    f"\rScanlines remaining: {self.image_height - j}        ",
                    end="",
                    file=sys.stderr,
                    flush=True,
                )
                for i in range(self.image_width):
                    raster += encode_rgbe(self.render_pixel(i, j, world, priorities), linear)
            write_hdr(stream, self.image_width, self.image_height, bytes(raster))
        print("\rDone.                       ", file=sys.stderr)