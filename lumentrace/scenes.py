"""The built-in scenes and the command that renders them."""

from __future__ import annotations

import re
import sys

from .bvh import BvhNode
from .camera import Camera
from .hittable import HittableList
from .instance import RotateY, Translate
from .material import Dielectric, DiffuseLight, Lambertian, Metal
from .mesh import load_mesh
from .quad import Cube, Quad
from .skybox import Skybox
from .sphere import Sphere
from .vector import Vec3

NUM_SCENES = 3

SceneSetup = tuple[Camera, HittableList, HittableList]


def cornell_box() -> SceneSetup:
    """The Cornell box with a rotated aluminium block and a white sphere."""
    light = DiffuseLight(Vec3(15.0, 15.0, 15.0))
    white = Lambertian(Vec3(0.73, 0.73, 0.73))
    red = Lambertian(Vec3(0.65, 0.05, 0.05))
    green = Lambertian(Vec3(0.12, 0.45, 0.15))
    aluminum = Metal(Vec3(0.8, 0.85, 0.88), 0.0)
    Dielectric(1.5)

    lamp = Quad(Vec3(343, 554, 332), Vec3(-130, 0, 0), Vec3(0, 0, -105), light)
    objects = [
        Quad(Vec3(555, 0, 0), Vec3(0, 555, 0), Vec3(0, 0, 555), green),
        Quad(Vec3(0, 0, 0), Vec3(0, 555, 0), Vec3(0, 0, 555), red),
        lamp,
        Quad(Vec3(0, 0, 0), Vec3(555, 0, 0), Vec3(0, 0, 555), white),
        Quad(Vec3(555, 555, 555), Vec3(-555, 0, 0), Vec3(0, 0, -555), white),
        Quad(Vec3(0, 0, 555), Vec3(555, 0, 0), Vec3(0, 555, 0), white),
    ]

    block = Cube(Vec3(0, 0, 0), Vec3(165, 330, 165), aluminum)
    objects.append(Translate(RotateY(block, 15), Vec3(265, 0, 295)))
    objects.append(Sphere(Vec3(190, 90, 190), 90, white))

    world = HittableList([BvhNode.from_list(objects)])
    priorities = HittableList([lamp])

    cam = Camera(
        aspect_ratio=1.0,
        image_width=1200,
        samples_per_pixel=3,
        max_depth=50,
        vfov=40,
        lookfrom=Vec3(278, 278, -800),
        lookat=Vec3(278, 278, 0),
        vup=Vec3(0, 1, 0),
        defocus_angle=0,
        focus_dist=2,
        background=Vec3(0, 0, 0),
    )
    return cam, world, priorities


def teapot_scene() -> SceneSetup | None:
    """A teapot mesh lit by two small spheres; None when the mesh is missing."""
    mat = Lambertian(Vec3(0.9, 0.9, 0.75))
    light = DiffuseLight(Vec3(100.0, 100.0, 100.0))
    s1 = Sphere(Vec3(1, 3.5, 0.5), 0.5, light)
    s2 = Sphere(Vec3(-1, 3.5, 0.5), 0.5, light)

    teapot = load_mesh("teapot.obj", mat)
    if teapot is None:
        return None

    world = HittableList([teapot, s1, s2])
    priorities = HittableList([s1, s2])

    cam = Camera(
        aspect_ratio=1.0,
        image_width=1000,
        samples_per_pixel=350,
        max_depth=50,
        vfov=70,
        lookfrom=Vec3(0, 4, 5),
        lookat=Vec3(0.3, 0.5, 0),
        vup=Vec3(0, 1, 0),
        defocus_angle=0,
        focus_dist=2,
        background=Vec3(0, 0, 0),
    )
    return cam, world, priorities


def skybox_scene() -> SceneSetup:
    """A mirror sphere reflecting a forest environment map."""
    aluminum = Metal(Vec3(0.8, 0.85, 0.88), 0.0)
    world = HittableList([Sphere(Vec3(-1.8, 0.25, 0), 0.5, aluminum)])
    priorities = HittableList()

    cam = Camera(
        aspect_ratio=1.0,
        image_width=1000,
        samples_per_pixel=350,
        max_depth=50,
        vfov=70,
        lookfrom=Vec3(0, 0, 0),
        lookat=Vec3(-1.8, 0.25, 0),
        vup=Vec3(0, 1, 0),
        defocus_angle=0,
        focus_dist=2,
        sky=Skybox("forest.hdr"),
    )
    return cam, world, priorities


_SCENES = {1: cornell_box, 2: teapot_scene, 3: skybox_scene}


def render_scene(scene_id: int) -> bool:
    """Render scene ``scene_id`` to ``image.hdr``.

    Unknown ids, and scenes whose data cannot be loaded, render nothing;
    the result tells whether an image was written.
    """
    builder = _SCENES.get(scene_id)
    if builder is None:
        return False
    scene = builder()
    if scene is None:
        return False
    cam, world, priorities = scene
    cam.render(world, priorities)
    return True


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def main(argv: list[str] | None = None) -> int:
    """Render the scene numbered by the first argument, or the last scene."""
    args = sys.argv[1:] if argv is None else argv
    scene_id = _atoi(args[0]) if args else NUM_SCENES
    render_scene(scene_id)
    return 0