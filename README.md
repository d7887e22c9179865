# lumentrace

A small Monte Carlo path tracer. It renders scenes made of spheres, quads,
cubes, triangles and triangle meshes, with diffuse, metal, glass, isotropic and
light-emitting materials. Lights and other important objects can be sampled
directly, and a per-pixel convergence test stops sampling early when the
pixel's brightness has settled. Output is written as a Radiance `.hdr` image.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Rendering a built-in scene

```
lumentrace 1
```

The argument picks a scene:

| id | scene                                                            |
|----|------------------------------------------------------------------|
| 1  | Cornell box with a rotated aluminium block and a white sphere    |
| 2  | Teapot mesh lit by two spherical lights (needs `teapot.obj`)     |
| 3  | Metal sphere in front of an environment map (needs `forest.hdr`) |

With no argument, scene 3 is rendered. An unknown id renders nothing. The
image is written to `image.hdr` in the current directory, and progress is
printed to standard error.

Meshes (Wavefront OBJ) and images (Radiance HDR, or any format Pillow can
open) are looked up under `img/`, `../img/` and `../../img/`. If a mesh cannot
be found, its scene is skipped. If an image cannot be found, an error is
printed and its texture shows as cyan.

## Using the library

```python
from lumentrace.vector import Vec3
from lumentrace.hittable import HittableList
from lumentrace.material import Lambertian, DiffuseLight
from lumentrace.sphere import Sphere
from lumentrace.quad import Quad
from lumentrace.camera import Camera

world = HittableList()
world.add(Sphere(Vec3(0, 0, -1), 0.5, Lambertian(Vec3(0.7, 0.3, 0.3))))
light = Quad(Vec3(-1, 2, -2), Vec3(2, 0, 0), Vec3(0, 0, 2),
             DiffuseLight(Vec3(4, 4, 4)))
world.add(light)

priorities = HittableList()
priorities.add(light)

cam = Camera(
    image_width=200,
    samples_per_pixel=64,
    lookfrom=Vec3(0, 0, 1),
    lookat=Vec3(0, 0, -1),
    vup=Vec3(0, 1, 0),
)
cam.render(world, priorities, "image.hdr")
```

Objects in `priorities` are sampled directly; their rays are mixed evenly with
rays from each surface material's own distribution. With an empty
`priorities` list only the material's distribution is used.

Pixels are sampled in stratified batches of 64, so every pixel receives at
least 64 samples whatever `samples_per_pixel` is set to; further batches are
taken until the convergence test passes or `samples_per_pixel` is reached.

Larger scenes render faster when their objects are first grouped with
`lumentrace.bvh.BvhNode.from_list`. Objects can be placed with
`lumentrace.instance.Translate` and `lumentrace.instance.RotateY`, and smoke or
fog can be added with `lumentrace.constant_medium.ConstantMedium`. Triangle
meshes are loaded with `lumentrace.mesh.load_mesh`, and an environment map is
set with `Camera(sky=lumentrace.skybox.Skybox("file.hdr"))`.

The random source can be seeded with `lumentrace.rng.seed` to make renders
repeatable.

## What it does not do

- Scenes are defined in Python; there is no scene description file format.
  The command renders only the three built-in scenes.
- Rendering runs on a single thread.
- Output is always an uncompressed Radiance `.hdr` file; there is no other
  output format and no preview window.