[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lumentrace"
version = "0.1.0"
description = "A Monte Carlo path tracer with importance sampling, BVH acceleration and Radiance HDR output"
requires-python = ">=3.10"
keywords = ["ray tracing", "path tracing", "rendering", "hdr", "bvh", "monte carlo"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
lumentrace = "lumentrace.scenes:main"

[tool.hatch.build.targets.wheel]
packages = ["lumentrace"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
