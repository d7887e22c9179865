import math

import pytest
from PIL import Image as PILImage

from lumentrace.rng import seed
from lumentrace.texture import (
    CheckerTexture,
    Image,
    ImageTexture,
    NoiseTexture,
    Perlin,
    SolidColor,
    floor_int,
)
from lumentrace.vector import Vec3

HDR_HEADER = b"#?RADIANCE\nFORMAT=32-bit_rle_rgbe\n\n"


@pytest.mark.parametrize("value", [0.3, 2.7, 10.01, -0.5, -3.25])
def test_floor_int_matches_floor_for_fractions(value):
    assert floor_int(value) == math.floor(value)


def test_floor_int_zero_goes_below():
    assert floor_int(0.0) == -1


def test_solid_color_returns_albedo():
    albedo = Vec3(0.2, 0.4, 0.6)
    assert SolidColor(albedo).value(0.1, 0.9, Vec3(5, 5, 5)) == albedo


def test_checker_alternates():
    even, odd = Vec3(1, 1, 1), Vec3(0, 0, 0)
    tex = CheckerTexture.from_colors(1.0, even, odd)
    assert tex.value(0, 0, Vec3(0.5, 0.5, 0.5)) == even
    assert tex.value(0, 0, Vec3(1.5, 0.5, 0.5)) == odd
    assert tex.value(0, 0, Vec3(1.5, 1.5, 0.5)) == even


def test_checker_uses_given_textures():
    a, b = SolidColor(Vec3(0.1, 0.2, 0.3)), SolidColor(Vec3(0.7, 0.8, 0.9))
    tex = CheckerTexture(2.0, a, b)
    assert tex.value(0, 0, Vec3(0.5, 0.5, 0.5)) == a.albedo
    assert tex.value(0, 0, Vec3(2.5, 0.5, 0.5)) == b.albedo


def _write_png(path, pixels, width, height):
    img = PILImage.new("RGBA", (width, height))
    img.putdata(pixels)
    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path)


def test_image_load_and_clamp(tmp_path, monkeypatch):
    pixels = [(255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255), (255, 255, 255, 255)]
    _write_png(tmp_path / "img" / "tiny.png", pixels, 2, 2)
    monkeypatch.chdir(tmp_path)
    image = Image.load("tiny.png")
    assert (image.width, image.height) == (2, 2)
    assert image.pixel_data(1, 0) == pixels[1]
    assert image.pixel_data(0, 1) == pixels[2]
    assert image.pixel_data(-4, -4) == pixels[0]
    assert image.pixel_data(50, 50) == pixels[3]


def test_image_load_searches_parent(tmp_path, monkeypatch):
    pixels = [(10, 20, 30, 255)]
    _write_png(tmp_path / "img" / "one.png", pixels, 1, 1)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    assert Image.load("one.png").pixel_data(0, 0) == pixels[0]


def test_missing_image_reads_magenta(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    image = Image.load("absent.png")
    assert image.data is None
    assert image.pixel_data(3, 3) == (255, 0, 255)


def test_image_texture_missing_is_cyan(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    tex = ImageTexture(Image.load("absent.png"))
    assert tex.value(0.5, 0.5, Vec3()) == Vec3(0.0, 1.0, 1.0)


def test_image_texture_maps_top_left(tmp_path, monkeypatch):
    pixels = [(255, 0, 255, 255), (0, 0, 0, 255), (0, 0, 0, 255), (0, 255, 0, 255)]
    _write_png(tmp_path / "img" / "map.png", pixels, 2, 2)
    monkeypatch.chdir(tmp_path)
    tex = ImageTexture(Image.load("map.png"))
    assert tex.value(0.0, 1.0, Vec3()) == Vec3(1.0, 0.0, 1.0)
    assert tex.value(1.0, 0.0, Vec3()) == Vec3(0.0, 1.0, 0.0)


def test_hdr_flat_pixels(tmp_path, monkeypatch):
    raw = HDR_HEADER + b"-Y 1 +X 2\n" + bytes([128, 0, 0, 129, 0, 0, 0, 0])
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "flat.hdr").write_bytes(raw)
    monkeypatch.chdir(tmp_path)
    image = Image.load("flat.hdr")
    assert image.pixel_data(0, 0) == (255, 0, 0, 255)
    assert image.pixel_data(1, 0) == (0, 0, 0, 255)


def test_hdr_run_length_scanline(tmp_path, monkeypatch):
    runs = bytes([136, 128, 136, 0, 136, 0, 136, 129])
    raw = HDR_HEADER + b"-Y 1 +X 8\n" + bytes([2, 2, 0, 8]) + runs
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "rle.hdr").write_bytes(raw)
    monkeypatch.chdir(tmp_path)
    image = Image.load("rle.hdr")
    assert image.width == 8
    assert {image.pixel_data(i, 0) for i in range(8)} == {(255, 0, 0, 255)}


def test_hdr_without_format_fails(tmp_path, monkeypatch):
    raw = b"#?RADIANCE\n\n-Y 1 +X 1\n" + bytes([128, 0, 0, 129])
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "bad.hdr").write_bytes(raw)
    monkeypatch.chdir(tmp_path)
    assert Image.load("bad.hdr").data is None


def test_perlin_zero_at_lattice_points():
    seed(7)
    perlin = Perlin()
    for p in (Vec3(1, 1, 1), Vec3(3, 2, 5)):
        assert perlin.noise(p) == pytest.approx(0.0, abs=1e-12)


def test_perlin_is_reproducible_with_seed():
    seed(11)
    first = Perlin().noise(Vec3(0.3, 1.7, 2.2))
    seed(11)
    second = Perlin().noise(Vec3(0.3, 1.7, 2.2))
    assert first == second


def test_turbulence_non_negative():
    seed(3)
    perlin = Perlin()
    values = [perlin.turb(Vec3(0.1 * i, 0.37 * i, 0.73 * i), 7) for i in range(20)]
    assert min(values) >= 0.0


def test_noise_texture_is_grey_in_range():
    seed(5)
    tex = NoiseTexture(4.0)
    for i in range(10):
        c = tex.value(0, 0, Vec3(0.21 * i, 0.5, 1.3 * i))
        assert c.x == c.y == c.z
        assert 0.0 <= c.x <= 1.0