import pytest

from lumentrace.material import Lambertian
from lumentrace.mesh import Mesh, load_mesh, parse_obj
from lumentrace.ray import Ray
from lumentrace.triangle import Triangle
from lumentrace.vector import Vec3

MAT = Lambertian(Vec3(0.5, 0.5, 0.5))

SQUARE = """# a unit square
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vn 0 0 1
f 1 2 3 4
"""


def test_parse_single_triangle():
    vertices, faces = parse_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
    assert vertices == [Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 1, 0)]
    assert faces == [(0, 1, 2)]


def test_parse_triangulates_polygon():
    vertices, faces = parse_obj(SQUARE)
    assert len(vertices) == 4
    assert faces == [(0, 1, 2), (0, 2, 3)]


def test_parse_slash_and_negative_indices():
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1/1/1 2//2 3/3\nf -3 -2 -1\n"
    _, faces = parse_obj(text)
    assert faces == [(0, 1, 2), (0, 1, 2)]


def test_parse_rejects_bad_vertex():
    with pytest.raises(ValueError):
        parse_obj("v 0 zero 0\n")


def test_load_mesh_and_hit(tmp_path, monkeypatch):
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "square.obj").write_text(SQUARE)
    monkeypatch.chdir(tmp_path)
    mesh = load_mesh("square.obj", MAT)
    assert len(mesh.triangles) == 2
    r = Ray(Vec3(0.7, 0.2, -1), Vec3(0, 0, 1))
    rec = mesh.hit(r, 0.001, 100)
    assert rec is not None
    assert rec.p.z == pytest.approx(0.0)
    assert rec.mat is MAT
    assert mesh.hit(Ray(Vec3(3, 3, -1), Vec3(0, 0, 1)), 0.001, 100) is None


def test_load_mesh_missing_reports(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert load_mesh("absent.obj", MAT) is None
    assert "absent.obj" in capsys.readouterr().err


def test_load_mesh_skips_out_of_range_faces(tmp_path, monkeypatch):
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "bad.obj").write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 9\n")
    monkeypatch.chdir(tmp_path)
    assert load_mesh("bad.obj", MAT) is None


def test_empty_mesh_raises():
    with pytest.raises(ValueError):
        Mesh([])


def test_mesh_box_encloses_triangles():
    tris = [
        Triangle(Vec3(0, 0, 0), Vec3(1, 0, 0), Vec3(0, 1, 0), MAT),
        Triangle(Vec3(2, 2, 2), Vec3(3, 2, 2), Vec3(2, 3, 2), MAT),
        Triangle(Vec3(-1, 0, 1), Vec3(0, 0, 1), Vec3(-1, 1, 1), MAT),
    ]
    box = Mesh(tris).bounding_box()
    expected = tris[0].bounding_box().union(tris[1].bounding_box()).union(tris[2].bounding_box())
    assert box == expected