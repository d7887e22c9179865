import pytest

from lumentrace.aabb import AABB
from lumentrace.hit_record import HitRecord
from lumentrace.hittable import Hittable, HittableList
from lumentrace.ray import Ray
from lumentrace.rng import seed
from lumentrace.vector import Vec3


class _Plate(Hittable):
    def __init__(self, z, name, direction=Vec3(0, 0, 1), density=0.5):
        self.z = z
        self.name = name
        self.direction = direction
        self.density = density

    def hit(self, r, ray_tmin, ray_tmax):
        if r.direction.z == 0:
            return None
        t = (self.z - r.origin.z) / r.direction.z
        if not ray_tmin < t < ray_tmax:
            return None
        return HitRecord(p=r.at(t), t=t, mat=self.name)

    def bounding_box(self):
        return AABB.from_points(Vec3(-1, -1, self.z), Vec3(1, 1, self.z))

    def pdf_value(self, origin, direction):
        return self.density

    def random(self, origin):
        return self.direction


class _Bare(Hittable):
    def hit(self, r, ray_tmin, ray_tmax):
        return None

    def bounding_box(self):
        return AABB.from_points(Vec3(0, 0, 0), Vec3(1, 1, 1))


RAY = Ray(Vec3(0, 0, 0), Vec3(0, 0, 1))


def test_closest_hit_wins():
    world = HittableList([_Plate(5, "far"), _Plate(2, "near")])
    rec = world.hit(RAY, 0.001, float("inf"))
    assert rec.mat == "near"
    assert rec.t == 2


def test_hit_respects_interval():
    world = HittableList([_Plate(5, "far"), _Plate(2, "near")])
    rec = world.hit(RAY, 3.0, float("inf"))
    assert rec.mat == "far"
    assert world.hit(RAY, 0.001, 1.0) is None


def test_empty_list_misses():
    assert HittableList().hit(RAY, 0.001, float("inf")) is None


def test_bounding_box_is_union():
    a, b = _Plate(2, "a"), _Plate(5, "b")
    world = HittableList()
    world.add(a)
    assert world.bounding_box() == a.bounding_box()
    world.add(b)
    assert world.bounding_box() == a.bounding_box().union(b.bounding_box())


def test_empty_bounding_box_raises():
    with pytest.raises(ValueError):
        HittableList().bounding_box()


def test_sequence_protocol():
    plates = [_Plate(1, "a"), _Plate(2, "b"), _Plate(3, "c")]
    world = HittableList(plates)
    assert len(world) == 3
    assert list(world) == plates
    assert world[1] is plates[1]
    with pytest.raises(IndexError):
        world[3]


def test_box_of_range():
    plates = [_Plate(1, "a"), _Plate(2, "b"), _Plate(3, "c")]
    world = HittableList(plates)
    assert world.box_of_range(1, 3) == plates[1].bounding_box().union(plates[2].bounding_box())
    assert world.box_of_range(0, 1) == plates[0].bounding_box()
    with pytest.raises(ValueError):
        world.box_of_range(2, 2)


def test_pdf_value_empty_is_zero():
    assert HittableList().pdf_value(Vec3(), Vec3(0, 0, 1)) == 0.0


def test_pdf_value_of_equal_members():
    world = HittableList([_Plate(1, "a", density=0.3), _Plate(2, "b", density=0.3)])
    assert world.pdf_value(Vec3(), Vec3(0, 0, 1)) == pytest.approx(0.3)


def test_pdf_value_between_members():
    world = HittableList([_Plate(1, "a", density=0.2), _Plate(2, "b", density=0.6)])
    value = world.pdf_value(Vec3(), Vec3(0, 0, 1))
    assert 0.2 < value < 0.6


def test_random_picks_a_member():
    seed(1)
    x, y = Vec3(1, 0, 0), Vec3(0, 1, 0)
    world = HittableList([_Plate(1, "a", direction=x), _Plate(2, "b", direction=y)])
    draws = {world.random(Vec3()) for _ in range(100)}
    assert draws == {x, y}


def test_random_on_empty_raises():
    with pytest.raises(ValueError):
        HittableList().random(Vec3())


def test_default_sampling_methods():
    bare = _Bare()
    assert bare.pdf_value(Vec3(), Vec3(0, 0, 1)) == 0.0
    assert bare.random(Vec3()) == Vec3(1.0, 0.0, 0.0)