import math

import pytest

from core.interval import Interval
from core.ray import Ray
from core.rng import make_rng
from core.utils import random_unit_vector, random_vector
from core.vector import Vector3
from geometry.hittable import HitRecord, Hittable
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian

ALL_TIME = Interval(0.001, math.inf)


def matte(level=0.5):
    return Lambertian(Vector3(level, level, level))


class TestSphere:
    def test_front_hit(self):
        material = matte()
        sphere = Sphere(Vector3(0, 0, -1), 0.5, material)
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), ALL_TIME)
        assert rec is not None
        assert rec.t == pytest.approx(0.5)
        assert rec.p == Vector3(0, 0, -0.5)
        assert rec.normal == Vector3(0, 0, 1)
        assert rec.front_face
        assert rec.material is material

    def test_far_root_used_when_near_root_out_of_range(self):
        sphere = Sphere(Vector3(0, 0, -1), 0.5, matte())
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), Interval(0.6, math.inf))
        assert rec.t == pytest.approx(1.5)
        assert not rec.front_face
        # Flipped to oppose the ray travelling along -z.
        assert rec.normal == Vector3(0, 0, 1)

    def test_no_root_in_range(self):
        sphere = Sphere(Vector3(0, 0, -1), 0.5, matte())
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert sphere.hit(ray, Interval(0.001, 0.4)) is None
        assert sphere.hit(ray, Interval(2.0, math.inf)) is None

    def test_range_is_open(self):
        sphere = Sphere(Vector3(0, 0, -1), 0.5, matte())
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert sphere.hit(ray, Interval(0.5, 1.5)) is None

    def test_miss(self):
        sphere = Sphere(Vector3(0, 0, -1), 0.5, matte())
        assert sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 1, 0)), ALL_TIME) is None

    def test_behind_origin(self):
        sphere = Sphere(Vector3(0, 0, 1), 0.5, matte())
        assert sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), ALL_TIME) is None

    def test_unnormalized_direction(self):
        sphere = Sphere(Vector3(0, 0, -1), 0.5, matte())
        rec = sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -4)), ALL_TIME)
        assert rec.t == pytest.approx(0.125)
        assert rec.p.z == pytest.approx(-0.5)

    def test_negative_radius_is_clamped(self):
        sphere = Sphere(Vector3(0, 0, -1), -2.0, matte())
        assert sphere.radius == 0.0
        assert sphere.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), ALL_TIME) is None

    def test_surface_normal(self):
        sphere = Sphere(Vector3(1, 1, 1), 2.0, matte())
        assert sphere.normal(Vector3(1, 3, 1)) == Vector3(0, 1, 0)

    def test_zero_radius_has_no_normal(self):
        sphere = Sphere(Vector3(0, 0, -1), 0.0, matte())
        with pytest.raises(ValueError):
            sphere.normal(Vector3(0, 0, -1))

    def test_hit_invariants_over_random_rays(self):
        rng = make_rng(11)
        sphere = Sphere(Vector3(0.3, -0.2, -2.0), 0.8, matte())
        hits = 0
        for _ in range(2000):
            origin = random_vector(rng, -3.0, 3.0)
            target = sphere.center + random_vector(rng, -1.0, 1.0)
            direction = (target - origin) * (0.5 + rng.random())
            ray = Ray(origin, direction)
            rec = sphere.hit(ray, ALL_TIME)
            if rec is None:
                continue
            hits += 1
            assert ALL_TIME.surrounds(rec.t)
            assert (rec.p - sphere.center).length() == pytest.approx(sphere.radius, rel=1e-9)
            assert rec.normal.length() == pytest.approx(1.0, rel=1e-9)
            assert rec.normal.dot(ray.direction) <= 0.0
            distance = (origin - sphere.center).length()
            if abs(distance - sphere.radius) > 0.1:
                assert rec.front_face == (distance > sphere.radius)
        assert hits > 100


class TestHittableContract:
    def test_abstract_methods(self):
        surface = Hittable()
        with pytest.raises(NotImplementedError):
            surface.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), ALL_TIME)
        with pytest.raises(NotImplementedError):
            surface.normal(Vector3(0, 0, 0))

    def test_face_normal_from_inside(self):
        rec = HitRecord()
        rec.set_face_normal(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)), Vector3(1, 0, 0))
        assert not rec.front_face
        assert rec.normal == Vector3(-1, 0, 0)


class TestHittableList:
    def test_nearest_hit_wins_regardless_of_order(self):
        far, near, middle = matte(0.1), matte(0.2), matte(0.3)
        world = HittableList()
        world.add(Sphere(Vector3(0, 0, -3), 0.25, far))
        world.add(Sphere(Vector3(0, 0, -1), 0.25, near))
        world.add(Sphere(Vector3(0, 0, -2), 0.25, middle))

        rec = world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), ALL_TIME)
        assert rec.material is near
        assert rec.t == pytest.approx(0.75)

    def test_nearest_hit_among_overlapping_spheres(self):
        big, small = matte(0.1), matte(0.2)
        world = HittableList([
            Sphere(Vector3(0, 0, -5), 3.0, big),
            Sphere(Vector3(0, 0, -2.5), 0.25, small),
        ])
        rec = world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), ALL_TIME)
        assert rec.material is big
        assert rec.t == pytest.approx(2.0)

    def test_respects_query_range(self):
        near, far = matte(0.1), matte(0.2)
        world = HittableList([
            Sphere(Vector3(0, 0, -1), 0.25, near),
            Sphere(Vector3(0, 0, -3), 0.25, far),
        ])
        rec = world.hit(Ray(Vector3(0, 0, 0), Vector3(0, 0, -1)), Interval(1.5, math.inf))
        assert rec.material is far

    def test_empty_world(self):
        world = HittableList()
        assert len(world) == 0
        assert world.hit(Ray(Vector3(0, 0, 0), random_unit_vector(make_rng(0))), ALL_TIME) is None

    def test_clear_and_iterate(self):
        spheres = [Sphere(Vector3(i, 0, 0), 0.5, matte()) for i in range(3)]
        world = HittableList(spheres)
        assert list(world) == spheres
        world.clear()
        assert len(world) == 0
