"""Rectangles, boxes, instances and constant-density media."""

import math

import numpy as np
import pytest

from core.ray import Ray
from core.vector import Color, Vector3
from geometry.aarect import XYRect, XZRect, YZRect
from geometry.box import Box
from geometry.constant_medium import ConstantMedium
from geometry.instance import RotateY, Translate
from geometry.sphere import Sphere
from materials.isotropic import Isotropic


class TestRects:
    def test_xz_rect_hit_and_uv(self, grey):
        rect = XZRect(0, 1, 0, 1, 2, grey)
        rec = rect.hit(Ray(Vector3(0.5, 5, 0.25), Vector3(0, -1, 0)), 0.001, math.inf)
        assert rec.t == pytest.approx(3.0)
        assert (rec.u, rec.v) == (pytest.approx(0.5), pytest.approx(0.25))
        assert rec.front_face
        assert rec.normal == Vector3(0, 1, 0)
        assert rec.material is grey

    def test_parallel_ray_misses(self, grey):
        rect = XYRect(0, 1, 0, 1, 0, grey)
        assert rect.hit(Ray(Vector3(0.5, 0.5, 0), Vector3(1, 0, 0)), -math.inf, math.inf) is None

    def test_outside_extent_misses(self, grey):
        rect = YZRect(0, 1, 0, 1, 3, grey)
        assert rect.hit(Ray(Vector3(0, 2, 0.5), Vector3(1, 0, 0)), 0.001, math.inf) is None

    def test_back_side_flips_normal(self, grey):
        rect = XYRect(0, 1, 0, 1, 0, grey)
        rec = rect.hit(Ray(Vector3(0.5, 0.5, -2), Vector3(0, 0, 1)), 0.001, math.inf)
        assert not rec.front_face
        assert rec.normal == Vector3(0, 0, -1)

    def test_bounding_box_is_flat(self, grey):
        box = YZRect(1, 2, 3, 4, 5, grey).bounding_box(0, 1)
        assert box.minimum == Vector3(5, 1, 3)
        assert box.maximum == Vector3(5, 2, 4)


class TestBox:
    def test_hit_nearest_face(self, grey):
        box = Box(Vector3(0, 0, 0), Vector3(1, 1, 1), grey)
        rec = box.hit(Ray(Vector3(0.5, 0.5, 5), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec.t == pytest.approx(4.0)
        assert rec.normal == Vector3(0, 0, 1)

    def test_hit_from_below(self, grey):
        box = Box(Vector3(0, 0, 0), Vector3(1, 2, 1), grey)
        ray = Ray(Vector3(0.5, -3, 0.5), Vector3(0, 1, 0))
        rec = box.hit(ray, 0.001, math.inf)
        assert rec.t == pytest.approx(3.0)
        assert rec.normal.dot(ray.direction) < 0

    def test_miss(self, grey):
        box = Box(Vector3(0, 0, 0), Vector3(1, 1, 1), grey)
        assert box.hit(Ray(Vector3(2, 2, 5), Vector3(0, 0, -1)), 0.001, math.inf) is None

    def test_bounding_box(self, grey):
        box = Box(Vector3(-1, 0, 2), Vector3(1, 3, 4), grey).bounding_box(0, 1)
        assert box.minimum == Vector3(-1, 0, 2)
        assert box.maximum == Vector3(1, 3, 4)


class TestTranslate:
    def test_hit_is_offset(self, grey):
        moved = Translate(Sphere(Vector3(0, 0, 0), 1.0, grey), Vector3(3, 0, 0))
        rec = moved.hit(Ray(Vector3(3, 0, 5), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec.t == pytest.approx(4.0)
        assert rec.p.is_close(Vector3(3, 0, 1))
        assert rec.normal.is_close(Vector3(0, 0, 1))
        assert rec.front_face

    def test_original_position_misses(self, grey):
        moved = Translate(Sphere(Vector3(0, 0, 0), 1.0, grey), Vector3(3, 0, 0))
        assert moved.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, math.inf) is None

    def test_bounding_box(self, grey):
        box = Translate(Sphere(Vector3(0, 0, 0), 1.0, grey), Vector3(3, 0, 0)).bounding_box(0, 1)
        assert box.minimum == Vector3(2, -1, -1)
        assert box.maximum == Vector3(4, 1, 1)


class TestRotateY:
    def test_quarter_turn_moves_sphere(self, grey):
        # +x rotated 90 degrees about +y ends up on -z.
        rotated = RotateY(Sphere(Vector3(2, 0, 0), 0.5, grey), 90)
        rec = rotated.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, math.inf)
        assert rec is not None
        assert rec.t == pytest.approx(6.5)
        assert rec.p.is_close(Vector3(0, 0, -1.5), 1e-9)
        assert rec.normal.is_close(Vector3(0, 0, 1), 1e-9)
        assert rec.front_face

    def test_quarter_turn_bounding_box(self, grey):
        box = RotateY(Sphere(Vector3(2, 0, 0), 0.5, grey), 90).bounding_box(0, 1)
        assert box.minimum.is_close(Vector3(-0.5, -0.5, -2.5), 1e-9)
        assert box.maximum.is_close(Vector3(0.5, 0.5, -1.5), 1e-9)

    def test_zero_angle_is_identity(self, grey):
        sphere = Sphere(Vector3(1, 2, 3), 1.0, grey)
        ray = Ray(Vector3(1, 2, 10), Vector3(0, 0, -1))
        plain = sphere.hit(ray, 0.001, math.inf)
        rotated = RotateY(sphere, 0).hit(ray, 0.001, math.inf)
        assert rotated.t == pytest.approx(plain.t)
        assert rotated.p.is_close(plain.p, 1e-12)

    def test_rotated_box_contains_hits(self, rng, grey):
        inst = Translate(RotateY(Box(Vector3(0, 0, 0), Vector3(2, 3, 1), grey), 30), Vector3(5, 0, 0))
        box = inst.bounding_box(0, 1)
        for _ in range(200):
            target = Vector3(*rng.uniform(3, 8, 3))
            origin = Vector3(5, 1.5, 20)
            rec = inst.hit(Ray(origin, target - origin), 0.001, math.inf)
            if rec is None:
                continue
            for a in range(3):
                assert box.minimum[a] - 1e-9 <= rec.p[a] <= box.maximum[a] + 1e-9


class TestConstantMedium:
    def test_dense_medium_scatters_at_entry(self, rng, grey):
        fog = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, grey), 1e6, Color(1, 1, 1))
        rec = fog.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, math.inf, rng)
        assert rec is not None
        assert rec.t == pytest.approx(4.0, abs=1e-3)
        assert rec.front_face
        assert rec.normal == Vector3(1, 0, 0)
        assert isinstance(rec.material, Isotropic)

    def test_thin_medium_lets_ray_through(self, rng, grey):
        fog = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, grey), 1e-9, Color(1, 1, 1))
        assert fog.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, math.inf, rng) is None

    def test_ray_starting_inside(self, rng, grey):
        fog = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, grey), 1e6, Color(1, 1, 1))
        rec = fog.hit(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)), 0.001, math.inf, rng)
        assert 0.001 <= rec.t < 0.01

    def test_interval_ending_before_boundary(self, rng, grey):
        fog = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, grey), 1e6, Color(1, 1, 1))
        assert fog.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, 3.0, rng) is None

    def test_miss_boundary(self, rng, grey):
        fog = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, grey), 1e6, Color(1, 1, 1))
        assert fog.hit(Ray(Vector3(0, 3, 5), Vector3(0, 0, -1)), 0.001, math.inf, rng) is None

    def test_scatter_distance_follows_density(self, grey):
        # Mean free path is 1 / density; the slab is long enough to rarely matter.
        rng = np.random.default_rng(99)
        density = 0.5
        fog = ConstantMedium(Box(Vector3(-100, -1, -1), Vector3(100, 1, 1), grey), density, Color(1, 1, 1))
        ray = Ray(Vector3(-100, 0, 0), Vector3(1, 0, 0))
        depths = [fog.hit(ray, 0.001, math.inf, rng).t for _ in range(2000)]
        assert np.mean(depths) == pytest.approx(1.0 / density, rel=0.1)

    def test_requires_random_stream(self, grey):
        fog = ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, grey), 1.0, Color(1, 1, 1))
        with pytest.raises(ValueError):
            fog.hit(Ray(Vector3(0, 0, 5), Vector3(0, 0, -1)), 0.001, math.inf)

    def test_density_must_be_positive(self, grey):
        with pytest.raises(ValueError):
            ConstantMedium(Sphere(Vector3(0, 0, 0), 1.0, grey), 0.0, Color(1, 1, 1))

    def test_bounding_box_is_boundary_box(self, grey):
        fog = ConstantMedium(Sphere(Vector3(0, 0, 0), 2.0, grey), 1.0, Color(1, 1, 1))
        box = fog.bounding_box(0, 1)
        assert box.minimum == Vector3(-2, -2, -2)
        assert box.maximum == Vector3(2, 2, 2)
