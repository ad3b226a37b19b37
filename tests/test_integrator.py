"""Radiance estimation, per-pixel sampling and whole-image rendering."""

import math

import numpy as np
import pytest

from camera.camera import Camera
from core.ray import Ray
from core.vector import Color, Vector3
from geometry.sphere import Sphere
from geometry.world import HittableList, build_world
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.material import Material
from materials.presets import ColorPresets
from renderer.raytracer import BLACK, Renderer, ray_color, render_pixel, sky_gradient

WHITE = Color(1.0, 1.0, 1.0)


class NonFiniteLight(Material):
    """Emits a color with broken channels, as a buggy material might."""

    def scatter(self, ray_in, rec, rng):
        return None

    def emitted(self, u, v, p):
        return Color(math.nan, 0.5, math.inf)


def front_camera(aspect_ratio=1.0):
    return Camera(Vector3(0, 0, 5), Vector3(0, 0, 0), Vector3(0, 1, 0), 20.0, aspect_ratio)


class TestRayColor:
    def test_no_light_once_depth_exhausted(self, rng):
        world = HittableList()
        assert ray_color(Ray(Vector3(), Vector3(0, 0, -1)), WHITE, world, 0, rng) == BLACK

    def test_miss_returns_constant_background(self, rng):
        background = Color(0.1, 0.2, 0.3)
        color = ray_color(Ray(Vector3(), Vector3(0, 0, -1)), background, HittableList(), 50, rng)
        assert color == background

    def test_miss_returns_background_function(self, rng):
        ray = Ray(Vector3(), Vector3(0, 1, 0))
        assert ray_color(ray, sky_gradient, HittableList(), 50, rng) == sky_gradient(ray)

    def test_light_returns_its_emission(self, rng):
        world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, DiffuseLight(Color(2, 3, 4)))])
        color = ray_color(Ray(Vector3(), Vector3(0, 0, -1)), BLACK, world, 50, rng)
        assert color == Color(2, 3, 4)

    def test_diffuse_sphere_attenuates_background(self, rng):
        # Light leaving a convex surface cannot hit it again: exactly one bounce.
        world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, Lambertian(ColorPresets.WHITE))])
        for _ in range(20):
            color = ray_color(Ray(Vector3(), Vector3(0, 0, -1)), WHITE, world, 50, rng)
            assert color.is_close(ColorPresets.WHITE, 1e-12)

    def test_one_bounce_depth_gives_black_on_surface(self, rng):
        world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, Lambertian(ColorPresets.WHITE))])
        assert ray_color(Ray(Vector3(), Vector3(0, 0, -1)), WHITE, world, 1, rng) == BLACK


class TestSkyGradient:
    def test_endpoints(self):
        assert sky_gradient(Ray(Vector3(), Vector3(0, 1, 0))).is_close(Color(0.5, 0.7, 1.0))
        assert sky_gradient(Ray(Vector3(), Vector3(0, -1, 0))).is_close(Color(1.0, 1.0, 1.0))


class TestRenderPixel:
    def test_converges_on_white_sphere(self, rng):
        world = build_world([Sphere(Vector3(0, 0, 0), 1.0, Lambertian(ColorPresets.WHITE))], 0, 1, rng)
        color = render_pixel(front_camera(), world, WHITE, (5, 5), (11, 11), 16, 50, rng)
        assert color.is_close(ColorPresets.WHITE, 1e-9)
        assert 0.0 < color.x < 1.0

    def test_pixel_off_the_sphere_sees_background(self, rng):
        world = build_world([Sphere(Vector3(0, 0, 0), 0.1, Lambertian(ColorPresets.WHITE))], 0, 1, rng)
        color = render_pixel(front_camera(), world, Color(0.2, 0.4, 0.6), (0, 0), (11, 11), 8, 50, rng)
        assert color.is_close(Color(0.2, 0.4, 0.6), 1e-12)

    def test_deterministic_for_same_seed(self):
        world = HittableList([Sphere(Vector3(0, 0, 0), 1.0, Lambertian(Color(0.5, 0.5, 0.5))),
                              Sphere(Vector3(0, -101, 0), 100.0, Lambertian(Color(0.8, 0.8, 0.8)))])
        args = (front_camera(), world, sky_gradient, (4, 3), (9, 9), 8, 10)
        a = render_pixel(*args, np.random.default_rng(21))
        b = render_pixel(*args, np.random.default_rng(21))
        assert a == b

    def test_non_finite_samples_count_as_zero(self, rng):
        world = HittableList([Sphere(Vector3(0, 0, 0), 1.0, NonFiniteLight())])
        color = render_pixel(front_camera(), world, BLACK, (5, 5), (11, 11), 4, 50, rng)
        assert color == Color(0.0, 0.5, 0.0)

    def test_single_pixel_image(self, rng):
        color = render_pixel(front_camera(), HittableList(), WHITE, (0, 0), (1, 1), 2, 5, rng)
        assert color == WHITE


class TestRenderer:
    def scene(self):
        world = HittableList([Sphere(Vector3(0, 0, 0), 1.0, Lambertian(Color(0.5, 0.3, 0.2)))])
        return front_camera(4 / 3), world

    def test_output_shape_and_range(self):
        camera, world = self.scene()
        image = Renderer(8, 6, samples_per_pixel=2, max_depth=5, seed=1).render(camera, world, sky_gradient)
        assert image.shape == (6, 8, 3)
        assert image.dtype == np.float64
        assert image.min() >= 0.0
        assert image.max() <= 1.0

    def test_top_row_is_sky(self):
        # Looking level, the top of the frame points further up the gradient than the bottom.
        camera = Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 90.0, 1.0)
        image = Renderer(5, 5, samples_per_pixel=1, max_depth=1, seed=0).render(camera, HittableList(), sky_gradient)
        assert image[0, 2, 0] < image[-1, 2, 0]

    def test_same_seed_same_image(self):
        camera, world = self.scene()
        a = Renderer(6, 4, 3, 5, seed=7).render(camera, world, sky_gradient)
        b = Renderer(6, 4, 3, 5, seed=7).render(camera, world, sky_gradient)
        np.testing.assert_array_equal(a, b)

    def test_parallel_matches_serial(self):
        camera, world = self.scene()
        serial = Renderer(6, 4, 3, 5, workers=1, seed=3).render(camera, world, sky_gradient)
        parallel = Renderer(6, 4, 3, 5, workers=2, seed=3).render(camera, world, sky_gradient)
        np.testing.assert_array_equal(serial, parallel)

    def test_row_seeds_one_per_row(self):
        assert len(Renderer(3, 7, seed=0).row_seeds()) == 7

    @pytest.mark.parametrize("kwargs", [
        dict(width=0, height=4),
        dict(width=4, height=-1),
        dict(width=4, height=4, samples_per_pixel=0),
        dict(width=4, height=4, max_depth=0),
        dict(width=4, height=4, workers=0),
    ])
    def test_rejects_bad_settings(self, kwargs):
        with pytest.raises(ValueError):
            Renderer(**kwargs)
