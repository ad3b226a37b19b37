"""Every demo scene builds, wraps in a BVH and can be looked at."""

import math

import numpy as np
import pytest
from PIL import Image

from geometry.bvh import BVHNode
from geometry.world import build_world
from renderer.raytracer import Renderer
from scenes import SCENES, Scene, build_scene


@pytest.fixture
def texture_file(tmp_path):
    path = tmp_path / "earth.png"
    Image.new("RGB", (4, 2), (20, 60, 200)).save(path)
    return str(path)


class TestScenes:
    @pytest.mark.parametrize("name", sorted(SCENES))
    def test_builds_into_bvh(self, name, texture_file):
        rng = np.random.default_rng(0)
        scene = build_scene(name, rng, texture_file)
        assert isinstance(scene, Scene)
        assert len(scene.objects) > 0
        world = build_world(scene.objects, scene.time0, scene.time1, rng)
        assert isinstance(world, BVHNode)

    @pytest.mark.parametrize("name", sorted(SCENES))
    def test_camera_sees_geometry(self, name, texture_file):
        rng = np.random.default_rng(0)
        scene = build_scene(name, rng, texture_file)
        world = build_world(scene.objects, scene.time0, scene.time1, rng)
        camera = scene.camera()
        hits = 0
        for s in (0.1, 0.5, 0.9):
            for t in (0.0, 0.1, 0.5, 0.9):
                if world.hit(camera.get_ray(s, t, rng), 0.001, math.inf, rng) is not None:
                    hits += 1
        assert hits > 0

    def test_same_seed_same_scene(self):
        a = build_scene("random_spheres", np.random.default_rng(5))
        b = build_scene("random_spheres", np.random.default_rng(5))
        assert len(a.objects) == len(b.objects)
        assert [o.bounding_box(0, 1).minimum for o in a.objects.objects] == \
            [o.bounding_box(0, 1).minimum for o in b.objects.objects]

    def test_camera_aspect_override(self):
        scene = build_scene("cornell_box", np.random.default_rng(0))
        assert scene.camera().aspect_ratio == 1.0
        assert scene.camera(2.0).aspect_ratio == 2.0

    def test_zero_aspect_override_is_rejected(self):
        scene = build_scene("cornell_box", np.random.default_rng(0))
        with pytest.raises(ValueError):
            scene.camera(0.0)

    def test_unknown_scene(self):
        with pytest.raises(ValueError, match="Unknown scene"):
            build_scene("teapot", np.random.default_rng(0))

    def test_missing_texture_still_builds(self, tmp_path):
        scene = build_scene("earth", np.random.default_rng(0), str(tmp_path / "missing.jpg"))
        assert len(scene.objects) == 1

    def test_tiny_cornell_render(self):
        rng = np.random.default_rng(0)
        scene = build_scene("cornell_box", rng)
        world = build_world(scene.objects, scene.time0, scene.time1, rng)
        image = Renderer(4, 4, samples_per_pixel=2, max_depth=4, seed=0).render(
            scene.camera(), world, scene.background)
        assert image.shape == (4, 4, 3)
        assert np.all(np.isfinite(image))
