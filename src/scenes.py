# scenes.py
"""
Demo scenes. Each builder takes the scene-construction random stream (and,
for textured scenes, an image path) and returns a Scene: the primitives,
where the camera looks from, and the background.
"""
import logging
from typing import Callable, Dict, Optional
from camera.camera import Camera
from core.vector import Color, Point3, Vector3
from core.utils import random_vector
from geometry.aarect import XYRect, XZRect, YZRect
from geometry.box import Box
from geometry.bvh import BVHNode
from geometry.constant_medium import ConstantMedium
from geometry.instance import RotateY, Translate
from geometry.moving_sphere import MovingSphere
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.presets import (ColorPresets, DielectricPresets, LightPresets,
                               MetalPresets, TexturePresets)
from materials.textures import ImageTexture
from renderer.raytracer import Background, sky_gradient

logger = logging.getLogger(__name__)

BLACK = Color(0.0, 0.0, 0.0)
DEFAULT_TEXTURE = "earthmap.jpg"


class Scene:
    """Primitives plus the camera placement and background that go with them."""

    def __init__(self, objects: HittableList, background: Background,
                 lookfrom: Point3, lookat: Point3, vfov: float = 20.0,
                 aperture: float = 0.0, focus_dist: float = 10.0,
                 time0: float = 0.0, time1: float = 1.0,
                 aspect_ratio: float = 16.0 / 9.0,
                 vup: Vector3 = Vector3(0, 1, 0)):
        self.objects = objects
        self.background = background
        self.lookfrom = lookfrom
        self.lookat = lookat
        self.vup = vup
        self.vfov = vfov
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.time0 = time0
        self.time1 = time1
        self.aspect_ratio = aspect_ratio

    def camera(self, aspect_ratio: Optional[float] = None) -> Camera:
        return Camera(self.lookfrom, self.lookat, self.vup, self.vfov,
                      self.aspect_ratio if aspect_ratio is None else aspect_ratio, self.aperture,
                      self.focus_dist, self.time0, self.time1)


def random_spheres(rng, texture_path: Optional[str] = None) -> Scene:
    world = HittableList()
    checker = TexturePresets.checkerboard()
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(checker)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())
            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                albedo = random_vector(rng) * random_vector(rng)
                center2 = center + Vector3(0, float(rng.uniform(0, 0.5)), 0)
                world.add(MovingSphere(center, center2, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = random_vector(rng, 0.5, 1.0)
                fuzz = float(rng.uniform(0, 0.5))
                world.add(Sphere(center, 0.2, Metal(albedo, fuzz)))
            else:
                world.add(Sphere(center, 0.2, DielectricPresets.glass()))

    world.add(Sphere(Point3(0, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    return Scene(world, sky_gradient, Point3(13, 2, 3), Point3(0, 0, 0), aperture=0.1)


def two_spheres(rng, texture_path: Optional[str] = None) -> Scene:
    checker = TexturePresets.checkerboard()
    world = HittableList([
        Sphere(Point3(0, -10, 0), 10, Lambertian(checker)),
        Sphere(Point3(0, 10, 0), 10, Lambertian(checker)),
    ])
    return Scene(world, sky_gradient, Point3(13, 2, 3), Point3(0, 0, 0))


def two_perlin_spheres(rng, texture_path: Optional[str] = None) -> Scene:
    pertext = TexturePresets.marble(rng)
    world = HittableList([
        Sphere(Point3(0, -1000, 0), 1000, Lambertian(pertext)),
        Sphere(Point3(0, 2, 0), 2, Lambertian(pertext)),
    ])
    return Scene(world, sky_gradient, Point3(13, 2, 3), Point3(0, 0, 0))


def earth(rng, texture_path: Optional[str] = None) -> Scene:
    earth_texture = ImageTexture(texture_path or DEFAULT_TEXTURE)
    world = HittableList([Sphere(Point3(0, 0, 0), 2, Lambertian(earth_texture))])
    return Scene(world, sky_gradient, Point3(13, 2, 3), Point3(0, 0, 0))


def simple_light(rng, texture_path: Optional[str] = None) -> Scene:
    pertext = TexturePresets.marble(rng)
    world = HittableList([
        Sphere(Point3(0, -1000, 0), 1000, Lambertian(pertext)),
        Sphere(Point3(0, 2, 0), 2, Lambertian(pertext)),
        XYRect(3, 5, 1, 3, -2, LightPresets.white()),
    ])
    return Scene(world, BLACK, Point3(26, 3, 6), Point3(0, 2, 0))


def _cornell_walls(light: DiffuseLight, light_rect) -> HittableList:
    red = ColorPresets.matte(ColorPresets.RED)
    white = ColorPresets.matte(ColorPresets.WHITE)
    green = ColorPresets.matte(ColorPresets.GREEN)
    x0, x1, z0, z1 = light_rect
    return HittableList([
        YZRect(0, 555, 0, 555, 555, green),
        YZRect(0, 555, 0, 555, 0, red),
        XZRect(x0, x1, z0, z1, 554, light),
        XZRect(0, 555, 0, 555, 0, white),
        XZRect(0, 555, 0, 555, 555, white),
        XYRect(0, 555, 0, 555, 555, white),
    ])


def _cornell_boxes():
    white = ColorPresets.matte(ColorPresets.WHITE)
    tall = Translate(RotateY(Box(Point3(0, 0, 0), Point3(165, 330, 165), white), 15),
                     Vector3(265, 0, 295))
    short = Translate(RotateY(Box(Point3(0, 0, 0), Point3(165, 165, 165), white), -18),
                      Vector3(130, 0, 65))
    return tall, short


def cornell_box(rng, texture_path: Optional[str] = None) -> Scene:
    world = _cornell_walls(LightPresets.ceiling(), (213, 343, 227, 332))
    for box in _cornell_boxes():
        world.add(box)
    return Scene(world, BLACK, Point3(278, 278, -800), Point3(278, 278, 0),
                 vfov=40.0, aspect_ratio=1.0)


def cornell_smoke(rng, texture_path: Optional[str] = None) -> Scene:
    world = _cornell_walls(LightPresets.warm_light(), (113, 443, 127, 432))
    tall, short = _cornell_boxes()
    world.add(ConstantMedium(tall, 0.01, Color(0, 0, 0)))
    world.add(ConstantMedium(short, 0.01, Color(1, 1, 1)))
    return Scene(world, BLACK, Point3(278, 278, -800), Point3(278, 278, 0),
                 vfov=40.0, aspect_ratio=1.0)


def final_scene(rng, texture_path: Optional[str] = None) -> Scene:
    ground = Lambertian(ColorPresets.GROUND)
    boxes_per_side = 20
    boxes1 = []
    for i in range(boxes_per_side):
        for j in range(boxes_per_side):
            w = 100.0
            x0 = -1000.0 + i * w
            z0 = -1000.0 + j * w
            y1 = float(rng.uniform(1, 101))
            boxes1.append(Box(Point3(x0, 0.0, z0), Point3(x0 + w, y1, z0 + w), ground))

    world = HittableList()
    world.add(BVHNode.from_objects(boxes1, 0.0, 1.0, rng))
    world.add(XZRect(123, 423, 147, 412, 554, LightPresets.warm_light()))

    center1 = Point3(400, 400, 200)
    center2 = center1 + Vector3(30, 0, 0)
    world.add(MovingSphere(center1, center2, 0.0, 1.0, 50, Lambertian(Color(0.7, 0.3, 0.1))))
    world.add(Sphere(Point3(260, 150, 45), 50, DielectricPresets.glass()))
    world.add(Sphere(Point3(0, 150, 145), 50, MetalPresets.brushed_metal()))

    boundary = Sphere(Point3(360, 150, 145), 70, Dielectric(1.5))
    world.add(boundary)
    world.add(ConstantMedium(boundary, 0.2, Color(0.2, 0.4, 0.9)))
    mist = Sphere(Point3(0, 0, 0), 5000, Dielectric(1.5))
    world.add(ConstantMedium(mist, 0.0001, Color(1, 1, 1)))

    world.add(Sphere(Point3(400, 200, 400), 100, Lambertian(ImageTexture(texture_path or DEFAULT_TEXTURE))))
    world.add(Sphere(Point3(220, 280, 300), 80, Lambertian(TexturePresets.marble(rng, 0.1))))

    white = ColorPresets.matte(ColorPresets.WHITE)
    cluster = [Sphere(random_vector(rng, 0, 165), 10, white) for _ in range(1000)]
    world.add(Translate(RotateY(BVHNode.from_objects(cluster, 0.0, 1.0, rng), 15),
                        Vector3(-100, 270, 395)))

    return Scene(world, BLACK, Point3(478, 278, -600), Point3(278, 278, 0),
                 vfov=40.0, aspect_ratio=1.0)


SCENES: Dict[str, Callable[..., Scene]] = {
    "random_spheres": random_spheres,
    "two_spheres": two_spheres,
    "two_perlin_spheres": two_perlin_spheres,
    "earth": earth,
    "simple_light": simple_light,
    "cornell_box": cornell_box,
    "cornell_smoke": cornell_smoke,
    "final_scene": final_scene,
}


def build_scene(name: str, rng, texture_path: Optional[str] = None) -> Scene:
    try:
        builder = SCENES[name]
    except KeyError:
        raise ValueError(f"Unknown scene {name!r}; choose from {', '.join(sorted(SCENES))}") from None
    scene = builder(rng, texture_path)
    logger.debug("Scene %s: %d top-level objects", name, len(scene.objects))
    return scene
