# geometry/box.py
from typing import Optional
from core.aabb import AABB
from core.ray import Ray
from core.vector import Point3
from geometry.aarect import XYRect, XZRect, YZRect
from geometry.hittable import Hittable, HitRecord
from geometry.world import HittableList


class Box(Hittable):
    """Axis-aligned box made of six rectangles between corners p0 and p1."""

    def __init__(self, p0: Point3, p1: Point3, material):
        self.box_min = p0
        self.box_max = p1
        self.sides = HittableList([
            XYRect(p0.x, p1.x, p0.y, p1.y, p1.z, material),
            XYRect(p0.x, p1.x, p0.y, p1.y, p0.z, material),
            XZRect(p0.x, p1.x, p0.z, p1.z, p1.y, material),
            XZRect(p0.x, p1.x, p0.z, p1.z, p0.y, material),
            YZRect(p0.y, p1.y, p0.z, p1.z, p1.x, material),
            YZRect(p0.y, p1.y, p0.z, p1.z, p0.x, material),
        ])

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        return self.sides.hit(ray, t_min, t_max, rng)

    def bounding_box(self, time0: float, time1: float) -> AABB:
        return AABB(self.box_min, self.box_max)
