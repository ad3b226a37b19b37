# geometry/instance.py
"""Instances: move or rotate an existing hittable without copying it."""
import math
from typing import Optional
from core.aabb import AABB
from core.ray import Ray
from core.utils import INFINITY, degrees_to_radians
from core.vector import Vector3
from geometry.hittable import Hittable, HitRecord


class Translate(Hittable):
    def __init__(self, obj: Hittable, offset: Vector3):
        self.obj = obj
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(moved, t_min, t_max, rng)
        if rec is None:
            return None
        rec.p = rec.p + self.offset
        rec.set_face_normal(moved, rec.normal if rec.front_face else -rec.normal)
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        box = self.obj.bounding_box(time0, time1)
        if box is None:
            return None
        return AABB(box.minimum + self.offset, box.maximum + self.offset)


class RotateY(Hittable):
    """
    Rotates an object about the Y axis by ``angle`` degrees. The bounding
    box is computed once, from the eight rotated corners of the object's box.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.obj = obj
        radians = degrees_to_radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)
        self.box = self._rotated_box(obj.bounding_box(0.0, 1.0))

    def _rotated_box(self, box: Optional[AABB]) -> Optional[AABB]:
        if box is None:
            return None
        lo = [INFINITY, INFINITY, INFINITY]
        hi = [-INFINITY, -INFINITY, -INFINITY]
        for x in (box.minimum.x, box.maximum.x):
            for y in (box.minimum.y, box.maximum.y):
                for z in (box.minimum.z, box.maximum.z):
                    corner = self._to_world(Vector3(x, y, z))
                    for a in range(3):
                        lo[a] = min(lo[a], corner[a])
                        hi[a] = max(hi[a], corner[a])
        return AABB(Vector3(*lo), Vector3(*hi))

    def _to_object(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x - self.sin_theta * v.z,
                       v.y,
                       self.sin_theta * v.x + self.cos_theta * v.z)

    def _to_world(self, v: Vector3) -> Vector3:
        return Vector3(self.cos_theta * v.x + self.sin_theta * v.z,
                       v.y,
                       -self.sin_theta * v.x + self.cos_theta * v.z)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        rotated = Ray(self._to_object(ray.origin), self._to_object(ray.direction), ray.time)
        rec = self.obj.hit(rotated, t_min, t_max, rng)
        if rec is None:
            return None
        outward = rec.normal if rec.front_face else -rec.normal
        rec.p = self._to_world(rec.p)
        rec.set_face_normal(ray, self._to_world(outward))
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        return self.box
