# geometry/aarect.py
"""Axis-aligned rectangles used for walls, lights and box faces."""
from typing import Optional
from core.aabb import AABB
from core.ray import Ray
from core.vector import Vector3
from geometry.hittable import Hittable, HitRecord


class _AxisAlignedRect(Hittable):
    """
    Rectangle lying in the plane ``axis == k``, spanning [a0, a1] along
    ``axis_a`` and [b0, b1] along ``axis_b``. The outward normal points down
    the positive plane axis.
    """
    axis_a = 0
    axis_b = 1
    axis = 2

    def __init__(self, a0: float, a1: float, b0: float, b1: float, k: float, material):
        self.a0 = a0
        self.a1 = a1
        self.b0 = b0
        self.b1 = b1
        self.k = k
        self.material = material

    def _normal(self) -> Vector3:
        n = [0.0, 0.0, 0.0]
        n[self.axis] = 1.0
        return Vector3(*n)

    def _point(self, a: float, b: float, k: float) -> Vector3:
        p = [0.0, 0.0, 0.0]
        p[self.axis_a] = a
        p[self.axis_b] = b
        p[self.axis] = k
        return Vector3(*p)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        d = ray.direction[self.axis]
        if d == 0.0:
            return None  # parallel to the plane
        t = (self.k - ray.origin[self.axis]) / d
        if t < t_min or t > t_max:
            return None
        a = ray.origin[self.axis_a] + t * ray.direction[self.axis_a]
        b = ray.origin[self.axis_b] + t * ray.direction[self.axis_b]
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        rec = HitRecord()
        rec.u = (a - self.a0) / (self.a1 - self.a0)
        rec.v = (b - self.b0) / (self.b1 - self.b0)
        rec.t = t
        rec.set_face_normal(ray, self._normal())
        rec.material = self.material
        rec.p = ray.at(t)
        return rec

    def bounding_box(self, time0: float, time1: float) -> AABB:
        # Zero thickness along the plane axis; AABB.hit accepts flat boxes.
        return AABB(self._point(self.a0, self.b0, self.k),
                    self._point(self.a1, self.b1, self.k))


class XYRect(_AxisAlignedRect):
    axis_a, axis_b, axis = 0, 1, 2

    def __init__(self, x0: float, x1: float, y0: float, y1: float, k: float, material):
        super().__init__(x0, x1, y0, y1, k, material)


class XZRect(_AxisAlignedRect):
    axis_a, axis_b, axis = 0, 2, 1

    def __init__(self, x0: float, x1: float, z0: float, z1: float, k: float, material):
        super().__init__(x0, x1, z0, z1, k, material)


class YZRect(_AxisAlignedRect):
    axis_a, axis_b, axis = 1, 2, 0

    def __init__(self, y0: float, y1: float, z0: float, z1: float, k: float, material):
        super().__init__(y0, y1, z0, z1, k, material)
