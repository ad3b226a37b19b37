# geometry/sphere.py
import math
from typing import Optional, Tuple
from core.vector import Vector3
from core.ray import Ray
from geometry.hittable import Hittable, HitRecord
from core.aabb import AABB


def get_sphere_uv(p: Vector3) -> Tuple[float, float]:
    """
    Spherical (u, v) in [0, 1] for a point p on the unit sphere.

    u is the angle around the Y axis from X=-1, v the angle from Y=-1 to Y=+1:
    (1,0,0) -> (0.50, 0.50), (0,1,0) -> (0.50, 1.00), (0,0,1) -> (0.25, 0.50).
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi


def solve_sphere(ray: Ray, center: Vector3, radius: float,
                 t_min: float, t_max: float) -> Optional[float]:
    """
    Nearest root of the ray/sphere quadratic inside [t_min, t_max], using the
    half-b form. Returns None on a miss.
    """
    oc = ray.origin - center
    a = ray.direction.length_squared()
    half_b = oc.dot(ray.direction)
    c = oc.length_squared() - radius * radius
    discriminant = half_b * half_b - a * c

    if discriminant < 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Find the nearest root that lies in the acceptable range
    root = (-half_b - sqrt_disc) / a
    if root < t_min or root > t_max:
        root = (-half_b + sqrt_disc) / a
        if root < t_min or root > t_max:
            return None
    return root


def sphere_record(ray: Ray, root: float, center: Vector3, radius: float, material) -> HitRecord:
    rec = HitRecord()
    rec.t = root
    rec.p = ray.at(root)
    # Dividing by the signed radius flips the normal inward for hollow spheres.
    outward_normal = (rec.p - center) / radius
    rec.set_face_normal(ray, outward_normal)
    rec.u, rec.v = get_sphere_uv(outward_normal)
    rec.material = material
    return rec


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    A negative radius keeps the geometry but turns the normals inward,
    which models the inside surface of a hollow glass shell.
    """
    def __init__(self, center: Vector3, radius: float, material):
        if radius == 0:
            raise ValueError("Sphere radius must be non-zero")
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        root = solve_sphere(ray, self.center, self.radius, t_min, t_max)
        if root is None:
            return None
        return sphere_record(ray, root, self.center, self.radius, self.material)

    def bounding_box(self, time0: float, time1: float) -> AABB:
        # The bounding box of a sphere is center ± radius
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        return AABB(self.center - offset, self.center + offset)
