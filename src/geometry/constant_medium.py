# geometry/constant_medium.py
import math
from typing import Optional, Union
from core.aabb import AABB
from core.ray import Ray
from core.utils import INFINITY
from core.vector import Vector3
from geometry.hittable import Hittable, HitRecord
from materials.isotropic import Isotropic
from materials.textures import Texture

# Nudge past the entry surface before looking for the exit surface.
_EXIT_OFFSET = 0.0001


class ConstantMedium(Hittable):
    """
    Participating medium of constant density inside a boundary (smoke, fog).

    A ray travelling through the medium scatters after an exponentially
    distributed free path; if that path is longer than the chord through the
    boundary the ray passes through untouched. The boundary must be convex:
    once the ray leaves it, it is assumed never to come back in.
    """
    def __init__(self, boundary: Hittable, density: float, albedo: Union[Vector3, Texture]):
        if density <= 0:
            raise ValueError(f"Medium density must be positive, got {density}")
        self.boundary = boundary
        self.density = density
        self.neg_inv_density = -1.0 / density
        self.phase_function = Isotropic(albedo)

    def hit(self, ray: Ray, t_min: float, t_max: float, rng=None) -> Optional[HitRecord]:
        if rng is None:
            raise ValueError("ConstantMedium.hit needs a random stream")

        rec1 = self.boundary.hit(ray, -INFINITY, INFINITY, rng)
        if rec1 is None:
            return None
        rec2 = self.boundary.hit(ray, rec1.t + _EXIT_OFFSET, INFINITY, rng)
        if rec2 is None:
            return None

        t_enter = max(rec1.t, t_min)
        t_exit = min(rec2.t, t_max)
        if t_enter >= t_exit:
            return None
        if t_enter < 0:
            t_enter = 0.0

        ray_length = ray.direction.length()
        distance_inside_boundary = (t_exit - t_enter) * ray_length
        # 1 - U keeps the argument of log in (0, 1].
        hit_distance = self.neg_inv_density * math.log(1.0 - rng.random())
        if hit_distance > distance_inside_boundary:
            return None

        rec = HitRecord()
        rec.t = t_enter + hit_distance / ray_length
        rec.p = ray.at(rec.t)
        rec.normal = Vector3(1, 0, 0)  # arbitrary, the phase function ignores it
        rec.front_face = True
        rec.material = self.phase_function
        return rec

    def bounding_box(self, time0: float, time1: float) -> Optional[AABB]:
        return self.boundary.bounding_box(time0, time1)
