# materials/material.py
from typing import Optional, Tuple
from core.ray import Ray
from core.vector import Color, Point3
from geometry.hittable import HitRecord

BLACK = Color(0.0, 0.0, 0.0)


class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Optional[Tuple[Ray, Color]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, u: float, v: float, p: Point3) -> Color:
        """Light given off at the hit point. Only light sources emit."""
        return BLACK
