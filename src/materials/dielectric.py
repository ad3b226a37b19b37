# src/materials/dielectric.py
import math
from typing import Tuple
from core.ray import Ray
from core.utils import reflect, refract, schlick
from core.vector import Color
from geometry.hittable import HitRecord
from materials.material import Material

CLEAR = Color(1.0, 1.0, 1.0)  # Glass doesn't absorb light


def reflectance(cosine: float, refraction_ratio: float) -> float:
    # Schlick overestimates reflection at grazing angles on an index-matched
    # interface, which physically reflects nothing.
    if refraction_ratio == 1.0:
        return 0.0
    return schlick(cosine, refraction_ratio)


class Dielectric(Material):
    """Clear refractive material (glass, water) with index of refraction ``ref_idx``."""

    def __init__(self, ref_idx: float):
        self.ref_idx = ref_idx

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Ray, Color]:
        # Determine if we're entering or exiting the material
        refraction_ratio = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()

        # Calculate cosine using the angle between incoming ray and normal
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, refraction_ratio) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)

        return Ray(rec.p, direction, ray_in.time), CLEAR
