# materials/isotropic.py
from typing import Tuple, Union
from core.ray import Ray
from core.utils import random_in_unit_sphere
from core.vector import Color, Vector3
from geometry.hittable import HitRecord
from materials.material import Material
from materials.textures import Texture, as_texture


class Isotropic(Material):
    """Phase function of a participating medium: scatter uniformly in every direction."""

    def __init__(self, albedo: Union[Vector3, Texture]):
        self.texture = as_texture(albedo)

    def scatter(self, ray_in: Ray, rec: HitRecord, rng) -> Tuple[Ray, Color]:
        scattered = Ray(rec.p, random_in_unit_sphere(rng), ray_in.time)
        return scattered, self.texture.value(rec.u, rec.v, rec.p)
