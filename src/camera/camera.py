# camera/camera.py
import math
from core.vector import Point3, Vector3
from core.ray import Ray
from core.utils import degrees_to_radians, random_in_unit_disk


class Camera:
    """
    Positionable thin-lens camera.

    Built once per render from a look-from/look-at pair; everything derived
    here (orthonormal basis, viewport, lens radius) is read-only afterwards.
    ``vfov`` is the vertical field of view in degrees. Rays are stamped with
    a random time in [time0, time1] for motion blur.
    """
    def __init__(self, lookfrom: Point3, lookat: Point3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0, time0: float = 0.0, time1: float = 0.0):
        if aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0
        self.time0 = time0
        self.time1 = time1

        theta = degrees_to_radians(vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Orthonormal basis: w points backwards, u right, v up.
        self.w = (lookfrom - lookat).normalize()
        self.u = vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        self.origin = lookfrom
        self.horizontal = self.u * (focus_dist * viewport_width)
        self.vertical = self.v * (focus_dist * viewport_height)
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)

    def get_ray(self, s: float, t: float, rng) -> Ray:
        """Ray through normalized image coordinates (s, t), (0, 0) at the lower left."""
        origin = self.origin
        if self.lens_radius > 0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            origin = origin + self.u * rd.x + self.v * rd.y

        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     origin)
        time = self.time0 if self.time1 <= self.time0 else float(rng.uniform(self.time0, self.time1))
        return Ray(origin, direction, time)
