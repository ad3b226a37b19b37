# core/utils.py
"""
Sampling helpers and small optics formulas shared by materials and the camera.

Every random helper draws from an explicit ``numpy.random.Generator`` so that a
render is reproducible from its seed and safe to run in several processes.
"""
import math
from core.vector import Vector3

INFINITY = math.inf


def degrees_to_radians(degrees: float) -> float:
    return degrees * math.pi / 180.0


def clamp(x: float, lo: float, hi: float) -> float:
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def random_vector(rng, lo: float = 0.0, hi: float = 1.0) -> Vector3:
    x, y, z = rng.uniform(lo, hi, 3)
    return Vector3(float(x), float(y), float(z))


def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = random_vector(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        # Points at the centre have no direction to normalize.
        if p.length_squared() > 1e-24:
            return p.normalize()


def random_in_unit_disk(rng) -> Vector3:
    """Random point in the z=0 unit disk, used for lens sampling."""
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2)
        p = Vector3(float(x), float(y), 0.0)
        if p.length_squared() < 1.0:
            return p


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)


def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Snell's law for a unit incident direction uv and a unit normal n facing it.
    The caller is responsible for ruling out total internal reflection.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def schlick(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation of the Fresnel reflectance."""
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cosine), 5)
