# materials/perlin.py
import math
from core.vector import Point3, Vector3

POINT_COUNT = 256


class Perlin:
    """
    Gradient noise over 3D points.

    The lattice holds random unit vectors; three independent permutations
    hash the integer cell coordinates into it. Tables are drawn once from
    ``rng`` and never change, so the noise is a pure function afterwards.
    """
    def __init__(self, rng):
        vectors = rng.uniform(-1.0, 1.0, (POINT_COUNT, 3))
        self.ranvec = []
        for x, y, z in vectors:
            v = Vector3(float(x), float(y), float(z))
            if v.length_squared() < 1e-12:
                v = Vector3(1.0, 0.0, 0.0)
            self.ranvec.append(v.normalize())
        self.perm_x = [int(i) for i in rng.permutation(POINT_COUNT)]
        self.perm_y = [int(i) for i in rng.permutation(POINT_COUNT)]
        self.perm_z = [int(i) for i in rng.permutation(POINT_COUNT)]

    def noise(self, p: Point3) -> float:
        """Noise value in roughly [-1, 1]."""
        fx = math.floor(p.x)
        fy = math.floor(p.y)
        fz = math.floor(p.z)
        u = p.x - fx
        v = p.y - fy
        w = p.z - fz
        i = int(fx)
        j = int(fy)
        k = int(fz)

        c = [[[None, None], [None, None]], [[None, None], [None, None]]]
        for di in range(2):
            for dj in range(2):
                for dk in range(2):
                    c[di][dj][dk] = self.ranvec[
                        self.perm_x[(i + di) & 255] ^
                        self.perm_y[(j + dj) & 255] ^
                        self.perm_z[(k + dk) & 255]
                    ]
        return _trilinear_interp(c, u, v, w)

    def turb(self, p: Point3, depth: int = 7) -> float:
        """Sum of ``depth`` octaves of noise, each at double frequency and half weight."""
        accum = 0.0
        temp_p = p
        weight = 1.0
        for _ in range(depth):
            accum += weight * self.noise(temp_p)
            weight *= 0.5
            temp_p = temp_p * 2.0
        return abs(accum)


def _trilinear_interp(c, u: float, v: float, w: float) -> float:
    # Hermite smoothing removes the grid artefacts of plain trilinear blending.
    uu = u * u * (3 - 2 * u)
    vv = v * v * (3 - 2 * v)
    ww = w * w * (3 - 2 * w)
    accum = 0.0
    for i in range(2):
        for j in range(2):
            for k in range(2):
                weight_v = Vector3(u - i, v - j, w - k)
                accum += ((i * uu + (1 - i) * (1 - uu)) *
                          (j * vv + (1 - j) * (1 - vv)) *
                          (k * ww + (1 - k) * (1 - ww)) *
                          c[i][j][k].dot(weight_v))
    return accum
