# renderer/tone_mapping.py
import math
import numpy as np
from numba import njit
from PIL import Image


@njit(cache=True)
def _gamma_quantize(linear_image, output_image, gamma):
    height, width, channels = linear_image.shape
    inv_gamma = 1.0 / gamma
    for y in range(height):
        for x in range(width):
            for c in range(channels):
                v = linear_image[y, x, c]
                if not math.isfinite(v) or v < 0.0:
                    v = 0.0
                v = v ** inv_gamma
                if v > 0.999:
                    v = 0.999
                output_image[y, x, c] = int(256.0 * v)


def to_rgb8(linear_image: np.ndarray, gamma: float = 2.0) -> np.ndarray:
    """
    Gamma-correct a linear (height, width, 3) image and quantize it to uint8.
    Values are clamped to [0, 0.999] after correction and scaled by 256.
    """
    if gamma <= 0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    linear_image = np.ascontiguousarray(linear_image, dtype=np.float64)
    output = np.zeros(linear_image.shape, dtype=np.uint8)
    _gamma_quantize(linear_image, output, float(gamma))
    return output


def save_png(path: str, linear_image: np.ndarray, gamma: float = 2.0) -> None:
    """Write a linear image to ``path`` as an 8-bit RGB PNG."""
    Image.fromarray(to_rgb8(linear_image, gamma)).save(path)
