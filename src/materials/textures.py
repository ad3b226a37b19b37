# materials/textures.py
import logging
import math
from typing import Callable, Optional, Tuple, Union
import numpy as np
from core.errors import TextureLoadError
from core.utils import clamp
from core.vector import Color, Point3, Vector3
from materials.perlin import Perlin

logger = logging.getLogger(__name__)

# Returned by ImageTexture when its file could not be decoded.
MISSING_TEXTURE_COLOR = Color(0.0, 1.0, 1.0)


class Texture:
    """Base class for all textures: a color as a function of (u, v) and the hit point."""
    def value(self, u: float, v: float, p: Point3) -> Color:
        raise NotImplementedError("value() must be implemented by texture subclasses.")


class SolidColor(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def value(self, u: float, v: float, p: Point3) -> Color:
        return self.color


def as_texture(albedo: Union[Vector3, Texture]) -> Texture:
    """Wrap a plain color in a SolidColor; pass textures through."""
    if isinstance(albedo, Texture):
        return albedo
    return SolidColor(albedo)


class CheckerTexture(Texture):
    """
    Solid 3D checker: the sign of sin(f*x) * sin(f*y) * sin(f*z) picks
    between the even and odd textures, so the pattern does not depend on
    the surface parametrization.
    """
    def __init__(self, even: Union[Vector3, Texture], odd: Union[Vector3, Texture],
                 frequency: float = 10.0):
        self.even = as_texture(even)
        self.odd = as_texture(odd)
        self.frequency = frequency

    def value(self, u: float, v: float, p: Point3) -> Color:
        f = self.frequency
        sines = math.sin(f * p.x) * math.sin(f * p.y) * math.sin(f * p.z)
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)


class NoiseTexture(Texture):
    """Grey marble: a sine along z whose phase is perturbed by Perlin turbulence."""
    def __init__(self, scale: float, rng):
        self.scale = scale
        self.noise = Perlin(rng)

    def value(self, u: float, v: float, p: Point3) -> Color:
        g = 0.5 * (1.0 + math.sin(self.scale * p.z + 10.0 * self.noise.turb(p)))
        return Color(g, g, g)


class ImageTexture(Texture):
    """
    A texture from an image file, indexed by the (u, v) surface coordinates.

    The decoder is the image collaborator ``decode(path) -> (pixels, width, height)``
    with pixels an (height, width, 3) uint8 array. If decoding fails the
    texture logs the error and renders as solid cyan instead of aborting
    the scene.
    """
    def __init__(self, image_path: str,
                 decoder: Optional[Callable[[str], Tuple[np.ndarray, int, int]]] = None):
        if decoder is None:
            from materials.texture_loader import decode_image
            decoder = decode_image
        self.image_path = image_path
        try:
            pixels, self.width, self.height = decoder(image_path)
            self.data = np.asarray(pixels, dtype=np.float64) / 255.0  # Normalize to [0,1]
        except TextureLoadError as e:
            logger.error("Could not load texture image file %r: %s", image_path, e)
            self.data = None
            self.width = self.height = 0

    @property
    def loaded(self) -> bool:
        return self.data is not None

    def value(self, u: float, v: float, p: Point3) -> Color:
        if self.data is None:
            return MISSING_TEXTURE_COLOR

        u = clamp(u, 0.0, 1.0)
        v = 1.0 - clamp(v, 0.0, 1.0)  # Flip V to image coordinates

        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        r, g, b = self.data[y, x]
        return Color(float(r), float(g), float(b))
