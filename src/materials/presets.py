# materials/presets.py
from core.vector import Color
from materials.metal import Metal
from materials.lambertian import Lambertian
from materials.dielectric import Dielectric
from materials.diffuse_light import DiffuseLight
from materials.textures import CheckerTexture, NoiseTexture


class MetalPresets:
    """Predefined metal materials with realistic properties."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Color(1.0, 0.78, 0.34), fuzz=0.1)

    @staticmethod
    def silver() -> Metal:
        return Metal(Color(0.95, 0.93, 0.88), fuzz=0.05)

    @staticmethod
    def copper() -> Metal:
        return Metal(Color(0.95, 0.64, 0.54), fuzz=0.1)

    @staticmethod
    def chrome() -> Metal:
        return Metal(Color(0.9, 0.9, 0.9), fuzz=0.0)

    @staticmethod
    def brushed_metal() -> Metal:
        return Metal(Color(0.8, 0.8, 0.9), fuzz=1.0)


class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)


class LightPresets:
    """Predefined light sources. Intensities above 1 are expected: lights are not clamped."""

    @staticmethod
    def white(intensity: float = 4.0) -> DiffuseLight:
        return DiffuseLight(Color(1.0, 1.0, 1.0) * intensity)

    @staticmethod
    def ceiling(intensity: float = 15.0) -> DiffuseLight:
        return DiffuseLight(Color(1.0, 1.0, 1.0) * intensity)

    @staticmethod
    def warm_light(intensity: float = 7.0) -> DiffuseLight:
        return DiffuseLight(Color(1.0, 0.95, 0.9) * intensity)


class ColorPresets:
    """Common color presets for materials."""

    RED = Color(0.65, 0.05, 0.05)
    GREEN = Color(0.12, 0.45, 0.15)
    WHITE = Color(0.73, 0.73, 0.73)
    GROUND = Color(0.48, 0.83, 0.53)
    CHECKER_DARK = Color(0.2, 0.3, 0.1)
    CHECKER_LIGHT = Color(0.9, 0.9, 0.9)

    @staticmethod
    def matte(color: Color) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)


class TexturePresets:
    """Predefined texture presets."""

    @staticmethod
    def checkerboard(even: Color = None, odd: Color = None, frequency: float = 10.0) -> CheckerTexture:
        """Create a checkerboard texture with default or custom colors."""
        if even is None:
            even = ColorPresets.CHECKER_DARK
        if odd is None:
            odd = ColorPresets.CHECKER_LIGHT
        return CheckerTexture(even, odd, frequency)

    @staticmethod
    def marble(rng, scale: float = 4.0) -> NoiseTexture:
        """Create a marble texture; the noise tables are drawn from ``rng``."""
        return NoiseTexture(scale, rng)
