# core/errors.py
"""Exceptions raised while building a scene.

Nothing here is raised from inside the per-ray path; a scene that was
built successfully renders without raising.
"""


class RenderError(Exception):
    """Base class for scene and renderer construction failures."""


class BVHConstructionError(RenderError, ValueError):
    """An object handed to the BVH builder has no bounding box, or the span is empty."""


class TextureLoadError(RenderError, OSError):
    """An image file could not be decoded into a texture."""
