# materials/texture_loader.py
import os
from typing import Tuple
from PIL import Image, UnidentifiedImageError
import numpy as np
from core.errors import TextureLoadError
from materials.textures import ImageTexture


def decode_image(image_path: str) -> Tuple[np.ndarray, int, int]:
    """
    Decode an image file into an RGB pixel buffer.

    Args:
        image_path: Path to the image file

    Returns:
        (pixels, width, height) with pixels a (height, width, 3) uint8 array,
        row 0 at the top of the image.

    Raises:
        TextureLoadError: If the file is missing or cannot be decoded
    """
    if not os.path.exists(image_path):
        raise TextureLoadError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            # Convert to RGB if necessary
            if img.mode != 'RGB':
                img = img.convert('RGB')
            pixels = np.array(img, dtype=np.uint8)
            return pixels, img.width, img.height
    except (UnidentifiedImageError, OSError) as e:
        raise TextureLoadError(f"Error loading texture {image_path}: {e}") from e


def load_texture(image_path: str) -> ImageTexture:
    """
    Load an image file as a texture, failing loudly instead of falling back
    to the debug color.

    Raises:
        TextureLoadError: If the image cannot be decoded
    """
    pixels, width, height = decode_image(image_path)
    return ImageTexture(image_path, decoder=lambda _path: (pixels, width, height))


def create_image_material(image_path: str, material_class, **material_params):
    """
    Create a material with an image texture.

    Args:
        image_path: Path to the image file
        material_class: Material class to instantiate (e.g., Lambertian, Metal)
        **material_params: Additional parameters for the material (e.g., fuzz for Metal)

    Returns:
        Material instance with the image texture
    """
    texture = load_texture(image_path)
    return material_class(texture, **material_params)
