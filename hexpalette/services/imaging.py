"""
hexpalette Imaging Adapter
Bridges already-decoded Pillow images to the pixel-buffer pipeline.

Decoding files is left to the caller (``Image.open(...)``); this module only
converts an in-memory image into the buffer layout the pipeline expects.
"""
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from PIL import Image

from hexpalette.services.colors.extraction import extract_palette_report


def image_to_pixels(image: Image.Image) -> Tuple[np.ndarray, int, int]:
    """
    Convert a Pillow image to an RGBA pixel grid.

    Args:
        image: Decoded Pillow image in any mode

    Returns:
        Tuple of (pixels (H, W, 4) uint8, width, height)

    Raises:
        ValueError: If the argument is not a Pillow image
    """
    if not isinstance(image, Image.Image):
        raise ValueError(f"Expected a PIL.Image.Image, got {type(image).__name__}")

    width, height = image.size
    if width == 0 or height == 0:
        return np.zeros((0, 0, 4), dtype=np.uint8), width, height

    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    pixels = np.asarray(rgba, dtype=np.uint8).reshape(height, width, 4)
    return pixels, width, height


def extract_palette_report_from_image(image: Image.Image, n: Optional[int] = None,
                                      **options: Any) -> Dict[str, Any]:
    """Run the full pipeline on a Pillow image and return the report."""
    pixels, width, height = image_to_pixels(image)
    return extract_palette_report(pixels, width, height, n=n, **options)


def extract_palette_from_image(image: Image.Image, n: Optional[int] = None,
                               **options: Any) -> List[str]:
    """Extract exactly ``n`` unique hex colors from a Pillow image."""
    return extract_palette_report_from_image(image, n=n, **options)["palette"]
