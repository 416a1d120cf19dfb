"""
Tests for the Pillow imaging adapter.
"""

import numpy as np
import pytest
from PIL import Image

from hexpalette.services.imaging import (
    image_to_pixels, extract_palette_from_image, extract_palette_report_from_image
)
from conftest import assert_valid_palette, make_strips


class TestImageToPixels:
    """Test conversion of decoded images"""

    def test_rgb_image(self):
        img = Image.new("RGB", (6, 4), (10, 20, 30))
        pixels, width, height = image_to_pixels(img)
        assert (width, height) == (6, 4)
        assert pixels.shape == (4, 6, 4)
        assert pixels[0, 0].tolist() == [10, 20, 30, 255]

    def test_grayscale_image(self):
        """Test non-RGB modes are converted"""
        img = Image.new("L", (3, 3), 128)
        pixels, _, _ = image_to_pixels(img)
        assert pixels[1, 1].tolist() == [128, 128, 128, 255]

    def test_not_an_image(self):
        with pytest.raises(ValueError):
            image_to_pixels(np.zeros((2, 2, 3), dtype=np.uint8))


class TestExtractFromImage:
    """Test the pipeline through Pillow images"""

    def test_solid_image(self):
        img = Image.new("RGB", (10, 10), (255, 0, 0))
        palette = extract_palette_from_image(img)
        assert palette == ["#FF0000", "#D90000", "#B30000", "#8C0000", "#730000"]

    def test_strips_from_array(self):
        """Test an image built from a numpy array ranks by area"""
        arr = make_strips([(0, 0, 255), (255, 0, 0), (0, 255, 0)], [50, 30, 20])
        img = Image.fromarray(arr)
        palette = extract_palette_from_image(img)
        assert_valid_palette(palette)
        assert palette[:3] == ["#0000FF", "#FF0000", "#00FF00"]

    def test_transparent_pixels_filtered(self):
        img = Image.new("RGBA", (10, 10), (0, 255, 0, 0))
        img.paste((255, 0, 0, 255), (0, 0, 4, 10))
        report = extract_palette_report_from_image(img, ignore_alpha=False)
        assert report["palette"][0] == "#FF0000"
        assert report["real_count"] == 1

    def test_palette_size(self):
        img = Image.new("RGB", (4, 4), (1, 2, 3))
        assert_valid_palette(extract_palette_from_image(img, n=7), 7)
