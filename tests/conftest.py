"""
Test configuration and fixtures for hexpalette tests.
"""
import re

import numpy as np
import pytest

HEX_RE = re.compile(r"^#[0-9A-F]{6}$")

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
YELLOW = (255, 255, 0)
CYAN = (0, 255, 255)
MAGENTA = (255, 0, 255)


def make_strips(colors, widths, height=100) -> np.ndarray:
    """Build an (H, W, 3) image of vertical strips with the given widths."""
    img = np.zeros((height, sum(widths), 3), dtype=np.uint8)
    x = 0
    for color, width in zip(colors, widths):
        img[:, x:x + width] = color
        x += width
    return img


def assert_valid_palette(palette, n=5):
    """Palette has n unique uppercase #RRGGBB entries."""
    assert len(palette) == n
    assert len(set(palette)) == n
    for color in palette:
        assert HEX_RE.match(color), f"Bad hex entry {color}"


@pytest.fixture
def solid_red_image():
    """10×10 solid red image"""
    return np.full((10, 10, 3), RED, dtype=np.uint8)


@pytest.fixture
def five_strip_image():
    """100×100 image with five equal strips"""
    return make_strips([RED, GREEN, BLUE, YELLOW, CYAN], [20] * 5)


@pytest.fixture
def three_region_image():
    """100×100 image: 50% blue, 30% red, 20% green"""
    return make_strips([BLUE, RED, GREEN], [50, 30, 20])


@pytest.fixture
def gradient_image():
    """64×64 image with 4096 distinct colors"""
    ys, xs = np.mgrid[0:64, 0:64]
    img = np.zeros((64, 64, 3), dtype=np.uint8)
    img[..., 0] = xs * 4
    img[..., 1] = ys * 4
    img[..., 2] = (xs + ys) * 2
    return img


@pytest.fixture
def noisy_strip_image():
    """200×100 strips of 60/50/40/30/20 columns with 100 random noise pixels"""
    img = make_strips([RED, GREEN, BLUE, YELLOW, CYAN], [60, 50, 40, 30, 20])
    rng = np.random.default_rng(42)
    flat = img.reshape(-1, 3)
    positions = rng.choice(len(flat), size=100, replace=False)
    flat[positions] = rng.integers(0, 256, size=(100, 3), dtype=np.uint8)
    return img
