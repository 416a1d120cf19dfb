"""
Unit tests for shared color math.
"""

import numpy as np
import pytest

from hexpalette.services.colors.utils import (
    rgb_to_hex, hex_to_rgb, pack_rgb, is_hex_color, scale_rgb
)


class TestRgbToHex:
    """Test RGB to hex conversion"""

    def test_rgb_to_hex_basic_colors(self):
        """Test conversion of basic RGB colors to hex"""
        assert rgb_to_hex((255, 0, 0)) == "#FF0000"
        assert rgb_to_hex((0, 255, 0)) == "#00FF00"
        assert rgb_to_hex((0, 0, 255)) == "#0000FF"
        assert rgb_to_hex((0, 0, 0)) == "#000000"
        assert rgb_to_hex((255, 255, 255)) == "#FFFFFF"

    def test_rgb_to_hex_numpy_input(self):
        """Test uint8 arrays are accepted"""
        assert rgb_to_hex(np.array([31, 78, 121], dtype=np.uint8)) == "#1F4E79"
        assert rgb_to_hex(np.array([10, 11, 12])) == "#0A0B0C"

    def test_rgb_to_hex_packed_masks_alpha(self):
        """Test packed ARGB ints drop their alpha byte"""
        assert rgb_to_hex(0xFFFF0000) == "#FF0000"
        assert rgb_to_hex(0x80123456) == "#123456"
        assert rgb_to_hex(np.int64(0xABCDEF)) == "#ABCDEF"

    def test_rgb_to_hex_uppercase(self):
        """Test hex digits are uppercase"""
        assert rgb_to_hex((171, 205, 239)) == "#ABCDEF"


class TestHexToRgb:
    """Test hex parsing"""

    def test_hex_to_rgb_basic(self):
        """Test parsing of valid strings"""
        assert hex_to_rgb("#FF0000") == (255, 0, 0)
        assert hex_to_rgb("#1f4e79") == (31, 78, 121)

    @pytest.mark.parametrize("bad", ["FF0000", "#FFF", "#GG0000", "#FF00001", "", None])
    def test_hex_to_rgb_invalid(self, bad):
        """Test malformed strings are rejected"""
        with pytest.raises(ValueError):
            hex_to_rgb(bad)

    def test_round_trip(self):
        """Test hex_to_rgb inverts rgb_to_hex"""
        rng = np.random.default_rng(7)
        for color in rng.integers(0, 256, size=(50, 3)):
            rgb = tuple(int(c) for c in color)
            assert hex_to_rgb(rgb_to_hex(rgb)) == rgb


class TestPacking:
    """Test 24-bit packing helpers"""

    def test_pack(self):
        assert pack_rgb((0x12, 0x34, 0x56)) == 0x123456
        assert pack_rgb((0x12, 0x34, 0x56, 0xFF)) == 0x123456

    def test_is_hex_color(self):
        assert is_hex_color("#A1B2C3")
        assert not is_hex_color("#a1b2c3")
        assert not is_hex_color("A1B2C3")


class TestScaleRgb:
    """Test brightness scaling"""

    def test_scale_rounds_half_up(self):
        """Test 255 × 0.85 = 216.75 rounds to 217"""
        assert scale_rgb((255, 0, 0), 85) == (217, 0, 0)
        assert scale_rgb((1, 3, 5), 50) == (1, 2, 3)

    def test_scale_clamps(self):
        """Test channels saturate at 255"""
        assert scale_rgb((200, 100, 0), 145) == (255, 145, 0)

    def test_identity(self):
        assert scale_rgb((12, 34, 56), 100) == (12, 34, 56)
