"""
Shared color math for the palette pipeline.

Colors travel as ``(r, g, b)`` int tuples internally and as ``"#RRGGBB"``
uppercase strings at the boundary.
"""

import re
from typing import Sequence, Tuple, Union

import numpy as np

RGB = Tuple[int, int, int]

HEX_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


def pack_rgb(rgb: Sequence[int]) -> int:
    """Pack an (r, g, b) triple into a 24-bit integer."""
    r, g, b = (int(c) for c in rgb[:3])
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def rgb_to_hex(rgb: Union[Sequence[int], np.ndarray, int]) -> str:
    """Convert an RGB triple (or packed int) to an uppercase hex color string."""
    if isinstance(rgb, (int, np.integer)):
        value = int(rgb) & 0xFFFFFF
    else:
        value = pack_rgb(rgb)
    return f"#{value:06X}"


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert hex color string to RGB tuple.

    Raises:
        ValueError: If the string is not of the form #RRGGBB
    """
    if not isinstance(hex_color, str) or not HEX_PATTERN.match(hex_color):
        raise ValueError(f"Invalid hex color format: {hex_color!r}")
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def is_hex_color(value: str) -> bool:
    """True for canonical uppercase #RRGGBB strings."""
    return isinstance(value, str) and bool(HEX_PATTERN.match(value)) and value == value.upper()


def clamp_channel(value: int) -> int:
    return max(0, min(255, int(value)))


def scale_rgb(rgb: Sequence[int], factor_pct: int) -> RGB:
    """Scale each channel by ``factor_pct / 100``, rounding half up and clamping.

    Integer arithmetic keeps results identical across platforms.
    """
    return tuple(clamp_channel((int(c) * factor_pct + 50) // 100) for c in rgb[:3])
