"""
hexpalette Colors Module

Provides sampling, median-cut quantization, ranking and padding for
fixed-size hex palettes.
"""

from .extraction import extract_palette, extract_palette_report
from .padding import pad_palette, select_seed
from .quantizer import Swatch, quantize
from .ranking import rank_swatches
from .utils import hex_to_rgb, rgb_to_hex

__all__ = [
    'Swatch',
    'extract_palette',
    'extract_palette_report',
    'hex_to_rgb',
    'pad_palette',
    'quantize',
    'rank_swatches',
    'rgb_to_hex',
    'select_seed',
]
