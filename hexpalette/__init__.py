"""
hexpalette

Deterministic fixed-size hex color palettes from decoded pixel buffers.
"""

from hexpalette.services.colors import extract_palette, extract_palette_report

__version__ = "1.0.0"

__all__ = ["extract_palette", "extract_palette_report", "__version__"]
