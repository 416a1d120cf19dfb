"""
Swatch ranking and deduplication.
"""

from typing import Iterable, List

from .quantizer import Swatch


def sort_by_prominence(swatches: Iterable[Swatch]) -> List[Swatch]:
    """Population descending; equal populations by packed RGB ascending."""
    return sorted(swatches, key=lambda s: (-s.population, s.packed))


def rank_swatches(swatches: Iterable[Swatch], n: int) -> List[str]:
    """
    Turn swatches into at most ``n`` unique hex colors, most prominent first.

    Args:
        swatches: Quantizer output, in any order
        n: Maximum number of colors to keep

    Returns:
        Unique "#RRGGBB" strings; padding is left to the caller

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        raise ValueError(f"Palette size must be non-negative, got {n}")

    ranked: List[str] = []
    seen = set()
    for swatch in sort_by_prominence(swatches):
        if len(ranked) >= n:
            break
        color_hex = swatch.hex
        if color_hex in seen:
            continue
        seen.add(color_hex)
        ranked.append(color_hex)
    return ranked
