"""
Palette padding.

When an image has fewer distinct dominant colors than the palette needs, the
missing entries are synthesized from a seed color: first by brightness
scaling through a fixed factor sequence, then through an extended sequence,
and finally from a reserve list of canonical colors. The reserve walk always
finds a free color within ``n + 8`` steps, so padding terminates for every
seed.
"""

from itertools import count
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from loguru import logger

from .utils import RGB, hex_to_rgb, is_hex_color, rgb_to_hex, scale_rgb

# Brightness factors in hundredths
BASE_FACTORS = (100, 85, 115, 70, 130, 55, 145)
EXTENSION_STEP = 10

RESERVE_COLORS = (
    "#000000",  # Black
    "#FFFFFF",  # White
    "#FF0000",  # Red
    "#00FF00",  # Green
    "#0000FF",  # Blue
    "#FFFF00",  # Yellow
    "#00FFFF",  # Cyan
    "#FF00FF",  # Magenta
)

NEUTRAL_GRAY: RGB = (0x88, 0x88, 0x88)

OUTCOME_NONE = "none"
OUTCOME_VARIANTS = "variants"
OUTCOME_RESERVE = "reserve"


def select_seed(average: Optional[Sequence[int]], existing: Sequence[str],
                neutral: Union[str, Sequence[int]] = NEUTRAL_GRAY) -> RGB:
    """
    Pick the synthesis seed: image average, else the most prominent existing
    color, else neutral gray.
    """
    if average is not None:
        return tuple(int(c) for c in average[:3])
    if existing:
        return hex_to_rgb(existing[0])
    if isinstance(neutral, str):
        return hex_to_rgb(neutral)
    return tuple(int(c) for c in neutral[:3])


def brightness_factors(max_candidates: int) -> Iterator[int]:
    """
    Yield up to ``max_candidates`` brightness factors (hundredths).

    The fixed sequence comes first; after it the sequence alternates a darker
    factor (while still positive) and a brighter one.
    """
    emitted = 0
    for factor in BASE_FACTORS:
        if emitted >= max_candidates:
            return
        yield factor
        emitted += 1

    darker, brighter = BASE_FACTORS[-2], BASE_FACTORS[-1]
    while emitted < max_candidates:
        darker -= EXTENSION_STEP
        brighter += EXTENSION_STEP
        if darker > 0:
            yield darker
            emitted += 1
            if emitted >= max_candidates:
                return
        yield brighter
        emitted += 1


def reserve_colors() -> Iterator[str]:
    """Canonical colors, then #000001, #000002, ..."""
    yield from RESERVE_COLORS
    for i in count(1):
        yield rgb_to_hex(i)


def _check_existing(existing: Sequence[str], n: int) -> None:
    if n < 0:
        raise ValueError(f"Palette size must be non-negative, got {n}")
    if len(existing) > n:
        raise ValueError(f"Cannot pad {len(existing)} colors down to {n}")
    for color_hex in existing:
        if not is_hex_color(color_hex):
            raise ValueError(f"Invalid palette entry: {color_hex!r}")
    if len(set(existing)) != len(existing):
        raise ValueError(f"Palette entries must be unique: {list(existing)}")


def pad_palette_with_outcome(existing: Sequence[str], seed: Union[str, Sequence[int]], n: int,
                             max_candidates: int = 64) -> Tuple[List[str], str]:
    """
    Extend ``existing`` to exactly ``n`` unique colors.

    Args:
        existing: Unique uppercase hex colors, most prominent first
        seed: Seed color as RGB triple or hex string
        n: Target palette size
        max_candidates: Cap on brightness variants tried before the reserve

    Returns:
        Tuple of (palette, outcome) where outcome is "none", "variants" or "reserve"

    Raises:
        ValueError: If existing is longer than n, has duplicates or invalid entries
    """
    _check_existing(existing, n)
    palette = list(existing)
    if len(palette) == n:
        return palette, OUTCOME_NONE

    seed_rgb = hex_to_rgb(seed) if isinstance(seed, str) else tuple(int(c) for c in seed[:3])
    present = set(palette)

    for factor in brightness_factors(max_candidates):
        candidate = rgb_to_hex(scale_rgb(seed_rgb, factor))
        if candidate in present:
            continue
        palette.append(candidate)
        present.add(candidate)
        if len(palette) == n:
            logger.debug(f"Padded palette from seed {rgb_to_hex(seed_rgb)} with brightness variants")
            return palette, OUTCOME_VARIANTS

    logger.debug(f"Seed {rgb_to_hex(seed_rgb)} exhausted after {max_candidates} variants; using reserve colors")
    for candidate in reserve_colors():
        if candidate in present:
            continue
        palette.append(candidate)
        present.add(candidate)
        if len(palette) == n:
            break
    return palette, OUTCOME_RESERVE


def pad_palette(existing: Sequence[str], seed: Union[str, Sequence[int]], n: int,
                max_candidates: int = 64) -> List[str]:
    """Extend ``existing`` to exactly ``n`` unique colors (see pad_palette_with_outcome)."""
    palette, _ = pad_palette_with_outcome(existing, seed, n, max_candidates=max_candidates)
    return palette
