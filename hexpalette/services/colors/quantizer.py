"""
Median-cut color quantization.

Clusters sampled pixels into at most ``max_colors`` swatches over the 24-bit
RGB cube. When the image has no more distinct colors than ``max_colors`` each
distinct color is its own swatch, so flat-color images keep their exact
values. Otherwise boxes over the histogram are split, most populous first,
until the bound is reached. A box dominated by one color gives that color up
as its own box; any other box is cut at the population median of its
longest channel.

Every step iterates over sorted numpy arrays, never over hash order, so the
same pixels always produce the same swatches.
"""

from dataclasses import dataclass
from typing import Any, List, Tuple

import numpy as np
from loguru import logger

from .sampling import sample_pixels
from .utils import RGB, pack_rgb, rgb_to_hex

# Share of the box budget spent splitting by population alone
POPULATION_PHASE_PCT = 75


@dataclass(frozen=True)
class Swatch:
    """A representative color and the number of sampled pixels it stands for."""
    rgb: RGB
    population: int

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.rgb)

    @property
    def packed(self) -> int:
        return pack_rgb(self.rgb)


class _ColorBox:
    """A contiguous range ``[lower, upper)`` of the histogram color arrays."""

    def __init__(self, colors: np.ndarray, counts: np.ndarray, lower: int, upper: int, order: int):
        self.colors = colors
        self.counts = counts
        self.lower = lower
        self.upper = upper
        self.order = order
        self.fit()

    def fit(self) -> None:
        members = self.colors[self.lower:self.upper]
        self.mins = members.min(axis=0).astype(np.int64)
        self.maxs = members.max(axis=0).astype(np.int64)

    @property
    def volume(self) -> int:
        extent = self.maxs - self.mins + 1
        return int(extent[0] * extent[1] * extent[2])

    @property
    def population(self) -> int:
        return int(self.counts[self.lower:self.upper].sum())

    def can_split(self) -> bool:
        return self.upper - self.lower > 1

    def longest_dimension(self) -> int:
        # argmax returns the first maximum, giving R > G > B on ties
        return int(np.argmax(self.maxs - self.mins))

    def split(self, order: int) -> "_ColorBox":
        """
        Split the box in two and return the new upper half.

        A color holding at least half of the box population is carved out on
        its own so it keeps its exact value. Otherwise colors are sorted along
        the longest channel and cut next to the population median, on
        whichever side of the median color leaves the halves more balanced.
        """
        lo, hi = self.lower, self.upper
        counts = self.counts[lo:hi]
        total = int(counts.sum())

        top = int(np.argmax(counts))
        if 2 * int(counts[top]) >= total:
            # Move the dominant color to the end of the range
            idx = np.concatenate([np.arange(top), np.arange(top + 1, hi - lo), [top]])
            self._reorder(idx)
            cut = hi - lo - 1
        else:
            dim = self.longest_dimension()
            members = self.colors[lo:hi]
            # Sort by the split channel, remaining channels as tie-breakers
            others = [c for c in range(3) if c != dim]
            self._reorder(np.lexsort((members[:, others[1]], members[:, others[0]], members[:, dim])))
            cut = self._median_cut_position(np.cumsum(self.counts[lo:hi]))

        upper_box = _ColorBox(self.colors, self.counts, lo + cut, hi, order)
        self.upper = lo + cut
        self.fit()
        return upper_box

    def _reorder(self, idx: np.ndarray) -> None:
        lo, hi = self.lower, self.upper
        self.colors[lo:hi] = self.colors[lo:hi][idx]
        self.counts[lo:hi] = self.counts[lo:hi][idx]

    @staticmethod
    def _median_cut_position(cumulative: np.ndarray) -> int:
        """Number of colors in the lower half; both halves keep at least one color."""
        total = int(cumulative[-1])
        median = int(np.searchsorted(cumulative, total / 2, side="left"))
        candidates = []
        if median <= len(cumulative) - 2:
            # Median color goes to the lower half
            candidates.append((abs(2 * int(cumulative[median]) - total), median + 1))
        if median >= 1:
            # Median color goes to the upper half
            candidates.append((abs(total - 2 * int(cumulative[median - 1])), median))
        return min(candidates)[1]

    def average(self) -> RGB:
        """Population-weighted mean color, rounded half up."""
        members = self.colors[self.lower:self.upper].astype(np.int64)
        weights = self.counts[self.lower:self.upper].astype(np.int64)
        total = int(weights.sum())
        sums = (members * weights[:, None]).sum(axis=0)
        return tuple(int((2 * int(s) + total) // (2 * total)) for s in sums)


def build_histogram(samples: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Count distinct colors.

    Returns:
        Tuple of (colors (K, 3) uint8 sorted by packed value, counts (K,) int64)
    """
    if len(samples) == 0:
        return np.zeros((0, 3), dtype=np.uint8), np.zeros(0, dtype=np.int64)
    s = samples.reshape(-1, 3).astype(np.uint32)
    packed = (s[:, 0] << 16) | (s[:, 1] << 8) | s[:, 2]
    unique, counts = np.unique(packed, return_counts=True)
    colors = np.stack([(unique >> 16) & 0xFF, (unique >> 8) & 0xFF, unique & 0xFF], axis=-1)
    return colors.astype(np.uint8), counts.astype(np.int64)


def _population_key(box: _ColorBox) -> Tuple[int, int]:
    return -box.population, box.order


def _weighted_volume_key(box: _ColorBox) -> Tuple[int, int]:
    return -box.population * box.volume, box.order


def median_cut(colors: np.ndarray, counts: np.ndarray, max_colors: int) -> List[Swatch]:
    """
    Reduce a histogram to at most ``max_colors`` swatches.

    Boxes are first split in order of population, so the bulk of the image
    is resolved before sparse outliers, and then in order of population ×
    volume for the last quarter of the budget.

    Args:
        colors: Distinct colors (K, 3)
        counts: Pixel count per color (K,)
        max_colors: Upper bound on the number of swatches

    Returns:
        Swatches whose populations sum to ``counts.sum()``
    """
    if len(colors) == 0:
        return []

    if len(colors) <= max_colors:
        return [Swatch(tuple(int(c) for c in color), int(n)) for color, n in zip(colors, counts)]

    # Work on copies; boxes reorder ranges in place
    colors = colors.astype(np.int64)
    counts = counts.copy()
    boxes = [_ColorBox(colors, counts, 0, len(colors), order=0)]
    population_phase = max(1, (max_colors * POPULATION_PHASE_PCT) // 100)

    while len(boxes) < max_colors:
        splittable = [b for b in boxes if b.can_split()]
        if not splittable:
            break
        key = _population_key if len(boxes) < population_phase else _weighted_volume_key
        # Ties go to the earliest created box
        target = min(splittable, key=key)
        boxes.append(target.split(order=len(boxes)))

    logger.debug(f"Median cut: {len(colors)} distinct colors -> {len(boxes)} boxes")
    return [Swatch(box.average(), box.population) for box in boxes]


def filter_min_population(swatches: List[Swatch], total: int, min_population_ratio: float) -> List[Swatch]:
    """Drop swatches holding less than ``min_population_ratio`` of the pixels."""
    if min_population_ratio <= 0 or total <= 0:
        return list(swatches)
    min_pixels = total * min_population_ratio
    kept = [s for s in swatches if s.population >= min_pixels]
    if len(kept) < len(swatches):
        logger.debug(f"Population filter: dropped {len(swatches) - len(kept)} swatches below {min_pixels:.1f} px")
    return kept


def quantize_samples(samples: np.ndarray, max_colors: int = 32,
                     min_population_ratio: float = 0.001) -> List[Swatch]:
    """
    Quantize already-sampled pixels into swatches ordered by packed RGB.

    Args:
        samples: Pixels (M, 3) uint8
        max_colors: Upper bound on the number of clusters
        min_population_ratio: Noise floor as a fraction of the sample count

    Returns:
        List of Swatch, deterministic for identical input
    """
    if max_colors < 1:
        raise ValueError(f"max_colors must be positive, got {max_colors}")

    colors, counts = build_histogram(samples)
    swatches = median_cut(colors, counts, max_colors)
    swatches = filter_min_population(swatches, int(counts.sum()), min_population_ratio)
    swatches.sort(key=lambda s: s.packed)
    return swatches


def quantize(pixels: Any, width: int, height: int,
             max_colors: int = 32,
             min_population_ratio: float = 0.001,
             subsample_threshold: int = 250000,
             ignore_alpha: bool = True,
             alpha_threshold: int = 128) -> List[Swatch]:
    """
    Cluster a decoded pixel buffer into representative swatches.

    Zero-area images and None buffers yield an empty list.

    Raises:
        ValueError: If the buffer does not match width × height
    """
    samples, _ = sample_pixels(
        pixels, width, height,
        subsample_threshold=subsample_threshold,
        ignore_alpha=ignore_alpha,
        alpha_threshold=alpha_threshold,
    )
    return quantize_samples(samples, max_colors=max_colors, min_population_ratio=min_population_ratio)
