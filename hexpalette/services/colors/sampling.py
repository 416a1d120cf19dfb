"""
Pixel buffer normalization and sampling.

Turns whatever the image loader hands over (packed ints, interleaved bytes,
component arrays) into an ``(H, W, 3)`` uint8 grid plus alpha, then applies
stride subsampling and the optional near-transparent filter. The caller's
buffer is never modified or retained.
"""

import math
from typing import Any, Optional, Tuple

import numpy as np
from loguru import logger

from .utils import RGB

EMPTY_RGB = np.zeros((0, 0, 3), dtype=np.uint8)
EMPTY_ALPHA = np.zeros((0, 0), dtype=np.uint8)


def _validate_dimensions(width: Any, height: Any) -> Tuple[int, int]:
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")
    return int(width), int(height)


def _as_array(pixels: Any) -> np.ndarray:
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        return np.frombuffer(pixels, dtype=np.uint8)
    arr = np.asarray(pixels)
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Pixel data must be integers, got dtype {arr.dtype}")
    return arr


def _check_component_range(arr: np.ndarray) -> None:
    if arr.dtype == np.uint8 or arr.size == 0:
        return
    lo, hi = int(arr.min()), int(arr.max())
    if lo < 0 or hi > 255:
        raise ValueError(f"Channel values must be in [0, 255], got range [{lo}, {hi}]")


def normalize_pixels(pixels: Any, width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Normalize a decoded pixel buffer to an RGB grid and an alpha grid.

    Accepted layouts:
        - ``(height, width, 3|4)`` component array
        - ``(width * height, 3|4)`` component array
        - ``(width * height,)`` packed integers (``0xRRGGBB``; any alpha byte is ignored)
        - ``(width * height * 3|4,)`` interleaved bytes, including ``bytes`` objects

    Args:
        pixels: Pixel data, or None for "no image"
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        Tuple of (rgb (H, W, 3) uint8, alpha (H, W) uint8). Both are empty for
        a None buffer or a zero-area image.

    Raises:
        ValueError: If dimensions are invalid or do not match the pixel count,
            or if channel values fall outside [0, 255]
    """
    width, height = _validate_dimensions(width, height)
    if pixels is None:
        return EMPTY_RGB, EMPTY_ALPHA

    arr = _as_array(pixels)
    count = width * height

    if count == 0:
        if arr.size:
            raise ValueError(f"Zero-area image ({width}×{height}) with {arr.size} values of pixel data")
        return EMPTY_RGB, EMPTY_ALPHA

    if arr.ndim == 1 and arr.shape[0] == count:
        # Packed integers; signed ARGB values mask correctly in int64
        packed = arr.astype(np.int64) & 0xFFFFFF
        rgb = np.stack([(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF], axis=-1)
        rgb = rgb.astype(np.uint8).reshape(height, width, 3)
        alpha = np.full((height, width), 255, dtype=np.uint8)
        return rgb, alpha

    if arr.ndim == 1 and arr.shape[0] in (count * 3, count * 4):
        arr = arr.reshape(count, arr.shape[0] // count)
    if arr.ndim == 2 and arr.shape[0] == count and arr.shape[1] in (3, 4):
        arr = arr.reshape(height, width, arr.shape[1])

    if arr.ndim != 3 or arr.shape[:2] != (height, width) or arr.shape[2] not in (3, 4):
        raise ValueError(
            f"Pixel buffer of shape {arr.shape} does not match a {width}×{height} RGB(A) image"
        )

    _check_component_range(arr)
    rgb = arr[:, :, :3].astype(np.uint8, copy=False)
    if arr.shape[2] == 4:
        alpha = arr[:, :, 3].astype(np.uint8, copy=False)
    else:
        alpha = np.full((height, width), 255, dtype=np.uint8)
    return rgb, alpha


def subsample_stride(width: int, height: int, threshold: int) -> int:
    """
    Smallest row/column stride that brings the sampled grid to at most
    ``threshold`` pixels. Returns 1 when no subsampling is needed.
    """
    count = width * height
    if count <= threshold:
        return 1
    stride = max(1, math.ceil(math.sqrt(count / threshold)))
    # Very elongated images need more than the square-root estimate
    while math.ceil(width / stride) * math.ceil(height / stride) > threshold:
        stride += 1
    return stride


def sample_pixels(pixels: Any, width: int, height: int,
                  subsample_threshold: int = 250000,
                  ignore_alpha: bool = True,
                  alpha_threshold: int = 128) -> Tuple[np.ndarray, int]:
    """
    Sample pixels for quantization.

    Args:
        pixels: Decoded pixel buffer (see normalize_pixels)
        width: Image width
        height: Image height
        subsample_threshold: Pixel count above which every k-th row/column is taken
        ignore_alpha: When False, pixels with alpha below alpha_threshold are dropped
        alpha_threshold: Alpha cut-off for near-transparent pixels

    Returns:
        Tuple of (samples (M, 3) uint8, stride)
    """
    rgb, alpha = normalize_pixels(pixels, width, height)
    h, w = alpha.shape

    stride = subsample_stride(w, h, subsample_threshold)
    if stride > 1:
        rgb = rgb[::stride, ::stride]
        alpha = alpha[::stride, ::stride]
        logger.debug(f"Subsampled {w}×{h} image with stride {stride} to {alpha.size} pixels")

    samples = rgb.reshape(-1, 3)
    if not ignore_alpha and samples.size:
        keep = alpha.reshape(-1) >= alpha_threshold
        dropped = int(samples.shape[0] - np.count_nonzero(keep))
        samples = samples[keep]
        if dropped:
            logger.debug(f"Alpha filter: dropped {dropped} near-transparent pixels")

    return samples, stride


def average_color(samples: np.ndarray) -> Optional[RGB]:
    """Per-channel integer mean of sampled pixels, or None when there are none."""
    if samples is None or len(samples) == 0:
        return None
    sums = samples.reshape(-1, 3).sum(axis=0, dtype=np.int64)
    n = samples.reshape(-1, 3).shape[0]
    return tuple(int(s) // n for s in sums)
