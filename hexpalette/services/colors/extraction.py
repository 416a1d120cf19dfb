"""
Palette extraction pipeline.

This module wires sampling, quantization, ranking and padding into the two
public entry points: ``extract_palette`` for the plain list of hex colors and
``extract_palette_report`` for the same result with diagnostics.
"""

from typing import Any, Dict, List, Optional

from hexpalette.config import config, Config
from hexpalette.utils.logging import get_logger
from ..observability import StageTimings, performance_monitor
from .padding import OUTCOME_RESERVE, pad_palette_with_outcome, select_seed
from .quantizer import quantize_samples
from .ranking import rank_swatches, sort_by_prominence
from .sampling import average_color, sample_pixels
from .utils import rgb_to_hex


def _resolve_options(n: Optional[int], max_colors: Optional[int], min_population_ratio: Optional[float],
                     subsample_threshold: Optional[int], ignore_alpha: Optional[bool],
                     alpha_threshold: Optional[int]) -> Dict[str, Any]:
    """Fill unset options from config and validate them."""
    options = {
        "n": config.PALETTE_SIZE if n is None else n,
        "max_colors": config.MAX_COLORS if max_colors is None else max_colors,
        "min_population_ratio": config.MIN_POPULATION_RATIO if min_population_ratio is None else min_population_ratio,
        "subsample_threshold": config.SUBSAMPLE_THRESHOLD if subsample_threshold is None else subsample_threshold,
        "ignore_alpha": config.IGNORE_ALPHA if ignore_alpha is None else ignore_alpha,
        "alpha_threshold": config.ALPHA_THRESHOLD if alpha_threshold is None else alpha_threshold,
    }

    checks = [
        ("n", Config.validate_palette_size),
        ("max_colors", Config.validate_max_colors),
        ("min_population_ratio", Config.validate_ratio),
        ("subsample_threshold", Config.validate_subsample_threshold),
        ("alpha_threshold", Config.validate_alpha_threshold),
    ]
    for name, validate in checks:
        if not validate(options[name]):
            get_logger().error("Rejected extraction option", extra={"option": name, "value": repr(options[name])})
            raise ValueError(f"Invalid {name}: {options[name]!r}")
    return options


def extract_palette_report(pixels: Any, width: int, height: int,
                           n: Optional[int] = None,
                           max_colors: Optional[int] = None,
                           min_population_ratio: Optional[float] = None,
                           subsample_threshold: Optional[int] = None,
                           ignore_alpha: Optional[bool] = None,
                           alpha_threshold: Optional[int] = None) -> Dict[str, Any]:
    """
    Extract a palette of exactly ``n`` unique hex colors, with diagnostics.

    Args:
        pixels: Decoded pixel buffer (see sampling.normalize_pixels); None means no image
        width: Image width in pixels
        height: Image height in pixels
        n: Palette size (default config.PALETTE_SIZE)
        max_colors: Quantizer cluster bound (default config.MAX_COLORS)
        min_population_ratio: Noise floor for clusters (default config.MIN_POPULATION_RATIO)
        subsample_threshold: Pixel count that triggers stride subsampling
        ignore_alpha: Whether alpha is ignored during clustering
        alpha_threshold: Alpha cut-off when alpha is not ignored

    Returns:
        Dict with "palette", "swatches", "average_color", "seed_color",
        "real_count", "synthesized_count", "padding" and "metadata"

    Raises:
        ValueError: If the buffer does not match the dimensions or an option is out of range
    """
    options = _resolve_options(n, max_colors, min_population_ratio,
                               subsample_threshold, ignore_alpha, alpha_threshold)
    get_logger().debug("Resolved extraction options", extra=options)
    n = options["n"]
    timings = StageTimings()

    # Stage 1: normalize and sample
    with performance_monitor("sampling", timings, width=width, height=height):
        samples, stride = sample_pixels(
            pixels, width, height,
            subsample_threshold=options["subsample_threshold"],
            ignore_alpha=options["ignore_alpha"],
            alpha_threshold=options["alpha_threshold"],
        )

    # Stage 2: quantize
    with performance_monitor("quantization", timings, sample_count=len(samples)):
        swatches = quantize_samples(
            samples,
            max_colors=options["max_colors"],
            min_population_ratio=options["min_population_ratio"],
        )

    # Stage 3: rank and deduplicate
    with performance_monitor("ranking", timings, swatch_count=len(swatches)):
        ranked = rank_swatches(swatches, n)

    # Stage 4: pad from the average color
    with performance_monitor("padding", timings, real_count=len(ranked)):
        average = average_color(samples)
        seed = select_seed(average, ranked, neutral=config.NEUTRAL_SEED)
        palette, outcome = pad_palette_with_outcome(
            ranked, seed, n, max_candidates=config.PADDING_MAX_CANDIDATES
        )

    if outcome == OUTCOME_RESERVE:
        get_logger().warning("Seed variants exhausted, palette padded from reserve colors",
                             extra={"seed": rgb_to_hex(seed), "real_count": len(ranked)})

    get_logger().palette_extracted(
        palette,
        real_count=len(ranked),
        synthesized_count=n - len(ranked),
        duration_ms=timings.total_ms,
    )

    total_population = sum(s.population for s in swatches)
    return {
        "palette": palette,
        "swatches": [
            {
                "hex": s.hex,
                "rgb": list(s.rgb),
                "population": s.population,
                "ratio": s.population / total_population if total_population else 0.0,
            }
            for s in sort_by_prominence(swatches)
        ],
        "average_color": rgb_to_hex(average) if average is not None else None,
        "seed_color": rgb_to_hex(seed),
        "real_count": len(ranked),
        "synthesized_count": n - len(ranked),
        "padding": outcome,
        "metadata": {
            "pixel_count": int(width) * int(height) if pixels is not None else 0,
            "sampled_pixel_count": int(len(samples)),
            "subsample_stride": stride,
            "cluster_count": len(swatches),
            "algorithm_params": options,
            "performance": timings.as_dict(),
        },
    }


def extract_palette(pixels: Any, width: int, height: int,
                    n: Optional[int] = None, **options: Any) -> List[str]:
    """
    Extract exactly ``n`` unique "#RRGGBB" colors ranked by prominence.

    Real colors come first in descending pixel population, followed by
    synthesized fillers when the image has fewer than ``n`` distinct
    dominant colors. Identical input always gives identical output.
    """
    return extract_palette_report(pixels, width, height, n=n, **options)["palette"]
