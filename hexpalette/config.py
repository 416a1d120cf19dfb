"""
hexpalette Configuration
Manages environment variables and defaults for the palette extraction pipeline.
"""
import os


class Config:
    """Configuration class for palette extraction."""

    # Palette shape
    PALETTE_SIZE: int = int(os.environ.get("HEXPALETTE_PALETTE_SIZE", "5"))
    MAX_COLORS: int = int(os.environ.get("HEXPALETTE_MAX_COLORS", "32"))

    # Noise filtering: clusters below this share of sampled pixels are dropped
    MIN_POPULATION_RATIO: float = float(os.environ.get("HEXPALETTE_MIN_POPULATION_RATIO", "0.001"))

    # Large images are stride-subsampled above this many pixels
    SUBSAMPLE_THRESHOLD: int = int(os.environ.get("HEXPALETTE_SUBSAMPLE_THRESHOLD", "250000"))

    # Alpha handling
    IGNORE_ALPHA: bool = bool(int(os.environ.get("HEXPALETTE_IGNORE_ALPHA", "1")))
    ALPHA_THRESHOLD: int = int(os.environ.get("HEXPALETTE_ALPHA_THRESHOLD", "128"))

    # Padding
    PADDING_MAX_CANDIDATES: int = int(os.environ.get("HEXPALETTE_PADDING_MAX_CANDIDATES", "64"))
    NEUTRAL_SEED: str = os.environ.get("HEXPALETTE_NEUTRAL_SEED", "#888888")

    # Logging
    LOG_LEVEL: str = os.environ.get("HEXPALETTE_LOG_LEVEL", "INFO")

    @classmethod
    def validate_palette_size(cls, n: int) -> bool:
        """Validate requested palette size."""
        return isinstance(n, int) and 1 <= n <= 64

    @classmethod
    def validate_max_colors(cls, max_colors: int) -> bool:
        """Validate quantizer cluster bound."""
        return isinstance(max_colors, int) and 2 <= max_colors <= 256

    @classmethod
    def validate_ratio(cls, ratio: float) -> bool:
        """Validate minimum population ratio."""
        return 0.0 <= ratio < 1.0

    @classmethod
    def validate_alpha_threshold(cls, threshold: int) -> bool:
        """Validate alpha cut-off for near-transparent pixels."""
        return isinstance(threshold, int) and 0 <= threshold <= 255

    @classmethod
    def validate_subsample_threshold(cls, threshold: int) -> bool:
        """Validate subsampling pixel threshold."""
        return isinstance(threshold, int) and threshold >= 1


# Global config instance
config = Config()
