"""Configuration settings for gifascii."""

import os
from dataclasses import dataclass
from typing import Any

CACHE_STRATEGIES = ("precomputed", "on_demand")


@dataclass
class ConverterConfig:
    """Configuration for the GIF to ASCII conversion pipeline."""

    # Inclusive range of output widths (characters per row) that can be cached
    MIN_WIDTH: int = 20
    MAX_WIDTH: int = 250

    # Width preferred for the grayscale preview
    PREVIEW_WIDTH: int = 250

    # Character cells are roughly twice as tall as wide
    ROW_SCALE: float = 0.5

    # Pixels with alpha below this are treated as fully transparent
    ALPHA_THRESHOLD: int = 128

    # Contrast values within this distance of 1.0 skip the contrast step
    CONTRAST_EPSILON: float = 0.01

    # "precomputed" builds every width at load time,
    # "on_demand" resizes the first time a width is requested.
    # Override with: GIFASCII_CACHE_STRATEGY (read by ConverterConfig.from_env)
    CACHE_STRATEGY: str = "precomputed"

    # Upper bound on waiting for the state lock before giving up
    LOCK_TIMEOUT_SECONDS: float = 5.0

    def __post_init__(self) -> None:
        if self.MIN_WIDTH < 1:
            raise ValueError(f"MIN_WIDTH must be at least 1, got {self.MIN_WIDTH}")
        if self.MAX_WIDTH < self.MIN_WIDTH:
            raise ValueError(
                f"MAX_WIDTH must be >= MIN_WIDTH, got MAX_WIDTH={self.MAX_WIDTH}, "
                f"MIN_WIDTH={self.MIN_WIDTH}"
            )
        if self.ROW_SCALE <= 0:
            raise ValueError(f"ROW_SCALE must be positive, got {self.ROW_SCALE}")
        if not 0 <= self.ALPHA_THRESHOLD <= 256:
            raise ValueError(
                f"ALPHA_THRESHOLD must be between 0 and 256, got {self.ALPHA_THRESHOLD}"
            )
        if self.CONTRAST_EPSILON < 0:
            raise ValueError(
                f"CONTRAST_EPSILON must be non-negative, got {self.CONTRAST_EPSILON}"
            )
        if self.CACHE_STRATEGY not in CACHE_STRATEGIES:
            raise ValueError(f"Invalid cache strategy: {self.CACHE_STRATEGY}")
        if self.LOCK_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"LOCK_TIMEOUT_SECONDS must be positive, got {self.LOCK_TIMEOUT_SECONDS}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> "ConverterConfig":
        """Build a config with GIFASCII_CACHE_STRATEGY applied.

        Explicit ``overrides`` win over the environment.
        """
        env_strategy = os.getenv("GIFASCII_CACHE_STRATEGY")
        if env_strategy and "CACHE_STRATEGY" not in overrides:
            overrides["CACHE_STRATEGY"] = env_strategy
        return cls(**overrides)

    @property
    def widths(self) -> range:
        """Every width the cache holds a tensor for."""
        return range(self.MIN_WIDTH, self.MAX_WIDTH + 1)


# Resize-on-demand cache configuration
ON_DEMAND_CACHE = {
    "memory_limit_mb": 256,  # Maximum memory held by lazily built tensors
}


# Default configuration instances; these never read the environment
DEFAULT_CONVERTER_CONFIG = ConverterConfig()
