"""Character palette and brightness/contrast lookup tables.

The palette runs from the densest glyph to the sparsest (a space). Its exact
contents and order determine which character every luminance bucket maps to,
so rendered output is only reproducible while it stays unchanged.
"""

import numpy as np

from .config import DEFAULT_CONVERTER_CONFIG

PALETTE = "$$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
PALETTE_BYTES = np.frombuffer(PALETTE.encode("ascii"), dtype=np.uint8)
PALETTE_LAST = len(PALETTE) - 1

# Every possible 8-bit luminance value, reused by build_lut
_LEVELS = np.arange(256, dtype=np.float32)


def adjust_levels(
    values: np.ndarray,
    brightness: int,
    contrast: float,
    contrast_epsilon: float = DEFAULT_CONVERTER_CONFIG.CONTRAST_EPSILON,
) -> np.ndarray:
    """Apply brightness then contrast to luminance values.

    Contrast is skipped entirely when it lies within ``contrast_epsilon`` of
    1.0. The result is float32, clamped to [0, 255] but not truncated.
    """
    adjusted = values.astype(np.float32) + np.float32(brightness)
    factor = np.float32(contrast)
    # Compared in float32 so 0.99 and 1.01 land inside the band
    if abs(factor - np.float32(1.0)) > np.float32(contrast_epsilon):
        adjusted = (adjusted - np.float32(128.0)) * factor + np.float32(128.0)
    return np.clip(adjusted, 0.0, 255.0)


def build_lut(brightness: int, contrast: float) -> np.ndarray:
    """Build the 256-entry luminance to palette byte table.

    Args:
        brightness: Offset added to every luminance value; saturates after clamping
        contrast: Multiplier around mid-gray (128)

    Returns:
        uint8 array of length 256 holding ASCII codes from ``PALETTE``
    """
    levels = adjust_levels(_LEVELS, brightness, contrast)
    # astype truncates toward zero, which is floor for the clamped range
    indices = (levels * np.float32(PALETTE_LAST) / np.float32(255.0)).astype(np.intp)
    return PALETTE_BYTES[indices]
