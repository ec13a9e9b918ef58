"""Grayscale preview of the brightness/contrast adjustment.

The preview shows tone rather than glyphs: the same adjustment the palette
lookup uses is applied to the cached luminance and encoded as a PNG.
"""

import base64
import io
import logging

import numpy as np
from PIL import Image

from .caching import BaseTensorCache
from .config import DEFAULT_CONVERTER_CONFIG, ConverterConfig
from .error_handling import NoMediaLoaded
from .palette import adjust_levels

logger = logging.getLogger(__name__)

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


def render_preview_png(
    cache: BaseTensorCache,
    brightness: int,
    contrast: float,
    frame_index: int,
    config: ConverterConfig = DEFAULT_CONVERTER_CONFIG,
) -> bytes:
    """Render one adjusted grayscale frame as PNG bytes.

    Raises:
        NoMediaLoaded: If no tensor is cached
    """
    tensor = None if cache.is_empty else cache.preview_tensor(config.PREVIEW_WIDTH)
    if tensor is None:
        raise NoMediaLoaded("No media loaded")

    selected = frame_index % tensor.frame_count
    gray = adjust_levels(tensor.values[selected], brightness, contrast).astype(np.uint8)

    rgba = np.empty(gray.shape + (4,), dtype=np.uint8)
    rgba[..., :3] = gray[..., None]
    rgba[..., 3] = 255

    buffer = io.BytesIO()
    Image.fromarray(rgba).save(buffer, format="PNG")
    logger.debug(
        f"Rendered preview frame {selected} at {gray.shape[1]}x{gray.shape[0]}"
    )
    return buffer.getvalue()


def render_preview(
    cache: BaseTensorCache,
    brightness: int,
    contrast: float,
    frame_index: int,
    config: ConverterConfig = DEFAULT_CONVERTER_CONFIG,
) -> str:
    """Render the adjusted preview as a base64 PNG data URI."""
    png = render_preview_png(cache, brightness, contrast, frame_index, config)
    return PNG_DATA_URI_PREFIX + base64.b64encode(png).decode("ascii")
