"""ASCII rendering from cached luminance tensors."""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .caching import BaseTensorCache
from .error_handling import NoMediaLoaded, NotCached
from .palette import PALETTE_BYTES, build_lut
from .parallel import ParallelConfig, parallel_map

logger = logging.getLogger(__name__)

NEWLINE = ord("\n")
BLANK = PALETTE_BYTES[-1]


@dataclass(frozen=True)
class RenderResult:
    """Flat ASCII output for one frame or every frame.

    ``data`` holds ``frame_count`` consecutive frames; each frame is
    ``height`` rows of ``width`` characters followed by a newline.
    """

    height: int
    width: int
    frame_count: int
    data: bytes

    @property
    def frame_size(self) -> int:
        return self.width * self.height + self.height

    def frames(self) -> list[str]:
        """Split the buffer into one string per rendered frame."""
        size = self.frame_size
        return [
            self.data[start : start + size].decode("ascii")
            for start in range(0, len(self.data), size)
        ]

    @property
    def text(self) -> str:
        return self.data.decode("ascii")


def _render_frame_into(
    plane: np.ndarray,
    transparent: Optional[np.ndarray],
    lut: np.ndarray,
    out: np.ndarray,
) -> None:
    """Write one (rows, width) plane as text into ``out`` of shape (rows, width + 1)."""
    glyphs = out[:, :-1]
    np.take(lut, plane, out=glyphs)
    if transparent is not None:
        # Transparent pixels stay blank whatever the brightness/contrast
        glyphs[transparent] = BLANK
    out[:, -1] = NEWLINE


def render_ascii(
    cache: BaseTensorCache,
    width: int,
    brightness: int,
    contrast: float,
    frame_index: int | None = None,
    parallel_config: ParallelConfig | None = None,
) -> RenderResult:
    """Render cached luminance as ASCII text.

    Args:
        cache: Tensor cache holding the loaded animation
        width: Characters per row; must be a cached width
        brightness: Offset applied before the palette lookup
        contrast: Multiplier around mid-gray applied after brightness
        frame_index: Render only this frame (wrapped by frame count), or
            every frame when None
        parallel_config: Thread pool used in all-frames mode

    Returns:
        RenderResult with the row count and flat text buffer

    Raises:
        NoMediaLoaded: If the cache holds no frames
        NotCached: If no tensor exists for ``width``
    """
    if cache.is_empty:
        raise NoMediaLoaded(f"Width {width} not cached: no media loaded")

    tensor = cache.get(width)
    if tensor is None:
        raise NotCached(
            f"Width {width} not cached", context={"cached_widths": _width_span(cache)}
        )

    frame_count, height, _ = tensor.shape
    lut = build_lut(brightness, contrast)

    def mask(f: int) -> Optional[np.ndarray]:
        return tensor.transparent[f] if tensor.transparent is not None else None

    if frame_index is not None:
        selected = frame_index % frame_count
        output = np.empty((height, width + 1), dtype=np.uint8)
        _render_frame_into(tensor.values[selected], mask(selected), lut, output)
        logger.debug(f"Rendered frame {selected} at width {width}")
        return RenderResult(height, width, 1, output.tobytes())

    # Each frame writes straight into its own slice of the shared buffer
    output = np.empty((frame_count, height, width + 1), dtype=np.uint8)
    parallel_map(
        lambda f: _render_frame_into(tensor.values[f], mask(f), lut, output[f]),
        range(frame_count),
        parallel_config,
        label="ascii render",
    )
    logger.debug(f"Rendered {frame_count} frames at width {width}")
    return RenderResult(height, width, frame_count, output.tobytes())


def _width_span(cache: BaseTensorCache) -> str:
    widths = cache.cached_widths
    return f"{widths[0]}-{widths[-1]}" if widths else "none"
