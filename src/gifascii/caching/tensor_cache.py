"""
Multi-resolution luminance tensor cache.

Every decoded frame is reduced once to an 8-bit luminance plane. For each
supported output width a (frame, row, column) tensor is then sampled from the
planes with nearest-neighbour indexing, so that changing brightness or
contrast later costs only a table lookup per character.
"""

import logging
import math
import time
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from fractions import Fraction
from types import MappingProxyType
from typing import Any, Optional

import numpy as np

from ..config import DEFAULT_CONVERTER_CONFIG, ConverterConfig
from ..error_handling import CacheBuildError, error_context
from ..parallel import ParallelConfig, parallel_map

logger = logging.getLogger(__name__)

# Integer BT.601 weights scaled by 2**16
LUMA_WEIGHTS = (19595, 38470, 7471)
LUMA_SHIFT = 16
TRANSPARENT_LUMA = 255


@dataclass(frozen=True)
class LuminanceTensor:
    """Luminance samples of every frame, plus where the source was transparent.

    ``values`` has shape (frames, rows, columns). ``transparent`` has the same
    shape, or is None when no sampled pixel is transparent. Transparent
    samples hold TRANSPARENT_LUMA in ``values``.
    """

    values: np.ndarray
    transparent: Optional[np.ndarray] = None

    @property
    def shape(self) -> tuple[int, int, int]:
        return self.values.shape

    @property
    def frame_count(self) -> int:
        return self.values.shape[0]

    @property
    def height(self) -> int:
        return self.values.shape[1]

    @property
    def width(self) -> int:
        return self.values.shape[2]

    @property
    def nbytes(self) -> int:
        mask_bytes = self.transparent.nbytes if self.transparent is not None else 0
        return self.values.nbytes + mask_bytes


def luminance_plane(
    frame: np.ndarray, alpha_threshold: int = DEFAULT_CONVERTER_CONFIG.ALPHA_THRESHOLD
) -> np.ndarray:
    """Convert one RGBA frame to a uint8 luminance plane.

    Pixels whose alpha is below ``alpha_threshold`` become TRANSPARENT_LUMA.
    """
    if frame.ndim != 3 or frame.shape[2] != 4:
        raise ValueError(f"Expected an RGBA frame, got shape {frame.shape}")

    rgb = frame[..., :3].astype(np.uint32)
    luma = (
        rgb[..., 0] * LUMA_WEIGHTS[0]
        + rgb[..., 1] * LUMA_WEIGHTS[1]
        + rgb[..., 2] * LUMA_WEIGHTS[2]
    ) >> LUMA_SHIFT
    plane = luma.astype(np.uint8)
    plane[frame[..., 3] < alpha_threshold] = TRANSPARENT_LUMA
    return plane


def luminance_planes(
    frames: Sequence[np.ndarray],
    alpha_threshold: int = DEFAULT_CONVERTER_CONFIG.ALPHA_THRESHOLD,
) -> LuminanceTensor:
    """Luminance of every frame at source resolution.

    All frames must share the dimensions of frame 0.
    """
    height, width = frames[0].shape[:2]
    values = np.empty((len(frames), height, width), dtype=np.uint8)
    transparent = np.zeros((len(frames), height, width), dtype=bool)
    for index, frame in enumerate(frames):
        if frame.shape[:2] != (height, width):
            raise ValueError(
                f"Frame {index} is {frame.shape[1]}x{frame.shape[0]}, "
                f"expected {width}x{height}"
            )
        values[index] = luminance_plane(frame, alpha_threshold)
        transparent[index] = frame[..., 3] < alpha_threshold

    values.flags.writeable = False
    if not transparent.any():
        return LuminanceTensor(values)
    transparent.flags.writeable = False
    return LuminanceTensor(values, transparent)


def output_rows(
    width: int,
    source_height: int,
    source_width: int,
    row_scale: float = DEFAULT_CONVERTER_CONFIG.ROW_SCALE,
) -> int:
    """Number of text rows for ``width`` columns, never less than one.

    Computes ``floor(width * source_height / source_width * row_scale)`` in
    exact rational arithmetic.
    """
    rows = Fraction(width * source_height, source_width) * Fraction(str(row_scale))
    return max(1, math.floor(rows))


def sample_indices(source_size: int, target_size: int) -> np.ndarray:
    """Nearest-neighbour source index for every target index."""
    return (np.arange(target_size, dtype=np.int64) * source_size) // target_size


def build_tensor(
    planes: LuminanceTensor,
    width: int,
    row_scale: float = DEFAULT_CONVERTER_CONFIG.ROW_SCALE,
) -> LuminanceTensor:
    """Downsample source-resolution planes to ``width`` columns."""
    source_h, source_w = planes.height, planes.width
    height = output_rows(width, source_h, source_w, row_scale)

    rows = sample_indices(source_h, height)[:, None]
    cols = sample_indices(source_w, width)[None, :]

    values = planes.values[:, rows, cols]
    values.flags.writeable = False

    transparent = None
    if planes.transparent is not None:
        transparent = planes.transparent[:, rows, cols]
        if transparent.any():
            transparent.flags.writeable = False
        else:
            transparent = None

    return LuminanceTensor(values, transparent)


class BaseTensorCache(ABC):
    """Read interface shared by the precomputed and on-demand caches."""

    def __init__(self, frame_count: int = 0, dimensions: tuple[int, int] = (0, 0)):
        self._frame_count = frame_count
        self._dimensions = dimensions

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def dimensions(self) -> tuple[int, int]:
        """Source (width, height) the tensors were sampled from."""
        return self._dimensions

    @property
    def is_empty(self) -> bool:
        return self._frame_count == 0

    @abstractmethod
    def get(self, width: int) -> Optional[LuminanceTensor]:
        """Return the tensor for ``width`` or None if it cannot be served."""

    @property
    @abstractmethod
    def cached_widths(self) -> list[int]:
        """Widths currently held in memory, ascending."""

    @abstractmethod
    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""

    def preview_tensor(self, preferred_width: int) -> Optional[LuminanceTensor]:
        """Tensor for ``preferred_width``, falling back to any cached width."""
        tensor = self.get(preferred_width)
        if tensor is None:
            widths = self.cached_widths
            if widths:
                tensor = self.get(widths[0])
        return tensor


class TensorCache(BaseTensorCache):
    """Immutable mapping from output width to its luminance tensor."""

    def __init__(
        self,
        tensors: dict[int, LuminanceTensor] | None = None,
        frame_count: int = 0,
        dimensions: tuple[int, int] = (0, 0),
    ):
        super().__init__(frame_count, dimensions)
        self._tensors = MappingProxyType(dict(tensors or {}))

    def get(self, width: int) -> Optional[LuminanceTensor]:
        return self._tensors.get(width)

    def __contains__(self, width: object) -> bool:
        return width in self._tensors

    def __len__(self) -> int:
        return len(self._tensors)

    @property
    def cached_widths(self) -> list[int]:
        return sorted(self._tensors)

    @property
    def nbytes(self) -> int:
        return sum(tensor.nbytes for tensor in self._tensors.values())

    def get_stats(self) -> dict[str, Any]:
        widths = self.cached_widths
        return {
            "strategy": "precomputed",
            "entries": len(widths),
            "min_width": widths[0] if widths else None,
            "max_width": widths[-1] if widths else None,
            "frame_count": self.frame_count,
            "memory_mb": self.nbytes / (1024 * 1024),
        }


def build_tensor_cache(
    frames: Sequence[np.ndarray],
    config: ConverterConfig = DEFAULT_CONVERTER_CONFIG,
    parallel_config: ParallelConfig | None = None,
) -> TensorCache:
    """Build tensors for every supported width from decoded RGBA frames.

    Widths are computed in parallel and the cache is assembled only after all
    of them succeed; any failure raises CacheBuildError and nothing is
    returned.

    Args:
        frames: Decoded RGBA frames, all sized like frame 0
        config: Converter configuration (width range, row scale, alpha threshold)
        parallel_config: Thread pool configuration

    Returns:
        TensorCache, empty when ``frames`` is empty
    """
    if not frames:
        return TensorCache()

    start_time = time.perf_counter()
    height, width = frames[0].shape[:2]
    context = {"frames": len(frames), "source": f"{width}x{height}"}

    with error_context("compute luminance planes", CacheBuildError, context=context, logger=logger):
        planes = luminance_planes(frames, config.ALPHA_THRESHOLD)

    widths = list(config.widths)
    with error_context("build tensor cache", CacheBuildError, context=context, logger=logger):
        tensors = parallel_map(
            lambda w: build_tensor(planes, w, config.ROW_SCALE),
            widths,
            parallel_config,
            label="tensor cache build",
        )

    cache = TensorCache(dict(zip(widths, tensors)), len(frames), (width, height))
    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Built tensor cache: {len(cache)} widths x {len(frames)} frames, "
        f"{cache.nbytes / (1024 * 1024):.1f}MB in {elapsed:.2f}s"
    )
    return cache
