"""
Resize-on-demand tensor cache.

Keeps the luminance planes of the decoded frames and samples a width's tensor
the first time it is requested. Built tensors are kept in an LRU bounded by
memory, so load time stays low at the cost of latency on the first request
for each width.
"""

import logging
import threading
from collections import OrderedDict
from collections.abc import Sequence
from typing import Any, Optional

import numpy as np

from ..config import DEFAULT_CONVERTER_CONFIG, ON_DEMAND_CACHE, ConverterConfig
from ..error_handling import CacheBuildError, error_context
from .tensor_cache import BaseTensorCache, LuminanceTensor, build_tensor, luminance_planes

logger = logging.getLogger(__name__)


class OnDemandTensorCache(BaseTensorCache):
    """
    LRU cache of per-width tensors sampled lazily from luminance planes.
    """

    def __init__(
        self,
        planes: LuminanceTensor,
        config: ConverterConfig = DEFAULT_CONVERTER_CONFIG,
        memory_limit_mb: float | None = None,
    ):
        """
        Initialize the on-demand cache.

        Args:
            planes: Source-resolution luminance of every frame
            config: Converter configuration (width range, row scale)
            memory_limit_mb: Maximum memory held by built tensors in MB
        """
        frame_count = planes.frame_count
        dimensions = (planes.width, planes.height) if frame_count else (0, 0)
        super().__init__(frame_count, dimensions)

        if memory_limit_mb is None:
            memory_limit_mb = ON_DEMAND_CACHE.get("memory_limit_mb", 256)

        self._planes = planes
        self._config = config
        self.memory_limit = int(memory_limit_mb * 1024 * 1024)

        self._cache: OrderedDict[int, LuminanceTensor] = OrderedDict()
        self._current_memory = 0
        self._lock = threading.RLock()

        self._stats = {
            "hits": 0,
            "misses": 0,
            "evictions": 0,
        }

    def _evict_lru(self) -> None:
        """Evict least recently used widths to stay within memory limit.

        The most recent entry is always kept, even if it alone exceeds the
        limit.
        """
        while self._current_memory > self.memory_limit and len(self._cache) > 1:
            _, evicted = self._cache.popitem(last=False)
            self._current_memory -= evicted.nbytes
            self._stats["evictions"] += 1

    def get(self, width: int) -> Optional[LuminanceTensor]:
        """
        Get the tensor for ``width``, sampling it on a miss.

        Returns None for widths outside the configured range or when no
        frames are loaded.
        """
        if self.is_empty or width not in self._config.widths:
            return None

        with self._lock:
            tensor = self._cache.get(width)
            if tensor is not None:
                self._cache.move_to_end(width)
                self._stats["hits"] += 1
                return tensor
            self._stats["misses"] += 1

        # Sampling happens outside the lock; a concurrent duplicate build is harmless
        with error_context(
            f"resize frames to width {width}", CacheBuildError, logger=logger
        ):
            tensor = build_tensor(self._planes, width, self._config.ROW_SCALE)

        with self._lock:
            if width not in self._cache:
                self._cache[width] = tensor
                self._current_memory += tensor.nbytes
                self._evict_lru()
            return self._cache.get(width, tensor)

    @property
    def cached_widths(self) -> list[int]:
        with self._lock:
            return sorted(self._cache)

    def clear(self) -> None:
        """Drop every built tensor; planes are kept."""
        with self._lock:
            self._cache.clear()
            self._current_memory = 0

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total_requests = self._stats["hits"] + self._stats["misses"]
            return {
                "strategy": "on_demand",
                **self._stats,
                "entries": len(self._cache),
                "frame_count": self.frame_count,
                "memory_mb": self._current_memory / (1024 * 1024),
                "memory_limit_mb": self.memory_limit / (1024 * 1024),
                "planes_mb": self._planes.nbytes / (1024 * 1024),
                "hit_rate": self._stats["hits"] / max(1, total_requests),
            }


def build_on_demand_cache(
    frames: Sequence[np.ndarray],
    config: ConverterConfig = DEFAULT_CONVERTER_CONFIG,
    memory_limit_mb: float | None = None,
) -> OnDemandTensorCache:
    """Compute luminance planes once and wrap them in an on-demand cache."""
    if not frames:
        planes = LuminanceTensor(np.empty((0, 0, 0), dtype=np.uint8))
    else:
        with error_context(
            "compute luminance planes",
            CacheBuildError,
            context={"frames": len(frames)},
            logger=logger,
        ):
            planes = luminance_planes(frames, config.ALPHA_THRESHOLD)

    cache = OnDemandTensorCache(planes, config, memory_limit_mb)
    logger.info(
        f"Prepared on-demand cache: {cache.frame_count} frames, "
        f"{planes.nbytes / (1024 * 1024):.1f}MB of luminance planes"
    )
    return cache
