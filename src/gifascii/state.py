"""Long-lived application state shared by load, convert and preview requests.

The state holds one immutable MediaSnapshot. Loads build a complete new
snapshot without holding any lock and then swap it in; readers take the
current reference and work on it lock-free, so no reader can observe a
half-replaced cache.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from .caching import BaseTensorCache, TensorCache
from .config import DEFAULT_CONVERTER_CONFIG, ConverterConfig
from .error_handling import LockContention
from .parallel import ParallelConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaSnapshot:
    """Everything derived from one successfully loaded GIF."""

    cache: BaseTensorCache = field(default_factory=TensorCache)
    source_path: Path | None = None
    durations_ms: tuple[int, ...] = ()

    @property
    def frame_count(self) -> int:
        return self.cache.frame_count

    @property
    def dimensions(self) -> tuple[int, int]:
        return self.cache.dimensions

    @property
    def is_empty(self) -> bool:
        return self.cache.is_empty


class AppState:
    """Holder of the current MediaSnapshot, passed explicitly to every operation."""

    def __init__(
        self,
        config: ConverterConfig = DEFAULT_CONVERTER_CONFIG,
        parallel_config: ParallelConfig | None = None,
    ):
        self.config = config
        self.parallel_config = parallel_config or ParallelConfig()
        self._snapshot = MediaSnapshot()
        self._lock = threading.Lock()

    @contextmanager
    def _locked(self, operation: str) -> Iterator[None]:
        if not self._lock.acquire(timeout=self.config.LOCK_TIMEOUT_SECONDS):
            raise LockContention(
                f"Timed out after {self.config.LOCK_TIMEOUT_SECONDS}s waiting to {operation}"
            )
        try:
            yield
        finally:
            self._lock.release()

    def snapshot(self) -> MediaSnapshot:
        """Current snapshot; safe to use after the call returns."""
        with self._locked("read media state"):
            return self._snapshot

    def publish(self, snapshot: MediaSnapshot) -> None:
        """Replace the current snapshot in a single step."""
        with self._locked("publish media state"):
            previous = self._snapshot
            self._snapshot = snapshot
        logger.info(
            f"Published media state: {snapshot.frame_count} frames "
            f"(replaced {previous.frame_count})"
        )

    def reset(self) -> None:
        self.publish(MediaSnapshot())

    @property
    def frame_count(self) -> int:
        return self.snapshot().frame_count
