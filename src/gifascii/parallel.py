"""Fork-join parallel execution for tensor building and frame rendering.

Work items are independent and CPU-bound inside numpy, which releases the
GIL for the bulk copies, so a thread pool gives real parallelism without
pickling frames across processes.
"""

import logging
import multiprocessing as mp
import os
import time
from collections.abc import Callable, Iterable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class ParallelConfig:
    """Configuration for parallel processing."""

    max_workers: int | None = None
    enable_profiling: bool = False

    def __post_init__(self) -> None:
        """Initialize configuration from environment variables."""
        if self.max_workers is None:
            env_workers = os.environ.get("GIFASCII_MAX_WORKERS")
            if env_workers:
                try:
                    self.max_workers = int(env_workers)
                except ValueError:
                    logger.warning(f"Invalid GIFASCII_MAX_WORKERS: {env_workers}")
                    self.max_workers = mp.cpu_count()
            else:
                self.max_workers = mp.cpu_count()

        # Ensure reasonable bounds
        self.max_workers = max(1, min(self.max_workers, mp.cpu_count() * 2))

        if not self.enable_profiling:
            self.enable_profiling = (
                os.environ.get("GIFASCII_ENABLE_PROFILING", "false").lower() == "true"
            )


def parallel_map(
    func: Callable[[T], R],
    items: Iterable[T],
    config: ParallelConfig | None = None,
    label: str = "parallel map",
) -> list[R]:
    """Apply ``func`` to every item on a thread pool, preserving input order.

    The first exception raised by any worker is re-raised once all running
    workers have stopped; pending items are cancelled and no partial result
    is returned.
    """
    config = config or ParallelConfig()
    items = list(items)
    if not items:
        return []

    start_time = time.perf_counter()

    if config.max_workers == 1 or len(items) == 1:
        results = [func(item) for item in items]
    else:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            futures = [executor.submit(func, item) for item in items]
            done, not_done = wait(futures, return_when=FIRST_EXCEPTION)
            for future in not_done:
                future.cancel()
            for future in futures:
                if future in done and future.exception() is not None:
                    raise future.exception()  # type: ignore[misc]
            results = [future.result() for future in futures]

    if config.enable_profiling:
        elapsed = time.perf_counter() - start_time
        logger.info(
            f"{label}: {len(items)} items on {config.max_workers} workers "
            f"in {elapsed:.3f}s"
        )

    return results
