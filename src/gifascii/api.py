"""Boundary operations: load, convert, preview and export.

Each operation takes the AppState explicitly. The ``*_async`` variants run
the same work on a worker thread so a host event loop never blocks; none of
them suspends part-way through a computation.
"""

import asyncio
import logging
import time
from collections.abc import Iterable
from pathlib import Path

from .caching import BaseTensorCache, build_on_demand_cache, build_tensor_cache
from .decoder import DecodedAnimation, decode_gif
from .error_handling import log_info_with_context
from .io import export_frames
from .preview import render_preview
from .renderer import RenderResult, render_ascii
from .state import AppState, MediaSnapshot

logger = logging.getLogger(__name__)


def build_cache(state: AppState, animation: DecodedAnimation) -> BaseTensorCache:
    """Build the cache selected by the state's configured strategy."""
    if state.config.CACHE_STRATEGY == "on_demand":
        return build_on_demand_cache(animation.frames, state.config)
    return build_tensor_cache(animation.frames, state.config, state.parallel_config)


def load_gif(state: AppState, path: str | Path) -> int:
    """Decode a GIF, build its cache and publish it.

    On failure the previously published media stays usable. A GIF without
    frames publishes an empty state.

    Returns:
        Number of frames loaded

    Raises:
        DecodeError: If the file cannot be read as a GIF
        CacheBuildError: If tensor construction fails
        LockContention: If the new state cannot be published in time
    """
    start_time = time.perf_counter()
    path = Path(path)
    animation = decode_gif(path)
    cache = build_cache(state, animation)
    state.publish(
        MediaSnapshot(
            cache=cache,
            source_path=path,
            durations_ms=tuple(animation.durations_ms),
        )
    )
    log_info_with_context(
        f"Loaded {path.name}",
        {
            "frames": animation.frame_count,
            "strategy": state.config.CACHE_STRATEGY,
            "seconds": round(time.perf_counter() - start_time, 2),
        },
        logger=logger,
    )
    return animation.frame_count


def convert_to_ascii(
    state: AppState,
    width: int,
    brightness: int,
    contrast: float,
    frame_index: int | None = None,
) -> RenderResult:
    """Render the loaded GIF as ASCII; see renderer.render_ascii."""
    snapshot = state.snapshot()
    return render_ascii(
        snapshot.cache,
        width,
        brightness,
        contrast,
        frame_index,
        parallel_config=state.parallel_config,
    )


def preview_adjustments(
    state: AppState, brightness: int, contrast: float, frame_index: int
) -> str:
    """Grayscale preview of one frame as a PNG data URI."""
    snapshot = state.snapshot()
    return render_preview(snapshot.cache, brightness, contrast, frame_index, state.config)


def export_ascii(path: str | Path, frames: Iterable[str]) -> None:
    """Write rendered frames to a text file."""
    export_frames(path, frames)


async def load_gif_async(state: AppState, path: str | Path) -> int:
    return await asyncio.to_thread(load_gif, state, path)


async def convert_to_ascii_async(
    state: AppState,
    width: int,
    brightness: int,
    contrast: float,
    frame_index: int | None = None,
) -> RenderResult:
    return await asyncio.to_thread(
        convert_to_ascii, state, width, brightness, contrast, frame_index
    )


async def preview_adjustments_async(
    state: AppState, brightness: int, contrast: float, frame_index: int
) -> str:
    return await asyncio.to_thread(
        preview_adjustments, state, brightness, contrast, frame_index
    )


async def export_ascii_async(path: str | Path, frames: Iterable[str]) -> None:
    # Materialise first so a generator is not consumed on another thread
    await asyncio.to_thread(export_ascii, path, list(frames))
