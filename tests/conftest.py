from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from gifascii.config import ConverterConfig
from gifascii.parallel import ParallelConfig
from gifascii.state import AppState


def _create_dummy_gif(
    path: Path,
    frames: int = 2,
    size: tuple[int, int] = (10, 10),
    duration: int = 100,
) -> None:
    """Create a small GIF at *path* whose frames are distinct solid grays.

    Consecutive frames differ so Pillow does not merge them on save.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    imgs = []
    for i in range(frames):
        val = int(i * 255 / max(frames - 1, 1))
        imgs.append(Image.new("RGB", size, (val, val, val)))
    imgs[0].save(path, save_all=True, append_images=imgs[1:], duration=duration, loop=0)


def solid_frames(
    count: int,
    size: tuple[int, int] = (10, 10),
    rgba: tuple[int, int, int, int] = (128, 128, 128, 255),
) -> list[np.ndarray]:
    """In-memory RGBA frames of a single colour, shaped (height, width, 4)."""
    width, height = size
    frame = np.empty((height, width, 4), dtype=np.uint8)
    frame[...] = rgba
    return [frame.copy() for _ in range(count)]


@pytest.fixture
def frame_factory():
    """Return solid_frames for building in-memory animations."""
    return solid_frames


@pytest.fixture
def gif_factory(tmp_path):
    """Return a callable that writes a GIF into the test's tmp dir."""

    def _make(name: str = "anim.gif", **kwargs) -> Path:
        path = tmp_path / name
        _create_dummy_gif(path, **kwargs)
        return path

    return _make


@pytest.fixture
def simple_gif(gif_factory):
    """4-frame 10x10 GIF."""
    return gif_factory("simple_4frame.gif", frames=4)


@pytest.fixture
def wide_gif(gif_factory):
    """3-frame 40x20 GIF (aspect ratio 0.5)."""
    return gif_factory("wide.gif", frames=3, size=(40, 20), duration=50)


@pytest.fixture
def parallel_config():
    return ParallelConfig(max_workers=2)


@pytest.fixture
def state(parallel_config):
    """Fresh application state with the default precomputed strategy."""
    return AppState(ConverterConfig(), parallel_config)


@pytest.fixture
def on_demand_state(parallel_config):
    return AppState(ConverterConfig(CACHE_STRATEGY="on_demand"), parallel_config)
