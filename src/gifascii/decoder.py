"""GIF decoding into RGBA frame arrays."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from PIL import Image, ImageSequence, UnidentifiedImageError

from .error_handling import DecodeError, error_context, log_warning_with_context

logger = logging.getLogger(__name__)

DEFAULT_FRAME_DURATION_MS = 100


@dataclass
class DecodedAnimation:
    """Result of decoding an animated GIF."""

    frames: list[np.ndarray]  # each (height, width, 4) uint8, RGBA
    dimensions: tuple[int, int]  # (width, height) of frame 0
    durations_ms: list[int] = field(default_factory=list)

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def duration_ms(self) -> int:
        return sum(self.durations_ms)

    @property
    def is_empty(self) -> bool:
        return not self.frames


def decode_gif(gif_path: str | Path) -> DecodedAnimation:
    """Decode every frame of a GIF file.

    Frames are composited by Pillow, converted to RGBA and returned in
    temporal order as read-only arrays. A GIF with no frames decodes to an
    empty result rather than an error.

    Args:
        gif_path: Path to GIF file

    Returns:
        DecodedAnimation with frames, dimensions and per-frame delays

    Raises:
        DecodeError: If the file cannot be opened or is not a GIF
    """
    gif_path = Path(gif_path)
    context = {"file": str(gif_path)}

    with error_context(f"decode {gif_path.name}", DecodeError, context=context, logger=logger):
        try:
            img = Image.open(gif_path)
        except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
            raise DecodeError(f"Cannot open {gif_path}", cause=e, context=context) from e
        except UnidentifiedImageError as e:
            raise DecodeError(
                f"{gif_path} is not a recognised image", cause=e, context=context
            ) from e

        with img:
            if img.format != "GIF":
                raise DecodeError(
                    f"Unsupported format {img.format!r}, only GIF is supported",
                    context=context,
                )

            frames: list[np.ndarray] = []
            durations: list[int] = []
            for frame in ImageSequence.Iterator(img):
                rgba = np.array(frame.convert("RGBA"), dtype=np.uint8)
                rgba.flags.writeable = False
                frames.append(rgba)
                durations.append(int(frame.info.get("duration", DEFAULT_FRAME_DURATION_MS)))

            dimensions = (frames[0].shape[1], frames[0].shape[0]) if frames else (0, 0)

    if not frames:
        log_warning_with_context("GIF contains no frames", context, logger=logger)

    logger.info(
        f"Decoded {gif_path.name}: {len(frames)} frames, "
        f"{dimensions[0]}x{dimensions[1]}"
    )
    return DecodedAnimation(frames=frames, dimensions=dimensions, durations_ms=durations)
