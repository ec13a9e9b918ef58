"""gifascii - animated GIF to ASCII art conversion."""

__version__: str = "0.1.0"

from .api import (
    convert_to_ascii,
    convert_to_ascii_async,
    export_ascii,
    export_ascii_async,
    load_gif,
    load_gif_async,
    preview_adjustments,
    preview_adjustments_async,
)
from .error_handling import (
    CacheBuildError,
    DecodeError,
    ExportError,
    GifAsciiError,
    LockContention,
    NoMediaLoaded,
    NotCached,
)
from .palette import PALETTE, build_lut
from .renderer import RenderResult
from .state import AppState

__all__ = [
    "PALETTE",
    "AppState",
    "CacheBuildError",
    "DecodeError",
    "ExportError",
    "GifAsciiError",
    "LockContention",
    "NoMediaLoaded",
    "NotCached",
    "RenderResult",
    "build_lut",
    "convert_to_ascii",
    "convert_to_ascii_async",
    "export_ascii",
    "export_ascii_async",
    "load_gif",
    "load_gif_async",
    "preview_adjustments",
    "preview_adjustments_async",
]
