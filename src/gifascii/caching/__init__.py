"""Luminance tensor caches for fast ASCII rendering."""

from .resized_frame_cache import OnDemandTensorCache, build_on_demand_cache
from .tensor_cache import (
    BaseTensorCache,
    LuminanceTensor,
    TensorCache,
    build_tensor,
    build_tensor_cache,
    luminance_plane,
    luminance_planes,
    output_rows,
)

__all__ = [
    "BaseTensorCache",
    "LuminanceTensor",
    "OnDemandTensorCache",
    "TensorCache",
    "build_on_demand_cache",
    "build_tensor",
    "build_tensor_cache",
    "luminance_plane",
    "luminance_planes",
    "output_rows",
]
