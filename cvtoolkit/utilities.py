"""Helpers for treating numpy arrays consistently as images.

An image is a numpy array of shape ``(height, width)`` for a single channel
or ``(height, width, channels)`` for several channels.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

import numpy as np

__all__ = [
    "ImageType",
    "max_val",
    "channels",
    "image_type",
    "of_image_type",
    "target_channels_from_code",
    "allocate",
    "imitate",
    "copy",
    "to_polyline",
]


class ImageType(Enum):
    """Coarse pixel layout of an image, by channel count."""

    GRAYSCALE = 0
    COLOR = 1
    COLOR_ALPHA = 2


# Channel counts of the colour spaces understood by conversion codes such as
# "RGB2GRAY" or "BayerBG2RGB".
_SPACE_CHANNELS = {
    "GRAY": 1,
    "RGB": 3,
    "BGR": 3,
    "RGBA": 4,
    "BGRA": 4,
    "HSV": 3,
    "HLS": 3,
    "XYZ": 3,
    "YCRCB": 3,
    "LAB": 3,
    "LUV": 3,
}


def max_val(dtype) -> float:
    """Largest meaningful pixel value for ``dtype``: the integer maximum, or 1 for floats."""
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.floating):
        return 1.0
    if np.issubdtype(dtype, np.integer):
        return float(np.iinfo(dtype).max)
    if dtype == np.bool_:
        return 1.0
    raise TypeError(f"unsupported image dtype: {dtype}")


def channels(img: np.ndarray) -> int:
    """Number of channels in an image array."""
    if img.ndim == 2:
        return 1
    if img.ndim == 3:
        return int(img.shape[2])
    raise ValueError(f"an image must have 2 or 3 dimensions, not {img.ndim}")


def image_type(img: np.ndarray) -> tuple[np.dtype, int]:
    """The ``(dtype, channel count)`` pair describing an image."""
    return img.dtype, channels(img)


def of_image_type(channel_count: int) -> ImageType:
    """Map a channel count to an ``ImageType``; anything unusual is grayscale."""
    if channel_count == 4:
        return ImageType.COLOR_ALPHA
    if channel_count == 3:
        return ImageType.COLOR
    return ImageType.GRAYSCALE


def target_channels_from_code(code: str) -> int:
    """Channel count produced by a colour conversion code such as ``"RGB2GRAY"``."""
    try:
        _, target = code.upper().split("2", 1)
    except ValueError:
        raise ValueError(f"not a colour conversion code: {code!r}") from None
    try:
        return _SPACE_CHANNELS[target]
    except KeyError:
        raise ValueError(f"unknown target colour space in {code!r}") from None


def _shape(width: int, height: int, channel_count: int) -> tuple[int, ...]:
    if channel_count == 1:
        return (height, width)
    return (height, width, channel_count)


def allocate(img, width: int, height: int, dtype=np.uint8, channel_count: int = 1) -> np.ndarray:
    """Return ``img`` if it already has this size and type, else a new zeroed array."""
    shape = _shape(width, height, channel_count)
    if isinstance(img, np.ndarray) and img.shape == shape and img.dtype == np.dtype(dtype):
        return img
    return np.zeros(shape, dtype=dtype)


def imitate(mirror, original: np.ndarray, dtype=None, channel_count: int | None = None) -> np.ndarray:
    """Allocate ``mirror`` with the size of ``original``, and its type unless one is given."""
    height, width = original.shape[:2]
    return allocate(
        mirror,
        width,
        height,
        original.dtype if dtype is None else dtype,
        channels(original) if channel_count is None else channel_count,
    )


def copy(src: np.ndarray, dtype=None) -> np.ndarray:
    """Copy an image, rescaling values when converting to another depth."""
    target = src.dtype if dtype is None else np.dtype(dtype)
    if target == src.dtype:
        return src.copy()
    alpha = max_val(target) / max_val(src.dtype)
    scaled = src.astype(np.float64) * alpha
    if np.issubdtype(target, np.integer):
        info = np.iinfo(target)
        scaled = np.clip(np.rint(scaled), info.min, info.max)
    return scaled.astype(target)


def to_polyline(contour: Iterable[Sequence[float]]) -> list[tuple[float, float]]:
    """Turn a contour of integer or float points into a list of float ``(x, y)`` vertices."""
    return [(float(point[0]), float(point[1])) for point in contour]