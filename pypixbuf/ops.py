"""Elementwise numpy kernels behind `PixelBuffer` operators.

All kernels take and return ``(H, W, C)`` arrays. Inputs are never modified;
every result is a fresh contiguous ``uint8`` array. Arithmetic happens in
signed 64-bit (or float64 for scaling) and is clamped to ``[0, 255]``.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

import numpy as np

from pypixbuf.constants import SAMPLE_MAX, SAMPLE_MIN, THRESHOLD_OPS
from pypixbuf.errors import (
    ChannelCountMismatchError,
    DivideByZeroError,
    InvalidArgumentError,
    SizeMismatchError,
)

# |scalar| beyond this saturates every result anyway; keeps int64 math safe.
_SCALAR_LIMIT = 2 * (SAMPLE_MAX + 1)


def _abs_diff(a: np.ndarray, b: Any) -> np.ndarray:
    return np.abs(np.subtract(a, b))


_COMBINERS: dict[str, Callable[[np.ndarray, Any], np.ndarray]] = {
    "add": np.add,
    "subtract": np.subtract,
    "abs_diff": _abs_diff,
}

_COMPARATORS: dict[str, Callable[[np.ndarray, Any], np.ndarray]] = {
    "<": np.less,
    "<=": np.less_equal,
    ">": np.greater,
    ">=": np.greater_equal,
    "==": np.equal,
    "!=": np.not_equal,
}


def _combiner(op: str) -> Callable[[np.ndarray, Any], np.ndarray]:
    try:
        return _COMBINERS[op]
    except KeyError as exc:
        raise InvalidArgumentError(
            f"Unknown combine op: {op!r}. Choose from: {', '.join(_COMBINERS)}."
        ) from exc


def clamp_to_u8(values: np.ndarray) -> np.ndarray:
    """Clip integer/float values to ``[0, 255]`` and cast to ``uint8``."""

    clipped = np.clip(values, SAMPLE_MIN, SAMPLE_MAX)
    return np.ascontiguousarray(clipped.astype(np.uint8))


def as_sample_array(values: Any, *, name: str = "buffer") -> np.ndarray:
    """Convert bytes-like or integer sequences into a flat ``uint8`` copy.

    Raises `InvalidArgumentError` when a value lies outside ``[0, 255]`` and
    `TypeError` for non-integer content.
    """

    if isinstance(values, (bytes, bytearray, memoryview)):
        return np.frombuffer(bytes(values), dtype=np.uint8).copy()

    arr = np.asarray(values)
    if arr.size == 0:
        return np.zeros((0,), dtype=np.uint8)
    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        raise TypeError(f"{name} must contain integers, got dtype={arr.dtype}")
    flat = arr.reshape(-1)
    lo, hi = int(flat.min()), int(flat.max())
    if lo < SAMPLE_MIN or hi > SAMPLE_MAX:
        raise InvalidArgumentError(
            f"{name} samples must be in [{SAMPLE_MIN}, {SAMPLE_MAX}], got min={lo}, max={hi}"
        )
    return flat.astype(np.uint8)


def as_pixel(pixel: Sequence[int] | np.ndarray, channels: int) -> np.ndarray:
    """Validate a pixel vector against `channels` and return it as int64."""

    arr = as_sample_array(pixel, name="pixel")
    if np.ndim(pixel) > 1:
        raise ChannelCountMismatchError(f"pixel must be 1-D, got shape {np.shape(pixel)}")
    if arr.shape[0] != channels:
        raise ChannelCountMismatchError(
            f"pixel has {arr.shape[0]} values but the buffer has {channels} channels"
        )
    return arr.astype(np.int64)


def combine_padded(a: np.ndarray, b: np.ndarray, op: str) -> np.ndarray:
    """Combine two ``(H, W, C)`` arrays over the union of their extents.

    The result is ``max(H) x max(W) x C``. Coordinates outside either operand
    read as zero.
    """

    if a.shape[2] != b.shape[2]:
        raise SizeMismatchError(f"Channel axes differ: {a.shape[2]} vs {b.shape[2]}")
    fn = _combiner(op)

    h = max(a.shape[0], b.shape[0])
    w = max(a.shape[1], b.shape[1])
    c = a.shape[2]

    pa = np.zeros((h, w, c), dtype=np.int64)
    pb = np.zeros((h, w, c), dtype=np.int64)
    pa[: a.shape[0], : a.shape[1], :] = a
    pb[: b.shape[0], : b.shape[1], :] = b
    return clamp_to_u8(fn(pa, pb))


def combine_scalar(a: np.ndarray, scalar: int, op: str) -> np.ndarray:
    fn = _combiner(op)
    s = max(-_SCALAR_LIMIT, min(_SCALAR_LIMIT, int(scalar)))
    return clamp_to_u8(fn(a.astype(np.int64), s))


def combine_pixel(a: np.ndarray, pixel: np.ndarray, op: str) -> np.ndarray:
    """Combine every pixel of `a` with a ``(C,)`` vector along the channel axis."""

    fn = _combiner(op)
    return clamp_to_u8(fn(a.astype(np.int64), pixel.reshape(1, 1, -1)))


def scale(a: np.ndarray, factor: float, *, divide: bool = False) -> np.ndarray:
    """Multiply (or divide) by a real factor, truncating toward zero."""

    if divide and factor == 0.0:
        raise DivideByZeroError("Division by zero")
    values = a.astype(np.float64)
    values = values / factor if divide else values * factor
    return clamp_to_u8(np.trunc(values))


def threshold_mask(a: np.ndarray, op: str, value: int) -> np.ndarray:
    """Return a ``(H, W, 1)`` mask: 255 where every channel satisfies `op`.

    A pixel with zero channels passes vacuously.
    """

    try:
        cmp = _COMPARATORS[op]
    except KeyError as exc:
        raise InvalidArgumentError(
            f"Unknown threshold op: {op!r}. Choose from: {', '.join(THRESHOLD_OPS)}."
        ) from exc

    # Samples live in [0, 255]; any threshold outside [-1, 256] compares the same.
    t = max(SAMPLE_MIN - 1, min(SAMPLE_MAX + 1, int(value)))
    passed = np.all(cmp(a.astype(np.int64), t), axis=2, keepdims=True)
    return np.ascontiguousarray(passed.astype(np.uint8) * np.uint8(SAMPLE_MAX))


def invert(a: np.ndarray) -> np.ndarray:
    return np.ascontiguousarray(np.uint8(SAMPLE_MAX) - a)
