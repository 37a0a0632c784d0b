"""In-memory conversion between `PixelBuffer` and Pillow images.

No file codecs are involved: images go through their numpy representation.
Pillow is imported lazily so the core package works without it.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pypixbuf.buffer import PixelBuffer
from pypixbuf.constants import MODEL_BY_PIL_MODE, PIL_MODE_BY_CHANNELS
from pypixbuf.errors import InvalidStateError
from pypixbuf.utils.optional_deps import require


def _pil_image_module():
    return require("PIL.Image", purpose="Pillow interop")


def to_pil(buf: PixelBuffer) -> Any:
    """Convert a 1, 3 or 4 channel buffer into a ``PIL.Image.Image``.

    The Pillow mode follows the channel count (``L``, ``RGB``, ``RGBA``); the
    buffer model is not consulted.
    """

    if buf.width == 0 or buf.height == 0:
        raise InvalidStateError(f"Cannot convert an empty buffer to a Pillow image: {buf!r}")
    mode = PIL_MODE_BY_CHANNELS.get(buf.channels)
    if mode is None:
        supported = ", ".join(str(c) for c in sorted(PIL_MODE_BY_CHANNELS))
        raise ValueError(f"Unsupported channel count for Pillow: {buf.channels}. Supported: {supported}.")

    image_module = _pil_image_module()
    arr = buf.to_numpy()
    if mode == "L":
        arr = arr[:, :, 0]
    return image_module.fromarray(np.ascontiguousarray(arr))


def from_pil(image: Any, *, model: str | None = None) -> PixelBuffer:
    """Convert an ``L``, ``RGB`` or ``RGBA`` Pillow image into a buffer.

    `model` defaults to ``GRAY`` / ``RGB`` / ``RGBA`` according to the image mode.
    """

    mode = getattr(image, "mode", None)
    if mode not in MODEL_BY_PIL_MODE:
        supported = ", ".join(sorted(MODEL_BY_PIL_MODE))
        raise ValueError(f"Unsupported Pillow mode: {mode!r}. Supported: {supported}.")
    arr = np.asarray(image, dtype=np.uint8)
    return PixelBuffer.from_numpy(arr, model=MODEL_BY_PIL_MODE[mode] if model is None else model)
