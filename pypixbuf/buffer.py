"""The `PixelBuffer` value type.

A buffer owns a contiguous ``uint8`` array of ``width * height * channels``
samples laid out row-major and channel-interleaved: sample ``(x, y, c)`` lives
at flat index ``(y * width + x) * channels + c``.

Buffers are plain values. Copies are deep, input arrays are copied on the way
in, and no two buffers ever share storage.

Operators
---------
Named methods carry the contracts; Python operators dispatch onto them by the
type of the right-hand operand:

- another `PixelBuffer`  -> ``add`` / ``subtract`` / ``abs_diff`` (``+ - ^``)
- an ``int``             -> ``add_scalar`` / ``subtract_scalar`` / ``abs_diff_scalar``
- a pixel (list, tuple, bytes, 1-D array) -> ``add_pixel`` / ...
- a real factor          -> ``multiply`` / ``divide`` (``* /``)
- comparisons with an ``int`` -> ``threshold`` (single-channel mask)

``buf == other_buffer`` is value equality and returns ``bool``;
``buf == 10`` is a threshold and returns a mask buffer, as with numpy arrays.
Buffers have no truth value: ``if buf == 10:`` raises ``TypeError``.
"""

from __future__ import annotations

import logging
from numbers import Integral, Real
from pathlib import Path
from typing import Any, Sequence

import numpy as np

from pypixbuf import ops
from pypixbuf.constants import DEFAULT_MODEL, MASK_MODEL, MODEL_ENCODING
from pypixbuf.errors import (
    FormatMismatchError,
    InvalidArgumentError,
    InvalidStateError,
    OutOfRangeError,
    SizeMismatchError,
)
from pypixbuf.utils.param_check import (
    check_dimension,
    check_integer_scalar,
    check_parameter,
    check_real_scalar,
    check_sample,
)

logger = logging.getLogger(__name__)

_PIXEL_TYPES = (list, tuple, bytes, bytearray, np.ndarray)


def _check_model(model: Any) -> str:
    if not isinstance(model, str):
        raise TypeError(f"model must be a str, got {type(model).__name__}")
    try:
        model.encode(MODEL_ENCODING)
    except UnicodeEncodeError as exc:
        raise InvalidArgumentError(
            f"model must be encodable as {MODEL_ENCODING}: {model!r}"
        ) from exc
    return model


def _check_shape(width: Any, height: Any, channels: Any) -> tuple[int, int, int]:
    return (
        check_dimension(width, name="width"),
        check_dimension(height, name="height"),
        check_dimension(channels, name="channels"),
    )


def _is_int(value: Any) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class PixelBuffer:
    """A ``width x height x channels`` grid of 8-bit samples tagged with a model.

    Parameters
    ----------
    width, height, channels:
        Non-negative ints. ``PixelBuffer()`` is the empty buffer
        ``0x0x0, NONE``.
    model:
        Opaque label compared by binary operators; never interpreted.
    """

    # Let numpy defer to our reflected operators (``np.int64(5) + buf``).
    __array_ufunc__ = None

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        channels: int = 0,
        model: str = DEFAULT_MODEL,
    ) -> None:
        w, h, c = _check_shape(width, height, channels)
        self._assign(w, h, c, _check_model(model), np.zeros(w * h * c, dtype=np.uint8))

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------
    @classmethod
    def filled(
        cls,
        width: int,
        height: int,
        channels: int,
        model: str = DEFAULT_MODEL,
        fill_value: int = 0,
    ) -> "PixelBuffer":
        """Create a buffer with every sample set to `fill_value`."""

        w, h, c = _check_shape(width, height, channels)
        fill = check_sample(fill_value, name="fill_value")
        return cls._wrap(w, h, c, _check_model(model), np.full(w * h * c, fill, dtype=np.uint8))

    @classmethod
    def from_bytes(
        cls,
        width: int,
        height: int,
        channels: int,
        model: str,
        buffer: Any,
    ) -> "PixelBuffer":
        """Create a buffer from explicit backing samples (copied).

        `buffer` may be bytes-like, a sequence of ints, or an integer numpy
        array; its length must equal ``width * height * channels`` exactly.
        """

        w, h, c = _check_shape(width, height, channels)
        model = _check_model(model)
        expected = w * h * c
        if isinstance(buffer, (bytes, bytearray, memoryview)):
            got = memoryview(buffer).nbytes
        else:
            got = int(np.size(buffer))
        if got != expected:
            raise SizeMismatchError(
                f"Buffer size does not match dimensions: expected {expected} samples "
                f"for {w}x{h}x{c}, got {got}"
            )
        return cls._wrap(w, h, c, model, ops.as_sample_array(buffer))

    @classmethod
    def from_numpy(cls, array: np.ndarray, model: str = DEFAULT_MODEL) -> "PixelBuffer":
        """Create a buffer from an ``(H, W)`` or ``(H, W, C)`` ``uint8`` array.

        This is intentionally strict: other dtypes are not rescaled or cast.
        """

        if not isinstance(array, np.ndarray):
            raise TypeError(f"Expected np.ndarray, got {type(array)}")
        if array.dtype != np.uint8:
            raise ValueError(f"Expected dtype=uint8, got {array.dtype}")
        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        if array.ndim != 3:
            raise ValueError(f"Expected shape (H,W) or (H,W,C), got {array.shape}")
        h, w, c = (int(n) for n in array.shape)
        data = np.array(array, dtype=np.uint8, order="C").reshape(-1)
        return cls._wrap(w, h, c, _check_model(model), data)

    @classmethod
    def _wrap(cls, width: int, height: int, channels: int, model: str, data: np.ndarray) -> "PixelBuffer":
        """Adopt an already validated, exclusively owned flat array."""

        buf = cls.__new__(cls)
        buf._assign(width, height, channels, model, data)
        return buf

    @classmethod
    def _from_hwc(cls, hwc: np.ndarray, model: str) -> "PixelBuffer":
        h, w, c = (int(n) for n in hwc.shape)
        return cls._wrap(w, h, c, model, hwc.reshape(-1))

    def _assign(self, width: int, height: int, channels: int, model: str, data: np.ndarray) -> None:
        self._width = width
        self._height = height
        self._channels = channels
        self._model = model
        self._data = data

    # ------------------------------------------------------------------
    # Shape & metadata
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def channels(self) -> int:
        return self._channels

    @property
    def model(self) -> str:
        return self._model

    @property
    def size(self) -> int:
        """Number of samples (``width * height * channels``)."""
        return int(self._data.size)

    @property
    def data(self) -> bytes:
        """A copy of the raw samples in storage order."""
        return self._data.tobytes()

    def _view(self) -> np.ndarray:
        return self._data.reshape(self._height, self._width, self._channels)

    def resize(self, new_width: int, new_height: int) -> None:
        """Reshape to ``new_width x new_height``, keeping the top-left overlap.

        Newly exposed samples are zero. The channel count is unchanged.
        """

        nw = check_dimension(new_width, name="new_width")
        nh = check_dimension(new_height, name="new_height")
        if self._channels <= 0:
            raise InvalidStateError("Channels not set or invalid; cannot resize")

        out = np.zeros((nh, nw, self._channels), dtype=np.uint8)
        copy_h = min(self._height, nh)
        copy_w = min(self._width, nw)
        out[:copy_h, :copy_w, :] = self._view()[:copy_h, :copy_w, :]
        self._assign(nw, nh, self._channels, self._model, out.reshape(-1))

    def set_width(self, width: int) -> None:
        self.resize(width, self._height)

    def set_height(self, height: int) -> None:
        self.resize(self._width, height)

    def set_channels(self, channels: int) -> None:
        """Change the channel count. All existing samples are discarded."""

        n = check_integer_scalar(channels, name="channels")
        check_parameter(n, 0, param_name="channels", include_left=False)
        if self.size:
            logger.debug("set_channels(%d) discards %d samples of %r", n, self.size, self)
        w, h = self._width, self._height
        self._assign(w, h, n, self._model, np.zeros(w * h * n, dtype=np.uint8))

    def set_model(self, model: str) -> None:
        self._model = _check_model(model)

    def clear(self) -> None:
        """Reset to the empty buffer ``0x0x0, NONE``."""
        self._assign(0, 0, 0, DEFAULT_MODEL, np.zeros(0, dtype=np.uint8))

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def _check_xy(self, x: Any, y: Any) -> None:
        if not (_is_int(x) and _is_int(y)):
            raise TypeError(f"Coordinates must be ints, got ({x!r}, {y!r})")
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfRangeError(
                f"Coordinates out of range: ({x}, {y}) for {self._width}x{self._height}"
            )

    def _index(self, x: Any, y: Any, c: Any) -> int:
        self._check_xy(x, y)
        if not _is_int(c):
            raise TypeError(f"Channel index must be an int, got {c!r}")
        if not 0 <= c < self._channels:
            raise OutOfRangeError(f"Channel out of range: {c} for {self._channels} channels")
        return (int(y) * self._width + int(x)) * self._channels + int(c)

    def get(self, x: int, y: int, c: int) -> int:
        return int(self._data[self._index(x, y, c)])

    def set(self, x: int, y: int, c: int, value: int) -> None:
        idx = self._index(x, y, c)
        self._data[idx] = check_sample(value)

    def get_pixel(self, x: int, y: int) -> tuple[int, ...]:
        """Return the ``channels`` samples at ``(x, y)``."""

        self._check_xy(x, y)
        return tuple(int(v) for v in self._view()[y, x, :])

    def set_pixel(self, x: int, y: int, pixel: Sequence[int] | np.ndarray) -> None:
        self._check_xy(x, y)
        values = ops.as_pixel(pixel, self._channels)
        self._view()[y, x, :] = values.astype(np.uint8)

    def __getitem__(self, key: tuple[int, int, int]) -> int:
        x, y, c = self._unpack_key(key)
        return self.get(x, y, c)

    def __setitem__(self, key: tuple[int, int, int], value: int) -> None:
        x, y, c = self._unpack_key(key)
        self.set(x, y, c, value)

    @staticmethod
    def _unpack_key(key: Any) -> tuple[Any, Any, Any]:
        if not isinstance(key, tuple) or len(key) != 3:
            raise TypeError(f"Index with buf[x, y, c], got {key!r}")
        return key[0], key[1], key[2]

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def _check_same_format(self, other: "PixelBuffer") -> None:
        if not isinstance(other, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(other).__name__}")
        if self._channels != other._channels or self._model != other._model:
            raise FormatMismatchError(
                "Images must have same channels and model: "
                f"{self._channels}/{self._model!r} vs {other._channels}/{other._model!r}"
            )

    def _emit(self, hwc: np.ndarray, *, inplace: bool) -> "PixelBuffer":
        if not inplace:
            return PixelBuffer._from_hwc(hwc, self._model)
        h, w, c = (int(n) for n in hwc.shape)
        self._assign(w, h, c, self._model, hwc.reshape(-1))
        return self

    def _combine(self, other: "PixelBuffer", op: str, inplace: bool) -> "PixelBuffer":
        self._check_same_format(other)
        return self._emit(ops.combine_padded(self._view(), other._view(), op), inplace=inplace)

    def add(self, other: "PixelBuffer", *, inplace: bool = False) -> "PixelBuffer":
        """Sample-wise sum over the union of both extents (zero padded, clamped)."""
        return self._combine(other, "add", inplace)

    def subtract(self, other: "PixelBuffer", *, inplace: bool = False) -> "PixelBuffer":
        return self._combine(other, "subtract", inplace)

    def abs_diff(self, other: "PixelBuffer", *, inplace: bool = False) -> "PixelBuffer":
        return self._combine(other, "abs_diff", inplace)

    def _combine_scalar(self, value: Any, op: str, inplace: bool) -> "PixelBuffer":
        scalar = check_integer_scalar(value)
        return self._emit(ops.combine_scalar(self._view(), scalar, op), inplace=inplace)

    def add_scalar(self, value: int, *, inplace: bool = False) -> "PixelBuffer":
        return self._combine_scalar(value, "add", inplace)

    def subtract_scalar(self, value: int, *, inplace: bool = False) -> "PixelBuffer":
        return self._combine_scalar(value, "subtract", inplace)

    def abs_diff_scalar(self, value: int, *, inplace: bool = False) -> "PixelBuffer":
        return self._combine_scalar(value, "abs_diff", inplace)

    def _combine_pixel(self, pixel: Any, op: str, inplace: bool) -> "PixelBuffer":
        vector = ops.as_pixel(pixel, self._channels)
        return self._emit(ops.combine_pixel(self._view(), vector, op), inplace=inplace)

    def add_pixel(self, pixel: Sequence[int] | np.ndarray, *, inplace: bool = False) -> "PixelBuffer":
        return self._combine_pixel(pixel, "add", inplace)

    def subtract_pixel(self, pixel: Sequence[int] | np.ndarray, *, inplace: bool = False) -> "PixelBuffer":
        return self._combine_pixel(pixel, "subtract", inplace)

    def abs_diff_pixel(self, pixel: Sequence[int] | np.ndarray, *, inplace: bool = False) -> "PixelBuffer":
        return self._combine_pixel(pixel, "abs_diff", inplace)

    def multiply(self, factor: float, *, inplace: bool = False) -> "PixelBuffer":
        """Scale every sample by `factor`, truncating toward zero then clamping."""
        f = check_real_scalar(factor)
        return self._emit(ops.scale(self._view(), f), inplace=inplace)

    def divide(self, divisor: float, *, inplace: bool = False) -> "PixelBuffer":
        """Divide every sample by `divisor`; raises `DivideByZeroError` on ``0.0``."""
        d = check_real_scalar(divisor, name="divisor")
        return self._emit(ops.scale(self._view(), d, divide=True), inplace=inplace)

    def threshold(self, op: str, value: int) -> "PixelBuffer":
        """Return a single-channel ``BINARY`` mask of pixels passing `op`.

        A pixel passes (255) only when *every* channel satisfies
        ``sample <op> value``; otherwise it is 0.
        """

        t = check_integer_scalar(value, name="threshold")
        mask = ops.threshold_mask(self._view(), str(op), t)
        return PixelBuffer._from_hwc(mask, MASK_MODEL)

    def invert(self) -> "PixelBuffer":
        return PixelBuffer._from_hwc(ops.invert(self._view()), self._model)

    # ------------------------------------------------------------------
    # Operator bindings
    # ------------------------------------------------------------------
    def _dispatch(self, other: Any, kind: str, inplace: bool = False) -> Any:
        if isinstance(other, PixelBuffer):
            return self._combine(other, kind, inplace)
        if _is_int(other):
            return self._combine_scalar(other, kind, inplace)
        if isinstance(other, _PIXEL_TYPES):
            return self._combine_pixel(other, kind, inplace)
        return NotImplemented

    def __add__(self, other: Any) -> "PixelBuffer":
        return self._dispatch(other, "add")

    def __sub__(self, other: Any) -> "PixelBuffer":
        return self._dispatch(other, "subtract")

    def __xor__(self, other: Any) -> "PixelBuffer":
        return self._dispatch(other, "abs_diff")

    def __radd__(self, other: Any) -> "PixelBuffer":
        if isinstance(other, PixelBuffer):
            return NotImplemented
        return self._dispatch(other, "add")

    def __rxor__(self, other: Any) -> "PixelBuffer":
        if isinstance(other, PixelBuffer):
            return NotImplemented
        return self._dispatch(other, "abs_diff")

    def __iadd__(self, other: Any) -> "PixelBuffer":
        return self._dispatch(other, "add", inplace=True)

    def __isub__(self, other: Any) -> "PixelBuffer":
        return self._dispatch(other, "subtract", inplace=True)

    def __ixor__(self, other: Any) -> "PixelBuffer":
        return self._dispatch(other, "abs_diff", inplace=True)

    def __mul__(self, other: Any) -> "PixelBuffer":
        if not _is_real(other):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __imul__(self, other: Any) -> "PixelBuffer":
        if not _is_real(other):
            return NotImplemented
        return self.multiply(other, inplace=True)

    def __truediv__(self, other: Any) -> "PixelBuffer":
        if not _is_real(other):
            return NotImplemented
        return self.divide(other)

    def __itruediv__(self, other: Any) -> "PixelBuffer":
        if not _is_real(other):
            return NotImplemented
        return self.divide(other, inplace=True)

    def __invert__(self) -> "PixelBuffer":
        return self.invert()

    def _compare(self, other: Any, op: str) -> Any:
        if not _is_int(other):
            return NotImplemented
        return self.threshold(op, other)

    def __lt__(self, other: Any) -> Any:
        return self._compare(other, "<")

    def __le__(self, other: Any) -> Any:
        return self._compare(other, "<=")

    def __gt__(self, other: Any) -> Any:
        return self._compare(other, ">")

    def __ge__(self, other: Any) -> Any:
        return self._compare(other, ">=")

    def __eq__(self, other: Any) -> Any:
        if isinstance(other, PixelBuffer):
            return self.equals(other)
        return self._compare(other, "==")

    def __ne__(self, other: Any) -> Any:
        if isinstance(other, PixelBuffer):
            return not self.equals(other)
        return self._compare(other, "!=")

    __hash__ = None  # type: ignore[assignment]

    def __bool__(self) -> bool:
        raise TypeError(
            "The truth value of a PixelBuffer is ambiguous; compare masks with "
            "equals() or inspect their samples"
        )

    def equals(self, other: "PixelBuffer") -> bool:
        """Value equality: same shape, model and samples."""

        if not isinstance(other, PixelBuffer):
            raise TypeError(f"Expected PixelBuffer, got {type(other).__name__}")
        return (
            self._width == other._width
            and self._height == other._height
            and self._channels == other._channels
            and self._model == other._model
            and bool(np.array_equal(self._data, other._data))
        )

    # ------------------------------------------------------------------
    # Copies, conversion, persistence
    # ------------------------------------------------------------------
    def copy(self) -> "PixelBuffer":
        return PixelBuffer._wrap(
            self._width, self._height, self._channels, self._model, self._data.copy()
        )

    def __copy__(self) -> "PixelBuffer":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "PixelBuffer":
        return self.copy()

    def to_numpy(self) -> np.ndarray:
        """Return an ``(H, W, C)`` ``uint8`` copy of the samples."""
        return self._view().copy()

    def save(self, path: str | Path) -> None:
        from pypixbuf.serialization.binary import save_buffer

        save_buffer(path, self)

    def load(self, path: str | Path) -> None:
        """Replace this buffer's whole state with the contents of `path`."""

        from pypixbuf.serialization.binary import load_buffer

        other = load_buffer(path)
        self._assign(other._width, other._height, other._channels, other._model, other._data)

    def __repr__(self) -> str:
        return f"PixelBuffer({self._width}x{self._height}x{self._channels}, {self._model})"
