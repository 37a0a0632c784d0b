"""Exception taxonomy for pixel buffers.

Every failure kind has its own class so callers can handle each one
explicitly. Each class also derives from the closest builtin exception, so
``except ValueError`` / ``except IndexError`` style handlers keep working.
"""

from __future__ import annotations


class PixelBufferError(Exception):
    """Base class for all `pypixbuf` errors."""


class InvalidDimensionError(PixelBufferError, ValueError):
    """A width, height or channel count is negative."""


class SizeMismatchError(PixelBufferError, ValueError):
    """Supplied backing storage does not hold ``width*height*channels`` samples."""


class ChannelCountMismatchError(PixelBufferError, ValueError):
    """A pixel vector length differs from the buffer channel count."""


class FormatMismatchError(PixelBufferError, ValueError):
    """Two buffers differ in channel count or model."""


class OutOfRangeError(PixelBufferError, IndexError):
    """A coordinate lies outside the buffer bounds."""


class DivideByZeroError(PixelBufferError, ZeroDivisionError):
    """Scalar division by exactly zero."""


class InvalidStateError(PixelBufferError, RuntimeError):
    """The buffer is not in a state that allows the operation."""


class InvalidArgumentError(PixelBufferError, ValueError):
    """An argument value is outside its accepted domain."""


class IoError(PixelBufferError, OSError):
    """A persistence file could not be opened, read or written."""


class CorruptDataError(PixelBufferError, ValueError):
    """Serialized data is truncated or malformed."""


__all__ = [
    "ChannelCountMismatchError",
    "CorruptDataError",
    "DivideByZeroError",
    "FormatMismatchError",
    "InvalidArgumentError",
    "InvalidDimensionError",
    "InvalidStateError",
    "IoError",
    "OutOfRangeError",
    "PixelBufferError",
    "SizeMismatchError",
]
