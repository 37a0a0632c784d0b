"""pypixbuf - in-memory 8-bit pixel buffers with clamped operators.

Keep top-level imports lightweight: optional dependencies (Pillow, PyYAML) are
only imported by the submodules that need them. Exports are lazy-loaded on
demand so that `import pypixbuf` stays cheap.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Modules
    "config",
    "errors",
    "interop",
    "ops",
    "serialization",
    "utils",
    # Core
    "PixelBuffer",
    # Persistence
    "load_buffer",
    "save_buffer",
    # Errors
    "PixelBufferError",
    "ChannelCountMismatchError",
    "CorruptDataError",
    "DivideByZeroError",
    "FormatMismatchError",
    "InvalidArgumentError",
    "InvalidDimensionError",
    "InvalidStateError",
    "IoError",
    "OutOfRangeError",
    "SizeMismatchError",
]


_LAZY_SUBMODULES = {
    "config",
    "errors",
    "interop",
    "ops",
    "serialization",
    "utils",
}

_LAZY_EXPORTS = {
    "PixelBuffer": ("buffer", "PixelBuffer"),
    "load_buffer": ("serialization.binary", "load_buffer"),
    "save_buffer": ("serialization.binary", "save_buffer"),
    "PixelBufferError": ("errors", "PixelBufferError"),
    "ChannelCountMismatchError": ("errors", "ChannelCountMismatchError"),
    "CorruptDataError": ("errors", "CorruptDataError"),
    "DivideByZeroError": ("errors", "DivideByZeroError"),
    "FormatMismatchError": ("errors", "FormatMismatchError"),
    "InvalidArgumentError": ("errors", "InvalidArgumentError"),
    "InvalidDimensionError": ("errors", "InvalidDimensionError"),
    "InvalidStateError": ("errors", "InvalidStateError"),
    "IoError": ("errors", "IoError"),
    "OutOfRangeError": ("errors", "OutOfRangeError"),
    "SizeMismatchError": ("errors", "SizeMismatchError"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin delegation
    if name in _LAZY_SUBMODULES:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module

    target = _LAZY_EXPORTS.get(name)
    if target is not None:
        module_name, attr = target
        module = import_module(f"{__name__}.{module_name}")
        value = getattr(module, attr)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
