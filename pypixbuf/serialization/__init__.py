from __future__ import annotations

from .binary import BufferHeader, from_binary, load_buffer, read_header, save_buffer, to_binary

__all__ = ["BufferHeader", "from_binary", "load_buffer", "read_header", "save_buffer", "to_binary"]
