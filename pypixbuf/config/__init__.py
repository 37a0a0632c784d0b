from __future__ import annotations

from .io import BufferConfig, load_buffer_config, load_config

__all__ = ["BufferConfig", "load_buffer_config", "load_config"]
