"""Constants shared across `pypixbuf` modules."""

from __future__ import annotations

import struct

# Model labels
DEFAULT_MODEL = "NONE"
MASK_MODEL = "BINARY"

# Sample range (unsigned 8-bit)
SAMPLE_MIN = 0
SAMPLE_MAX = 255

# Binary persistence header: int32 width, int32 height, int32 channels,
# uint64 model length. Always little-endian, no padding.
HEADER_STRUCT = struct.Struct("<iiiQ")
HEADER_SIZE = HEADER_STRUCT.size
MODEL_ENCODING = "utf-8"

# Threshold operator names accepted by `PixelBuffer.threshold`
THRESHOLD_OPS = ("<", "<=", ">", ">=", "==", "!=")

# Pillow mode <-> model label, keyed by channel count
PIL_MODE_BY_CHANNELS = {1: "L", 3: "RGB", 4: "RGBA"}
MODEL_BY_PIL_MODE = {"L": "GRAY", "RGB": "RGB", "RGBA": "RGBA"}
