"""Raw binary persistence for `PixelBuffer`.

Layout (little-endian, no padding)::

    int32  width
    int32  height
    int32  channels
    uint64 model length
    bytes  model (UTF-8, not null-terminated)
    bytes  samples (width * height * channels)

Writes are not atomic: a failure mid-write leaves a truncated file behind.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pypixbuf.buffer import PixelBuffer
from pypixbuf.constants import HEADER_SIZE, HEADER_STRUCT, MODEL_ENCODING
from pypixbuf.errors import CorruptDataError, IoError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BufferHeader:
    width: int
    height: int
    channels: int
    model: str

    @property
    def payload_size(self) -> int:
        """Number of sample bytes that follow the header."""
        return self.width * self.height * self.channels


def _remaining(stream: BinaryIO) -> int:
    pos = stream.tell()
    end = stream.seek(0, io.SEEK_END)
    stream.seek(pos)
    return end - pos


def _read_exact(stream: BinaryIO, n: int, *, what: str) -> bytes:
    # Lengths come from an untrusted header; never allocate past the end of the file.
    if n > _remaining(stream):
        raise CorruptDataError(f"Unexpected end of data reading {what}: wanted {n} bytes")
    chunk = stream.read(n)
    if len(chunk) != n:
        raise CorruptDataError(
            f"Unexpected end of data reading {what}: wanted {n} bytes, got {len(chunk)}"
        )
    return chunk


def _read_header(stream: BinaryIO) -> BufferHeader:
    raw = _read_exact(stream, HEADER_SIZE, what="header")
    width, height, channels, model_len = HEADER_STRUCT.unpack(raw)
    if width < 0 or height < 0 or channels < 0:
        raise CorruptDataError(f"Negative dimension in header: {width}x{height}x{channels}")

    model_raw = _read_exact(stream, model_len, what="model")
    try:
        model = model_raw.decode(MODEL_ENCODING)
    except UnicodeDecodeError as exc:
        raise CorruptDataError(f"Model label is not valid {MODEL_ENCODING}") from exc
    return BufferHeader(width=width, height=height, channels=channels, model=model)


def _read_buffer(stream: BinaryIO) -> PixelBuffer:
    header = _read_header(stream)
    payload = _read_exact(stream, header.payload_size, what="pixel data")
    if stream.read(1):
        logger.debug("Ignoring trailing bytes after %s", header)
    return PixelBuffer.from_bytes(header.width, header.height, header.channels, header.model, payload)


def to_binary(buf: PixelBuffer) -> bytes:
    """Serialize `buf` into the raw layout in memory."""

    model = buf.model.encode(MODEL_ENCODING)
    return HEADER_STRUCT.pack(buf.width, buf.height, buf.channels, len(model)) + model + buf.data


def from_binary(data: bytes | bytearray | memoryview) -> PixelBuffer:
    """Parse a buffer from bytes produced by `to_binary`."""

    view = memoryview(data).cast("B")
    if view.nbytes < HEADER_SIZE:
        raise CorruptDataError(f"Unexpected end of data reading header: got {view.nbytes} bytes")
    width, height, channels, model_len = HEADER_STRUCT.unpack_from(view, 0)
    if width < 0 or height < 0 or channels < 0:
        raise CorruptDataError(f"Negative dimension in header: {width}x{height}x{channels}")

    start = HEADER_SIZE
    end = start + model_len
    if end > view.nbytes:
        raise CorruptDataError("Unexpected end of data reading model")
    try:
        model = bytes(view[start:end]).decode(MODEL_ENCODING)
    except UnicodeDecodeError as exc:
        raise CorruptDataError(f"Model label is not valid {MODEL_ENCODING}") from exc

    n = width * height * channels
    if end + n > view.nbytes:
        raise CorruptDataError(
            f"Unexpected end of data reading pixel data: wanted {n} bytes, got {view.nbytes - end}"
        )
    return PixelBuffer.from_bytes(width, height, channels, model, bytes(view[end : end + n]))


def save_buffer(path: str | Path, buf: PixelBuffer) -> None:
    """Write `buf` to `path`. Parent directories are not created."""

    out_path = Path(path)
    payload = to_binary(buf)
    try:
        with out_path.open("wb") as f:
            f.write(payload)
    except OSError as exc:
        raise IoError(f"Unable to write {str(out_path)!r}: {exc}") from exc
    logger.debug("Saved %r to %s", buf, out_path)


def load_buffer(path: str | Path) -> PixelBuffer:
    """Read a buffer written by `save_buffer`."""

    in_path = Path(path)
    try:
        with in_path.open("rb") as f:
            buf = _read_buffer(f)
    except OSError as exc:
        raise IoError(f"Unable to read {str(in_path)!r}: {exc}") from exc
    logger.debug("Loaded %r from %s", buf, in_path)
    return buf


def read_header(path: str | Path) -> BufferHeader:
    """Read only the header of a saved buffer, without its pixel data."""

    in_path = Path(path)
    try:
        with in_path.open("rb") as f:
            return _read_header(f)
    except OSError as exc:
        raise IoError(f"Unable to read {str(in_path)!r}: {exc}") from exc
