from __future__ import annotations

import pytest

from pypixbuf.buffer import PixelBuffer
from pypixbuf.errors import ChannelCountMismatchError, InvalidArgumentError, OutOfRangeError


def test_get_set_round_trip_for_every_coordinate() -> None:
    buf = PixelBuffer(3, 2, 2, "XY")
    for y in range(2):
        for x in range(3):
            for c in range(2):
                v = (x * 40 + y * 20 + c) % 256
                buf.set(x, y, c, v)
                assert buf.get(x, y, c) == v


@pytest.mark.parametrize(
    "coord",
    [(-1, 0, 0), (3, 0, 0), (0, -1, 0), (0, 2, 0), (0, 0, -1), (0, 0, 2)],
)
def test_out_of_range_access(coord) -> None:
    buf = PixelBuffer.filled(3, 2, 2, "XY", 1)
    with pytest.raises(OutOfRangeError):
        buf.get(*coord)
    with pytest.raises(OutOfRangeError):
        buf.set(*coord, 5)
    with pytest.raises(IndexError):
        buf[coord]
    assert buf.data == bytes([1]) * 12


def test_empty_buffer_has_no_valid_coordinates() -> None:
    with pytest.raises(OutOfRangeError):
        PixelBuffer().get(0, 0, 0)


def test_set_rejects_out_of_range_value() -> None:
    buf = PixelBuffer(1, 1, 1, "GRAY")
    with pytest.raises(InvalidArgumentError):
        buf.set(0, 0, 0, 256)
    assert buf.get(0, 0, 0) == 0


def test_item_access_is_bounds_checked_alias() -> None:
    buf = PixelBuffer(4, 3, 3, "RGB")
    buf[1, 0, 1] = 150
    assert buf[1, 0, 1] == 150
    assert buf.get(1, 0, 1) == 150
    with pytest.raises(TypeError):
        buf[1, 0]


def test_pixel_access() -> None:
    buf = PixelBuffer(2, 2, 3, "RGB")
    buf.set_pixel(1, 1, (10, 20, 30))
    assert buf.get_pixel(1, 1) == (10, 20, 30)
    assert buf.get_pixel(0, 0) == (0, 0, 0)
    with pytest.raises(ChannelCountMismatchError):
        buf.set_pixel(0, 0, (1, 2))
    with pytest.raises(OutOfRangeError):
        buf.get_pixel(2, 0)


def test_model_is_an_opaque_label() -> None:
    buf = PixelBuffer(1, 1, 1, "GRAY")
    buf.set_model("my-label")
    assert buf.model == "my-label"
    with pytest.raises(TypeError):
        buf.set_model(3)


def test_model_must_be_utf8_encodable() -> None:
    with pytest.raises(InvalidArgumentError):
        PixelBuffer(1, 1, 1, "\ud800")
    with pytest.raises(InvalidArgumentError):
        PixelBuffer.filled(1, 1, 1, "a\udcff", 0)
    buf = PixelBuffer(1, 1, 1, "GRAY")
    with pytest.raises(InvalidArgumentError):
        buf.set_model("\ud800")
    assert buf.model == "GRAY"
