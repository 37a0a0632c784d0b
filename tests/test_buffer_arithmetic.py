from __future__ import annotations

import numpy as np
import pytest

from pypixbuf.buffer import PixelBuffer
from pypixbuf.errors import (
    ChannelCountMismatchError,
    DivideByZeroError,
    FormatMismatchError,
    InvalidArgumentError,
)


@pytest.fixture
def big() -> PixelBuffer:
    return PixelBuffer.filled(4, 3, 3, "RGB", 10)


@pytest.fixture
def small() -> PixelBuffer:
    return PixelBuffer.filled(2, 2, 3, "RGB", 200)


def test_add_zero_pads_smaller_operand(big, small) -> None:
    out = big + small
    assert (out.width, out.height, out.channels, out.model) == (4, 3, 3, "RGB")
    assert out.get_pixel(0, 0) == (210, 210, 210)
    assert out.get_pixel(1, 1) == (210, 210, 210)
    assert out.get_pixel(3, 2) == (10, 10, 10)
    assert out.get_pixel(2, 0) == (10, 10, 10)


def test_subtract_and_abs_diff_clamp(big, small) -> None:
    assert (big - small).get_pixel(0, 0) == (0, 0, 0)
    assert (big - small).get_pixel(3, 2) == (10, 10, 10)
    assert (big ^ small).get_pixel(0, 0) == (190, 190, 190)
    assert (small - big).get_pixel(0, 0) == (190, 190, 190)
    assert (small - big).get_pixel(3, 2) == (0, 0, 0)


def test_binary_result_covers_union_of_extents() -> None:
    wide = PixelBuffer.filled(5, 1, 1, "GRAY", 1)
    tall = PixelBuffer.filled(1, 4, 1, "GRAY", 2)
    out = wide.add(tall)
    assert (out.width, out.height) == (5, 4)
    assert out.get(0, 0, 0) == 3
    assert out.get(4, 0, 0) == 1
    assert out.get(0, 3, 0) == 2
    assert out.get(4, 3, 0) == 0


def test_operands_are_not_mutated(big, small) -> None:
    _ = big + small
    assert big == PixelBuffer.filled(4, 3, 3, "RGB", 10)
    assert small == PixelBuffer.filled(2, 2, 3, "RGB", 200)


def test_compound_binary_ops_may_grow_lhs(small, big) -> None:
    lhs = small.copy()
    lhs += big
    assert (lhs.width, lhs.height) == (4, 3)
    assert lhs.get_pixel(0, 0) == (210, 210, 210)
    assert lhs.get_pixel(3, 2) == (10, 10, 10)

    lhs = small.copy()
    same = lhs.abs_diff(big, inplace=True)
    assert same is lhs
    assert lhs.get_pixel(0, 0) == (190, 190, 190)


@pytest.mark.parametrize(
    "other",
    [
        PixelBuffer.filled(4, 3, 1, "RGB", 1),
        PixelBuffer.filled(4, 3, 3, "BGR", 1),
        PixelBuffer.filled(4, 3, 1, "GRAY", 100),
    ],
)
def test_format_mismatch(big, other) -> None:
    for fn in (big.add, big.subtract, big.abs_diff):
        with pytest.raises(FormatMismatchError):
            fn(other)
    before = big.copy()
    with pytest.raises(FormatMismatchError):
        big += other
    assert big == before


def test_scalar_ops(big) -> None:
    assert (big + 50).data == bytes([60]) * 36
    assert (big - 50).data == bytes(36)
    assert (big ^ 50).data == bytes([40]) * 36
    assert (big + 1000).data == bytes([255]) * 36
    assert (big - (-300)).data == bytes([255]) * 36
    assert big.abs_diff_scalar(10**30).data == bytes([255]) * 36
    assert (50 + big).data == bytes([60]) * 36


def test_scalar_ops_in_place(big) -> None:
    out = big.add_scalar(5, inplace=True)
    assert out is big
    assert big.get(0, 0, 0) == 15
    big -= 20
    assert big.get(0, 0, 0) == 0
    big ^= 7
    assert big.get(3, 2, 2) == 7


def test_scalar_requires_integer(big) -> None:
    with pytest.raises(TypeError):
        big.add_scalar(1.5)
    with pytest.raises(TypeError):
        big + "5"


def test_multiply_truncates_then_clamps(big) -> None:
    assert (big * 1.5).data == bytes([15]) * 36
    assert (1.5 * big).data == bytes([15]) * 36
    assert (big * 0.99).data == bytes([9]) * 36
    assert (big * 100).data == bytes([255]) * 36
    assert (big * -2.0).data == bytes(36)


def test_divide(big) -> None:
    assert (big / 2.0).data == bytes([5]) * 36
    assert (big / 3).data == bytes([3]) * 36
    assert (big / 0.5).data == bytes([20]) * 36


def test_divide_by_zero_does_not_mutate(big) -> None:
    with pytest.raises(DivideByZeroError):
        big / 0.0
    with pytest.raises(ZeroDivisionError):
        big.divide(0, inplace=True)
    assert big.data == bytes([10]) * 36


def test_scale_rejects_non_finite(big) -> None:
    with pytest.raises(InvalidArgumentError):
        big.multiply(float("nan"))
    with pytest.raises(InvalidArgumentError):
        big.divide(float("inf"))


def test_scale_in_place(big) -> None:
    big *= 2.5
    assert big.get(0, 0, 0) == 25
    big /= 4.0
    assert big.get(0, 0, 0) == 6


def test_pixel_ops() -> None:
    img = PixelBuffer.filled(4, 3, 3, "RGB", 10)
    red = [50, 0, 0]
    more_red = img + red
    assert more_red.get_pixel(2, 1) == (60, 10, 10)
    assert (img - (20, 5, 0)).get_pixel(0, 0) == (0, 5, 10)
    assert (img ^ np.array([30, 10, 0])).get_pixel(3, 2) == (20, 0, 10)
    assert (red + img) == more_red


def test_pixel_ops_in_place() -> None:
    img = PixelBuffer.filled(1, 1, 3, "RGB", 100)
    img.add_pixel((200, 0, 1), inplace=True)
    assert img.get_pixel(0, 0) == (255, 100, 101)
    img -= [255, 255, 0]
    assert img.get_pixel(0, 0) == (0, 0, 101)


def test_pixel_length_must_match_channels() -> None:
    img = PixelBuffer.filled(2, 2, 3, "RGB", 10)
    with pytest.raises(ChannelCountMismatchError):
        img + [1, 2]
    with pytest.raises(ChannelCountMismatchError):
        img.subtract_pixel([1, 2, 3, 4], inplace=True)
    assert img.data == bytes([10]) * 12


def test_pixel_values_must_be_samples() -> None:
    img = PixelBuffer.filled(1, 1, 3, "RGB", 10)
    with pytest.raises(InvalidArgumentError):
        img.add_pixel([256, 0, 0])
