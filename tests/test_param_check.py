from __future__ import annotations

import numpy as np
import pytest

from pypixbuf.errors import InvalidArgumentError, InvalidDimensionError
from pypixbuf.utils.param_check import (
    check_dimension,
    check_parameter,
    check_real_scalar,
    check_sample,
)


def test_check_parameter_bounds() -> None:
    check_parameter(5, 0, 10, param_name="p")
    with pytest.raises(InvalidArgumentError):
        check_parameter(0, 0, param_name="p", include_left=False)
    with pytest.raises(InvalidArgumentError):
        check_parameter(10, high=10, param_name="p", include_right=False)
    with pytest.raises(ValueError):
        check_parameter(1, 5, 2)
    with pytest.raises(TypeError):
        check_parameter("1")


def test_check_dimension_and_sample_accept_numpy_ints() -> None:
    assert check_dimension(np.int32(3), name="w") == 3
    assert check_sample(np.uint8(255)) == 255
    with pytest.raises(InvalidDimensionError):
        check_dimension(-1, name="w")
    with pytest.raises(TypeError):
        check_sample(1.0)


def test_check_real_scalar() -> None:
    assert check_real_scalar(2) == 2.0
    with pytest.raises(InvalidArgumentError):
        check_real_scalar(float("-inf"))
    with pytest.raises(TypeError):
        check_real_scalar(False)
