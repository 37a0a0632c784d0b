"""Small parameter validation helpers.

These helpers are shared by the buffer, the numpy kernels and the config
loader. They raise the `pypixbuf.errors` taxonomy for out-of-domain values and
plain `TypeError` for wrong types.
"""

from __future__ import annotations

import math
from numbers import Integral, Real

from pypixbuf.constants import SAMPLE_MAX, SAMPLE_MIN
from pypixbuf.errors import InvalidArgumentError, InvalidDimensionError


def _is_integral(value: object) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


def check_parameter(
    param: Real,
    low: Real | None = None,
    high: Real | None = None,
    *,
    param_name: str = "parameter",
    include_left: bool = True,
    include_right: bool = True,
) -> None:
    """Validate a numeric parameter is within a given range.

    Parameters
    ----------
    param:
        The numeric value to validate.
    low / high:
        Optional bounds. When `None`, the bound is not checked.
    include_left / include_right:
        Whether the comparison is inclusive.
    param_name:
        Used in error messages.
    """

    if not isinstance(param, Real) or isinstance(param, bool):
        raise TypeError(f"{param_name} must be a number, got {type(param).__name__}")

    if low is not None and high is not None and low > high:
        raise ValueError(f"Invalid bounds for {param_name}: low={low} > high={high}")

    if low is not None:
        if include_left:
            if param < low:
                raise InvalidArgumentError(f"{param_name} must be >= {low}, got {param}")
        else:
            if param <= low:
                raise InvalidArgumentError(f"{param_name} must be > {low}, got {param}")

    if high is not None:
        if include_right:
            if param > high:
                raise InvalidArgumentError(f"{param_name} must be <= {high}, got {param}")
        else:
            if param >= high:
                raise InvalidArgumentError(f"{param_name} must be < {high}, got {param}")


def check_dimension(value: object, *, name: str) -> int:
    """Return `value` as an int, rejecting non-integers and negative sizes."""

    if not _is_integral(value):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    dim = int(value)  # type: ignore[arg-type]
    if dim < 0:
        raise InvalidDimensionError(f"{name} must be non-negative, got {dim}")
    return dim


def check_sample(value: object, *, name: str = "value") -> int:
    """Return `value` as an int sample in ``[0, 255]``."""

    if not _is_integral(value):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    check_parameter(int(value), SAMPLE_MIN, SAMPLE_MAX, param_name=name)  # type: ignore[arg-type]
    return int(value)  # type: ignore[arg-type]


def check_integer_scalar(value: object, *, name: str = "scalar") -> int:
    if not _is_integral(value):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return int(value)  # type: ignore[arg-type]


def check_real_scalar(value: object, *, name: str = "factor") -> float:
    """Return `value` as a finite float."""

    if not isinstance(value, Real) or isinstance(value, bool):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    out = float(value)
    if not math.isfinite(out):
        raise InvalidArgumentError(f"{name} must be finite, got {out}")
    return out
