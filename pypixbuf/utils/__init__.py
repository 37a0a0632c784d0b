"""Utility helpers for pypixbuf."""

from __future__ import annotations

from .jsonable import to_jsonable
from .optional_deps import optional_import, require
from .param_check import (
    check_dimension,
    check_integer_scalar,
    check_parameter,
    check_real_scalar,
    check_sample,
)

__all__ = [
    "check_dimension",
    "check_integer_scalar",
    "check_parameter",
    "check_real_scalar",
    "check_sample",
    "optional_import",
    "require",
    "to_jsonable",
]
