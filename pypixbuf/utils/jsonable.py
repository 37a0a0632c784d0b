from __future__ import annotations

from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any

import numpy as np


def to_jsonable(value: Any) -> Any:
    """Convert buffer metadata into JSON-serializable values.

    - dataclass instances -> `dict` (then recursed)
    - `pathlib.Path` -> `str`
    - `numpy` scalars -> builtin Python scalars via `.item()`
    - `numpy.ndarray` -> nested Python lists via `.tolist()`
    - `bytes` -> list of ints
    - Recurses through `dict` / `list` / `tuple`
    """

    if is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(asdict(value))
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value
