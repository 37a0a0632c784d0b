from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from pypixbuf.constants import DEFAULT_MODEL
from pypixbuf.utils.param_check import check_dimension, check_sample


def load_config(path: str | Path) -> dict[str, Any]:
    """Load a config file into a Python dict.

    Supported formats:
    - JSON (.json) always
    - YAML (.yml/.yaml) only when PyYAML is installed
    """

    config_path = Path(path)
    suffix = str(config_path.suffix).lower()

    if suffix == ".json":
        with config_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    elif suffix in (".yml", ".yaml"):
        try:
            import yaml  # type: ignore[import-not-found]
        except Exception as exc:  # noqa: BLE001 - dependency boundary
            raise ImportError(
                "YAML config files require PyYAML.\n"
                "Install it via:\n"
                "  pip install 'pypixbuf[yaml]'"
            ) from exc

        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    else:
        raise ValueError(
            f"Unsupported config extension: {suffix!r} for {str(config_path)!r}. "
            "Supported: .json, .yml, .yaml."
        )

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(
            "Config must be an object/dict at the top level, "
            f"got {type(data).__name__} from {str(config_path)!r}."
        )

    return dict(data)


@dataclass(frozen=True)
class BufferConfig:
    """Shape, model and fill value of a buffer to create."""

    width: int = 0
    height: int = 0
    channels: int = 0
    model: str = DEFAULT_MODEL
    fill: int = 0

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "BufferConfig":
        if not isinstance(raw, Mapping):
            raise ValueError(f"config must be a dict/object, got {type(raw).__name__}")

        known = {"width", "height", "channels", "model", "fill"}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValueError(f"Unknown buffer config keys: {unknown}. Allowed: {sorted(known)}")

        model = raw.get("model", DEFAULT_MODEL)
        if not isinstance(model, str):
            raise ValueError(f"model must be a string, got {model!r}")

        return cls(
            width=check_dimension(raw.get("width", 0), name="width"),
            height=check_dimension(raw.get("height", 0), name="height"),
            channels=check_dimension(raw.get("channels", 0), name="channels"),
            model=model,
            fill=check_sample(raw.get("fill", 0), name="fill"),
        )

    def merged(self, overrides: Mapping[str, Any]) -> "BufferConfig":
        """Return a copy with non-None `overrides` applied and re-validated."""

        values = {
            "width": self.width,
            "height": self.height,
            "channels": self.channels,
            "model": self.model,
            "fill": self.fill,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return BufferConfig.from_dict(values)


def load_buffer_config(path: str | Path) -> BufferConfig:
    return BufferConfig.from_dict(load_config(path))
