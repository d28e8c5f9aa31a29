from __future__ import annotations

"""
avrokit.core.config
===================

Construction-time policy for the schema object model.
- No external deps; optional JSON file loading.
- Small env overrides for convenience.
- A process-wide default instance used by builders that are not handed one.

If a config file path is not provided or not found, sane defaults are used.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

__all__ = [
    "SchemaConfig",
    "get_default_config",
    "set_default_config",
]

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def _parse_bool_env(name: str) -> bool | None:
    val = os.getenv(name)
    if val is None or not val.strip():
        return None
    low = val.strip().lower()
    if low in _TRUTHY:
        return True
    if low in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {val!r}")


def _try_load_json(path: Path | None) -> dict[str, Any]:
    if not path or not path.exists():
        return {}
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: config file must hold a JSON object")
    return data


# ---------------------------------------------------------------------------


@dataclass
class SchemaConfig:
    """Validation policy applied while schema graphs are being built."""

    # ---- Names
    strict_names: bool = True

    # ---- Fixed
    strict_fixed_size: bool = False
    max_fixed_size: int | None = None

    # ---- Methods ------------------------------------------------------------

    def __post_init__(self) -> None:
        if self.max_fixed_size is not None and self.max_fixed_size < 0:
            raise ValueError("max_fixed_size must be non-negative")

    # Loader
    @classmethod
    def load(cls, path: Path | str | None = None, *, overrides: dict[str, Any] | None = None) -> SchemaConfig:
        """
        Load config from JSON file (if provided), then apply env and overrides.

        Env overrides:
          - AVROKIT_STRICT_NAMES (bool flag)
          - AVROKIT_STRICT_FIXED_SIZE (bool flag)
          - AVROKIT_MAX_FIXED_SIZE (int)
        """
        data: dict[str, Any] = {}

        # File
        data.update(_try_load_json(Path(path) if path else None))

        # Env
        strict_names = _parse_bool_env("AVROKIT_STRICT_NAMES")
        if strict_names is not None:
            data["strict_names"] = strict_names
        strict_fixed = _parse_bool_env("AVROKIT_STRICT_FIXED_SIZE")
        if strict_fixed is not None:
            data["strict_fixed_size"] = strict_fixed
        if os.getenv("AVROKIT_MAX_FIXED_SIZE"):
            data["max_fixed_size"] = int(os.environ["AVROKIT_MAX_FIXED_SIZE"])

        # Overrides
        if overrides:
            data.update(overrides)

        return cls(**data)


_default_config: SchemaConfig | None = None


def get_default_config() -> SchemaConfig:
    global _default_config
    if _default_config is None:
        _default_config = SchemaConfig.load()
    return _default_config


def set_default_config(cfg: SchemaConfig | None) -> None:
    """Replace the process-wide default; None makes the next lookup reload from env."""
    global _default_config
    _default_config = cfg
