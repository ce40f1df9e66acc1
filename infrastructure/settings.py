"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

from core.services.catalog import SUPPORTED_EXTENSIONS

DEFAULT_SETTINGS: dict[str, Any] = {
    "catalog": {"extensions": sorted(SUPPORTED_EXTENSIONS)},
    "preview": {"max_side": 2400, "cache_size": 16},
    "logging": {"dir": None, "level": "INFO"},
    "window": {"width": 1200, "height": 800},
}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay `override` on a copy of `base`."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access.

    Keys missing from the file fall back to `defaults`.
    """

    def __init__(
        self, settings_path: str | Path, defaults: dict[str, Any] | None = None
    ) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise FileNotFoundError(f"settings.json not found: {self._path}")
        with self._path.open("r", encoding="utf-8") as f:
            loaded = json.load(f)
        if not isinstance(loaded, dict):
            raise ValueError(f"settings.json must contain an object: {self._path}")
        self._data = _merge(DEFAULT_SETTINGS if defaults is None else defaults, loaded)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node
