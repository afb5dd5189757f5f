"""
Configuration loader: TOML file merged over DEFAULTS, then validated.
"""

from __future__ import annotations

import copy
import tomllib
from pathlib import Path
from typing import Any

from crop_canvas.config.defaults import DEFAULTS

_QUALITIES = {"low", "medium", "high"}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two dictionaries without mutating the originals."""
    merged: dict[str, Any] = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _validate(config: dict[str, Any], path: Path) -> None:
    quality = config["render"].get("image_smoothing_quality")
    if quality and quality not in _QUALITIES:
        raise ValueError(f"Invalid image_smoothing_quality {quality!r} in {path}")

    for key, value in config["constraints"].items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise ValueError(f"Constraint {key} must be a non-negative number in {path}")

    jpeg_quality = config["output"].get("jpeg_quality")
    if isinstance(jpeg_quality, bool) or not isinstance(jpeg_quality, int) or not 1 <= jpeg_quality <= 100:
        raise ValueError(f"output.jpeg_quality must be an integer in 1..100 in {path}")


def load_config(path: Path) -> dict[str, Any]:
    """
    Load a TOML config file and merge it over defaults.
    Missing files return defaults; malformed or out-of-range values raise ValueError.
    """
    if path.is_dir():
        raise IsADirectoryError(f"Config path points to a directory: {path}")

    user_config: dict[str, Any] = {}
    if path.exists():
        try:
            with path.open("rb") as fh:
                user_config = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid config file {path}: {exc}") from exc

    merged = _deep_merge(DEFAULTS, user_config)
    _validate(merged, path)
    return merged
