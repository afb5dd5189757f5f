"""
Application bootstrap helpers.

Responsibilities:
- Locate/load configuration.
- Configure logging.
- Resolve the render settings and the orientation policy passed to call sites.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from crop_canvas.config.loader import load_config
from crop_canvas.logging.setup import setup_logging
from crop_canvas.models.transform import RenderOptions, SizeConstraints
from crop_canvas.utils.platform import orientation_auto_applied

ENV_CONFIG_DIR = "CROP_CANVAS_CONFIG_DIR"


@dataclass
class AppContext:
    """Resolved settings shared by the loader, compositor and CLI."""

    config: dict[str, Any]
    config_path: Path
    render_options: RenderOptions
    constraints: SizeConstraints
    check_orientation: bool
    suppress_embedded_orientation: bool
    jpeg_quality: int


def default_config_dir() -> Path:
    """Return the directory to hold config files, honoring env override."""
    override = os.getenv(ENV_CONFIG_DIR)
    if override:
        return Path(override)
    return Path.home() / ".crop_canvas"


def default_config_path() -> Path:
    return default_config_dir() / "config.toml"


def render_options_from_config(config: dict[str, Any]) -> RenderOptions:
    render = config.get("render", {})
    return RenderOptions(
        fill_color=render.get("fill_color") or None,
        image_smoothing_enabled=bool(render.get("image_smoothing_enabled", True)),
        image_smoothing_quality=render.get("image_smoothing_quality") or None,
    )


def constraints_from_config(config: dict[str, Any]) -> SizeConstraints:
    constraints = config.get("constraints", {})
    return SizeConstraints(
        max_width=constraints.get("max_width") or None,
        max_height=constraints.get("max_height") or None,
        min_width=constraints.get("min_width") or None,
        min_height=constraints.get("min_height") or None,
    )


def resolve_suppress_orientation(config: dict[str, Any]) -> bool:
    """Explicit flag, or forced on when the configured user agent auto-orients JPEGs."""
    orientation = config.get("orientation", {})
    if orientation.get("suppress_embedded"):
        return True
    return orientation_auto_applied(orientation.get("user_agent"))


def initialize_app(config_path: Path | None = None, log_dir: Path | None = None) -> AppContext:
    """Load configuration, set up logging, and return an AppContext."""
    config_path = config_path or default_config_path()
    config = load_config(config_path)

    setup_logging(
        log_dir=log_dir or config_path.parent / "logs",
        level=str(config.get("logging", {}).get("level", "INFO")),
    )

    return AppContext(
        config=config,
        config_path=config_path,
        render_options=render_options_from_config(config),
        constraints=constraints_from_config(config),
        check_orientation=bool(config.get("orientation", {}).get("check", True)),
        suppress_embedded_orientation=resolve_suppress_orientation(config),
        jpeg_quality=int(config.get("output", {}).get("jpeg_quality", 92)),
    )
