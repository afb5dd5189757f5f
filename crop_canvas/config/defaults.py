"""
Default configuration values.
"""

from __future__ import annotations

DEFAULTS: dict[str, object] = {
    "render": {
        "fill_color": "transparent",
        "image_smoothing_enabled": True,
        "image_smoothing_quality": "low",
    },
    # 0 means unbounded for maximums and no minimum
    "constraints": {"max_width": 0, "max_height": 0, "min_width": 0, "min_height": 0},
    "orientation": {"check": True, "suppress_embedded": False, "user_agent": ""},
    "output": {"jpeg_quality": 92},
    "logging": {"level": "info"},
}
