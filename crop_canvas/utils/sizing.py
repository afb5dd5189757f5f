"""
Aspect-ratio sizing helpers: contain-fit boxes and rotated bounding boxes.
"""

from __future__ import annotations

import math
from typing import Tuple

from crop_canvas.models.transform import AspectBox


def _is_valid_size(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def get_contain_sizes(box: AspectBox) -> Tuple[float | None, float | None]:
    """
    Fit the box inside its known sides while keeping aspect_ratio.

    With both sides known the side that would break the ratio shrinks; with
    one side known the other is derived. Unknown or invalid sides (None,
    non-finite, zero, negative) pass through unchanged.
    """
    aspect_ratio = box.aspect_ratio
    width = box.width
    height = box.height

    if _is_valid_size(width) and _is_valid_size(height):
        if height * aspect_ratio > width:
            height = width / aspect_ratio
        else:
            width = height * aspect_ratio
    elif _is_valid_size(width):
        height = width / aspect_ratio
    elif _is_valid_size(height):
        width = height * aspect_ratio

    return width, height


def get_rotated_sizes(box: AspectBox, degree: float, reversed: bool = False) -> Tuple[float, float]:
    """
    Axis-aligned bounding box of a width x height rectangle rotated by degree.

    In reversed mode width/height are an already rotated bounding box and the
    result is the unrotated rectangle with box.aspect_ratio that produces it.
    """
    arc = math.radians(abs(degree) % 90)
    sin_arc = math.sin(arc)
    cos_arc = math.cos(arc)

    if not reversed:
        new_width = box.width * cos_arc + box.height * sin_arc
        new_height = box.width * sin_arc + box.height * cos_arc
    else:
        new_width = box.width / (cos_arc + sin_arc / box.aspect_ratio)
        new_height = new_width / box.aspect_ratio

    return new_width, new_height
