"""
EXIF orientation to transform mapping, and CSS transform strings.
"""

from __future__ import annotations

from crop_canvas.models.transform import TransformDescriptor, is_number

# EXIF orientation -> (rotate, scale_x, scale_y)
_ORIENTATION_TRANSFORMS: dict[int, tuple[float, float, float]] = {
    2: (0, -1, 1),  # flip horizontal
    3: (-180, 1, 1),
    4: (0, 1, -1),  # flip vertical
    5: (90, 1, -1),  # transpose
    6: (90, 1, 1),
    7: (90, -1, 1),  # transverse
    8: (-90, 1, 1),
}


def parse_orientation(orientation: int | None) -> TransformDescriptor:
    """Transform that displays an image with the given EXIF orientation upright."""
    rotate, scale_x, scale_y = _ORIENTATION_TRANSFORMS.get(orientation or 1, (0, 1, 1))
    return TransformDescriptor(rotate=rotate, scale_x=scale_x, scale_y=scale_y)


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def get_transforms(transform: TransformDescriptor) -> str:
    """
    Render the transform as a CSS transform list.

    Rotation comes before scaling, matching the order used when compositing.
    """
    parts: list[str] = []
    if is_number(transform.translate_x) and transform.translate_x != 0:
        parts.append(f"translateX({_format_number(transform.translate_x)}px)")
    if is_number(transform.translate_y) and transform.translate_y != 0:
        parts.append(f"translateY({_format_number(transform.translate_y)}px)")
    if is_number(transform.rotate) and transform.rotate != 0:
        parts.append(f"rotate({_format_number(transform.rotate)}deg)")
    if is_number(transform.scale_x) and transform.scale_x != 1:
        parts.append(f"scaleX({_format_number(transform.scale_x)})")
    if is_number(transform.scale_y) and transform.scale_y != 1:
        parts.append(f"scaleY({_format_number(transform.scale_y)})")
    return " ".join(parts) if parts else "none"
