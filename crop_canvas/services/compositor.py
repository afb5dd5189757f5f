"""
Raster compositing of a decoded image onto a new Qt surface.

The surface is clamped between the min/max constraints (ratio preserved), filled
with the background color, and the image is drawn centered with rotation applied
before scaling.
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

from PyQt6.QtCore import QRect, Qt
from PyQt6.QtGui import QColor, QImage, QPainter

from crop_canvas.models.transform import (
    AspectBox,
    RenderOptions,
    SizeConstraints,
    TransformDescriptor,
)
from crop_canvas.utils.imaging import ImageHandle, natural_size, to_qimage
from crop_canvas.utils.sizing import get_contain_sizes, get_rotated_sizes

LOGGER = logging.getLogger(__name__)

SMOOTHING_QUALITIES = {"low", "medium", "high"}


class SurfaceAllocationError(RuntimeError):
    """The clamped output size cannot back a raster surface."""


def _is_odd_quarter_turn(degree: float) -> bool:
    return int(abs(degree) // 90) % 2 == 1


def canvas_box_for(image_width: float, image_height: float, rotate: float = 0) -> AspectBox:
    """
    Natural canvas size of an image shown under `rotate` degrees.

    Odd quarter turns swap the image sides first, so a 90 degree canvas is
    portrait for a landscape image.
    """
    if _is_odd_quarter_turn(rotate):
        image_width, image_height = image_height, image_width
    width, height = get_rotated_sizes(
        AspectBox(aspect_ratio=image_width / image_height, width=image_width, height=image_height),
        rotate,
    )
    return AspectBox(aspect_ratio=width / height, width=width, height=height)


def clamp_size(natural_box: AspectBox, constraints: SizeConstraints) -> Tuple[float, float]:
    """Clamp the natural size between min/max contain sizes, per axis."""
    max_width, max_height = get_contain_sizes(
        AspectBox(
            aspect_ratio=natural_box.aspect_ratio,
            width=constraints.max_width or math.inf,
            height=constraints.max_height or math.inf,
        )
    )
    min_width, min_height = get_contain_sizes(
        AspectBox(
            aspect_ratio=natural_box.aspect_ratio,
            width=constraints.min_width or 0,
            height=constraints.min_height or 0,
        )
    )
    width = min(max_width, max(min_width, natural_box.width))
    height = min(max_height, max(min_height, natural_box.height))
    return width, height


def compute_draw_rect(
    width: float, height: float, transform: TransformDescriptor, image_aspect_ratio: float
) -> Tuple[int, int, int, int]:
    """
    Integer (x, y, w, h) of the image rectangle in the centered, transformed frame.

    When rotated, the rectangle is the unrotated image size whose rotated
    bounding box is width x height. Exact only when width x height came from
    an image with image_aspect_ratio under the same rotation.
    """
    draw_width, draw_height = width, height
    if transform.rotated:
        draw_width, draw_height = get_rotated_sizes(
            AspectBox(aspect_ratio=image_aspect_ratio, width=width, height=height),
            transform.rotate,
            reversed=True,
        )
    return (
        math.floor(-draw_width / 2),
        math.floor(-draw_height / 2),
        math.floor(draw_width),
        math.floor(draw_height),
    )


def _allocate_surface(width: float, height: float) -> QImage:
    if not (math.isfinite(width) and math.isfinite(height)):
        raise SurfaceAllocationError(f"Could not allocate output surface of {width}x{height}")
    surface_width, surface_height = int(width), int(height)
    if surface_width <= 0 or surface_height <= 0:
        raise SurfaceAllocationError(
            f"Could not allocate output surface of {surface_width}x{surface_height}"
        )
    surface = QImage(surface_width, surface_height, QImage.Format.Format_ARGB32_Premultiplied)
    if surface.isNull():
        raise SurfaceAllocationError(
            f"Could not allocate output surface of {surface_width}x{surface_height}"
        )
    surface.fill(Qt.GlobalColor.transparent)
    return surface


def _fill_color(options: RenderOptions) -> QColor:
    if not options.fill_color:
        return QColor(Qt.GlobalColor.transparent)
    color = QColor(options.fill_color)
    if not color.isValid():
        LOGGER.warning("Ignoring invalid fill color %r", options.fill_color)
        return QColor(Qt.GlobalColor.transparent)
    return color


def _apply_smoothing(painter: QPainter, options: RenderOptions) -> None:
    enabled = bool(options.image_smoothing_enabled)
    painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform, enabled)
    quality = options.image_smoothing_quality
    if not quality:
        return
    if quality not in SMOOTHING_QUALITIES:
        LOGGER.warning("Ignoring unknown image smoothing quality %r", quality)
        return
    # Qt has a single smoothing filter; medium/high also antialias rotated edges
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, enabled and quality != "low")


def render(
    image: ImageHandle,
    transform: TransformDescriptor,
    natural_box: AspectBox,
    constraints: SizeConstraints | None = None,
    options: RenderOptions | None = None,
) -> QImage:
    """
    Draw `image` onto a new surface sized from `natural_box` and `constraints`.

    Raises SurfaceAllocationError when the clamped size is not a positive finite size.
    """
    constraints = constraints or SizeConstraints()
    options = options or RenderOptions()

    width, height = clamp_size(natural_box, constraints)
    surface = _allocate_surface(width, height)
    source = to_qimage(image)

    image_aspect_ratio = transform.aspect_ratio
    if not image_aspect_ratio:
        image_width, image_height = natural_size(image)
        if image_width > 0 and image_height > 0:
            image_aspect_ratio = image_width / image_height
        else:
            image_aspect_ratio = natural_box.aspect_ratio

    x, y, draw_width, draw_height = compute_draw_rect(width, height, transform, image_aspect_ratio)
    LOGGER.debug(
        "Render %dx%d surface: rotate=%s scale=(%s, %s) draw=%dx%d",
        surface.width(),
        surface.height(),
        transform.rotate,
        transform.scale_x,
        transform.scale_y,
        draw_width,
        draw_height,
    )

    painter = QPainter(surface)
    try:
        painter.fillRect(0, 0, surface.width(), surface.height(), _fill_color(options))
        painter.save()
        painter.translate(width / 2, height / 2)
        if transform.rotated:
            painter.rotate(transform.rotate)
        if transform.scaled:
            painter.scale(transform.scale_x, transform.scale_y)
        _apply_smoothing(painter, options)
        painter.drawImage(QRect(x, y, draw_width, draw_height), source)
        painter.restore()
    finally:
        painter.end()
    return surface
