"""
Command-line entry point to render one image through the crop canvas pipeline.

Usage:
    python -m crop_canvas.render_image INPUT OUTPUT [--rotate DEG] [--scale-x F] [--max-width PX]
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import replace
from pathlib import Path

from crop_canvas.app_context import initialize_app
from crop_canvas.models.transform import TransformDescriptor
from crop_canvas.services.compositor import SurfaceAllocationError, canvas_box_for, render
from crop_canvas.services.image_loader import load_image
from crop_canvas.utils.imaging import surface_to_jpeg
from crop_canvas.utils.transforms import get_transforms

LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rotate, flip and resize an image onto a JPEG canvas.")
    parser.add_argument("input", type=Path, help="Source image file.")
    parser.add_argument("output", type=Path, help="Destination JPEG file.")
    parser.add_argument("--config", type=Path, help="TOML config file (defaults to the user config).")
    parser.add_argument("--rotate", type=float, default=0, help="Extra rotation in degrees.")
    parser.add_argument("--scale-x", type=float, default=1, help="Horizontal scale (-1 flips).")
    parser.add_argument("--scale-y", type=float, default=1, help="Vertical scale (-1 flips).")
    parser.add_argument("--max-width", type=float, help="Maximum output width.")
    parser.add_argument("--max-height", type=float, help="Maximum output height.")
    parser.add_argument("--min-width", type=float, help="Minimum output width.")
    parser.add_argument("--min-height", type=float, help="Minimum output height.")
    parser.add_argument("--fill-color", help="Background color, e.g. '#ffffff'.")
    parser.add_argument(
        "--ignore-orientation", action="store_true", help="Do not apply the EXIF orientation."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    context = initialize_app(config_path=args.config)

    constraints = replace(
        context.constraints,
        **{
            key: value
            for key, value in {
                "max_width": args.max_width,
                "max_height": args.max_height,
                "min_width": args.min_width,
                "min_height": args.min_height,
            }.items()
            if value is not None
        },
    )
    options = context.render_options
    if args.fill_color:
        options = replace(options, fill_color=args.fill_color)

    try:
        loaded = load_image(
            args.input.read_bytes(),
            check_orientation=context.check_orientation and not args.ignore_orientation,
            suppress_embedded_orientation=context.suppress_embedded_orientation,
        )
    except (OSError, ValueError) as exc:
        LOGGER.error("Could not load %s: %s", args.input, exc)
        return 1

    transform = loaded.transform.combine(
        TransformDescriptor(rotate=args.rotate, scale_x=args.scale_x, scale_y=args.scale_y)
    )
    natural_box = canvas_box_for(loaded.natural_width, loaded.natural_height, transform.rotate)
    LOGGER.info("Rendering %s with transform %s", args.input, get_transforms(transform))

    try:
        surface = render(loaded.image, transform, natural_box, constraints, options)
    except SurfaceAllocationError as exc:
        LOGGER.error("%s", exc)
        return 1

    args.output.write_bytes(surface_to_jpeg(surface, quality=context.jpeg_quality))
    LOGGER.info("Wrote %dx%d image to %s", surface.width(), surface.height(), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
