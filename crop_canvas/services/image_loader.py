"""
Image loading service: data URL / bytes -> decoded handle + upright transform.

Responsibilities:
- Decode data URLs into bytes.
- Read the EXIF orientation of JPEG payloads and map it onto a transform.
- Reset the embedded orientation when the consumer platform applies it itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from PIL import UnidentifiedImageError
from PyQt6.QtGui import QImage

from crop_canvas.models.transform import TransformDescriptor
from crop_canvas.utils.data_url import decode_data_url, encode_as_jpeg_data_url, is_data_url
from crop_canvas.utils.exif import JPEG_SOI, read_orientation
from crop_canvas.utils.imaging import decode_image, natural_size, to_qimage
from crop_canvas.utils.transforms import parse_orientation

LOGGER = logging.getLogger(__name__)


@dataclass
class LoadedImage:
    """Decoded image plus the transform that shows it upright."""

    image: QImage
    orientation: int | None = None
    transform: TransformDescriptor = field(default_factory=TransformDescriptor)
    data_url: str | None = None

    @property
    def natural_width(self) -> int:
        return natural_size(self.image)[0]

    @property
    def natural_height(self) -> int:
        return natural_size(self.image)[1]


def load_image(
    data: str | bytes,
    check_orientation: bool = True,
    suppress_embedded_orientation: bool = False,
) -> LoadedImage:
    """
    Decode a data URL or raw image bytes.

    Only JPEG payloads are inspected for orientation. When the embedded
    orientation is suppressed the returned data_url is re-encoded from the
    rewritten bytes so consumers see orientation 1.

    Raises ValueError for malformed base64 or undecodable images.
    """
    data_url: str | None = None
    if isinstance(data, str):
        if not is_data_url(data):
            raise ValueError("Expected a data URL string")
        data_url = data
        buffer = bytearray(decode_data_url(data))
    else:
        buffer = bytearray(data)

    orientation: int | None = None
    transform = TransformDescriptor()
    if check_orientation and buffer[:2] == JPEG_SOI:
        orientation = read_orientation(buffer, suppress_embedded_orientation=suppress_embedded_orientation)
        if orientation is not None:
            LOGGER.debug("EXIF orientation %d", orientation)
            transform = parse_orientation(orientation)
            if suppress_embedded_orientation:
                data_url = encode_as_jpeg_data_url(buffer)

    try:
        decoded = decode_image(bytes(buffer))
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError(f"Could not decode image payload: {exc}") from exc

    return LoadedImage(
        image=to_qimage(decoded),
        orientation=orientation,
        transform=transform,
        data_url=data_url,
    )
