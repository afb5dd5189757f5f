"""
Image handle adapters: Pillow <-> Qt conversion, natural sizes, surface encoding.
"""

from __future__ import annotations

from io import BytesIO
from typing import Tuple, Union

import numpy as np
from PIL import Image, ImageQt
from PyQt6.QtGui import QImage

from crop_canvas.utils.data_url import encode_as_jpeg_data_url

ImageHandle = Union[QImage, Image.Image]


def decode_image(image_bytes: bytes) -> Image.Image:
    """Decode encoded image bytes with Pillow. EXIF orientation is not applied."""
    with Image.open(BytesIO(image_bytes)) as image:
        image.load()
        decoded = image.copy()
    return decoded


def to_qimage(image: ImageHandle) -> QImage:
    """Return a QImage for either handle type; Pillow images are copied into Qt memory."""
    if isinstance(image, QImage):
        return image
    if image.mode not in {"RGB", "RGBA"}:
        image = image.convert("RGBA")
    # ImageQt wraps Pillow's buffer; copy() detaches it from the Pillow image
    return QImage(ImageQt.ImageQt(image)).copy()


def natural_size(image: ImageHandle) -> Tuple[int, int]:
    """Natural pixel (width, height) of a decoded image handle."""
    if isinstance(image, QImage):
        return image.width(), image.height()
    return image.size


def surface_to_pil(surface: QImage) -> Image.Image:
    return ImageQt.fromqimage(surface).convert("RGBA")


def surface_to_array(surface: QImage) -> np.ndarray:
    """RGBA pixels of a surface as a (height, width, 4) uint8 array."""
    return np.asarray(surface_to_pil(surface), dtype=np.uint8)


def surface_to_jpeg(surface: QImage, quality: int = 92) -> bytes:
    """Encode a surface as JPEG bytes; alpha is dropped."""
    rgb = surface_to_pil(surface).convert("RGB")
    buffer = BytesIO()
    rgb.save(buffer, format="JPEG", quality=quality, optimize=True)
    return buffer.getvalue()


def surface_to_data_url(surface: QImage, quality: int = 92) -> str:
    return encode_as_jpeg_data_url(surface_to_jpeg(surface, quality=quality))
