"""
Conversion between base64 data URLs and raw bytes.
"""

from __future__ import annotations

import base64

JPEG_DATA_URL_PREFIX = "data:image/jpeg;base64,"


def decode_data_url(data_url: str) -> bytes:
    """Strip the `data:<mime>;base64,` head and decode the payload.

    ASCII whitespace and line breaks in the payload are ignored. Raises
    binascii.Error (a ValueError) on malformed base64.
    """
    if data_url.startswith("data:"):
        _, _, data_url = data_url.partition(",")
    return base64.b64decode("".join(data_url.split()), validate=True)


def encode_as_jpeg_data_url(data: bytes | bytearray | memoryview) -> str:
    """Encode JPEG bytes as a data URL. The MIME type is always image/jpeg."""
    return JPEG_DATA_URL_PREFIX + base64.b64encode(bytes(data)).decode("ascii")


def is_data_url(value: str) -> bool:
    return value.startswith("data:")
