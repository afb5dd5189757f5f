from __future__ import annotations

import os
from io import BytesIO

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PIL import Image
from PyQt6.QtGui import QGuiApplication


@pytest.fixture(scope="session", autouse=True)
def qt_app() -> QGuiApplication:
    app = QGuiApplication.instance()
    if app is None:
        app = QGuiApplication([])
    return app


def build_exif_jpeg_bytes(orientation: int, byte_order: str = "big") -> bytes:
    """Minimal JPEG with one APP1 EXIF segment holding the orientation tag."""
    marker = b"MM" if byte_order == "big" else b"II"
    tiff_header = marker + (42).to_bytes(2, byte_order) + (8).to_bytes(4, byte_order)
    entry_count = (1).to_bytes(2, byte_order)
    orientation_entry = (
        (0x0112).to_bytes(2, byte_order)
        + (3).to_bytes(2, byte_order)  # SHORT
        + (1).to_bytes(4, byte_order)
        + orientation.to_bytes(2, byte_order)
        + b"\x00\x00"
    )
    next_ifd = (0).to_bytes(4, byte_order)
    exif_payload = b"Exif\x00\x00" + tiff_header + entry_count + orientation_entry + next_ifd
    app1 = b"\xff\xe1" + (len(exif_payload) + 2).to_bytes(2, "big") + exif_payload
    return b"\xff\xd8" + app1 + b"\xff\xd9"


def make_jpeg_bytes(size: tuple[int, int], orientation: int | None = None, color: str = "red") -> bytes:
    image = Image.new("RGB", size, color=color)
    exif = Image.Exif()
    if orientation is not None:
        exif[0x0112] = orientation
    buffer = BytesIO()
    image.save(buffer, format="JPEG", exif=exif.tobytes())
    return buffer.getvalue()


@pytest.fixture
def exif_jpeg():
    return build_exif_jpeg_bytes


@pytest.fixture
def jpeg_bytes():
    return make_jpeg_bytes
