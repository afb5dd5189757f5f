"""
Minimal EXIF walker: finds the orientation tag in a JPEG byte stream.

Only the first IFD of the first APP1 segment is inspected. This is advisory
metadata extraction, so every validation failure or short read yields None.
"""

from __future__ import annotations

import logging
import struct
from typing import Union

LOGGER = logging.getLogger(__name__)

Buffer = Union[bytes, bytearray, memoryview]

JPEG_SOI = b"\xff\xd8"
APP1_MARKER = b"\xff\xe1"
EXIF_ID = b"Exif"
LITTLE_ENDIAN_MARK = 0x4949  # "II"
BIG_ENDIAN_MARK = 0x4D4D  # "MM"
TIFF_MAGIC = 0x002A
ORIENTATION_TAG = 0x0112
IFD_ENTRY_SIZE = 12
NORMAL_ORIENTATION = 1


def _find_app1(view: memoryview) -> int | None:
    offset = 2
    length = len(view)
    while offset < length - 1:
        if view[offset] == 0xFF and view[offset + 1] == 0xE1:
            return offset
        offset += 1
    return None


def _find_orientation_offset(view: memoryview) -> tuple[int, str] | None:
    """Return (value offset, struct byte-order prefix) of the orientation entry."""
    if view[:2].tobytes() != JPEG_SOI:
        return None

    app1_start = _find_app1(view)
    if app1_start is None:
        return None

    exif_id_offset = app1_start + 4
    if view[exif_id_offset : exif_id_offset + 4].tobytes() != EXIF_ID:
        LOGGER.debug("APP1 segment at %d is not an Exif block", app1_start)
        return None

    tiff_offset = app1_start + 10
    (endianness,) = struct.unpack_from(">H", view, tiff_offset)
    if endianness == LITTLE_ENDIAN_MARK:
        order = "<"
    elif endianness == BIG_ENDIAN_MARK:
        order = ">"
    else:
        LOGGER.debug("Unknown TIFF byte order 0x%04X", endianness)
        return None

    (magic,) = struct.unpack_from(order + "H", view, tiff_offset + 2)
    if magic != TIFF_MAGIC:
        return None

    (first_ifd_offset,) = struct.unpack_from(order + "I", view, tiff_offset + 4)
    if first_ifd_offset < 8:
        return None

    ifd_start = tiff_offset + first_ifd_offset
    (entry_count,) = struct.unpack_from(order + "H", view, ifd_start)
    for index in range(entry_count):
        entry_offset = ifd_start + 2 + IFD_ENTRY_SIZE * index
        (tag,) = struct.unpack_from(order + "H", view, entry_offset)
        if tag == ORIENTATION_TAG:
            return entry_offset + 8, order
    return None


def read_orientation(buffer: Buffer, suppress_embedded_orientation: bool = False) -> int | None:
    """
    Read the EXIF orientation (1-8) of a JPEG buffer, or None when absent.

    With suppress_embedded_orientation the stored value is rewritten to 1 in
    place, for platforms that already apply EXIF orientation when decoding.
    The original value is still returned. Read-only buffers are never written.
    """
    view = memoryview(buffer).cast("B")
    try:
        located = _find_orientation_offset(view)
        if located is None:
            return None
        value_offset, order = located
        (orientation,) = struct.unpack_from(order + "H", view, value_offset)
    except (struct.error, IndexError):
        LOGGER.debug("EXIF data truncated; no orientation read")
        return None

    if suppress_embedded_orientation:
        if view.readonly:
            LOGGER.warning("Cannot reset EXIF orientation on a read-only buffer")
        else:
            struct.pack_into(order + "H", view, value_offset, NORMAL_ORIENTATION)
    return orientation
