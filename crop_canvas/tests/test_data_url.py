from __future__ import annotations

import binascii
import os

import pytest

from crop_canvas.utils.data_url import decode_data_url, encode_as_jpeg_data_url


@pytest.mark.parametrize("length", [0, 1, 12345])
def test_round_trip_preserves_bytes(length: int) -> None:
    payload = os.urandom(length)
    assert decode_data_url(encode_as_jpeg_data_url(payload)) == payload


def test_encode_uses_jpeg_prefix() -> None:
    assert encode_as_jpeg_data_url(b"\xff\xd8\xff") == "data:image/jpeg;base64,/9j/"


def test_decode_strips_any_mime_head() -> None:
    assert decode_data_url("data:image/png;base64,aGVsbG8=") == b"hello"


def test_encode_of_decoded_url_is_identity() -> None:
    data_url = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="
    assert encode_as_jpeg_data_url(decode_data_url(data_url)) == data_url


def test_decode_propagates_malformed_base64() -> None:
    with pytest.raises(binascii.Error):
        decode_data_url("data:image/jpeg;base64,not*base64")


def test_decode_ignores_line_breaks_in_payload() -> None:
    assert decode_data_url("data:image/png;base64,aGVs\r\nbG8=\n") == b"hello"
    assert decode_data_url("data:image/png;base64, aGVs bG8=") == b"hello"
