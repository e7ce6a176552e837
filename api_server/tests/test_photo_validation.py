"""사진 검증 도우미 테스트"""

import base64
import re

import pytest

from incoming_goods.core.exceptions import MalformedEncoding, PayloadTooLarge, UnsupportedMediaType
from incoming_goods.services.photo_validation import (
    decode_base64,
    estimated_decoded_size,
    generate_storage_key,
    media_type_for,
    normalize_base64,
    validate_extension,
    validate_signature,
    validate_size,
)

ALLOWED = (".jpg", ".jpeg", ".png", ".gif", ".bmp")


@pytest.mark.parametrize("name, ext", [
    ("photo.jpg", ".jpg"),
    ("PHOTO.JPEG", ".jpeg"),
    ("scan.Png", ".png"),
    ("anim.gif", ".gif"),
    ("old.bmp", ".bmp"),
])
def test_allowed_extensions(name, ext):
    assert validate_extension(name, ALLOWED) == ext


@pytest.mark.parametrize("name", ["virus.exe", "photo", "photo.jpg.exe", "image.webp", ""])
def test_rejected_extensions(name):
    with pytest.raises(UnsupportedMediaType):
        validate_extension(name, ALLOWED)


def test_size_limit_is_inclusive():
    validate_size(10 * 1024 * 1024, 10 * 1024 * 1024)
    with pytest.raises(PayloadTooLarge):
        validate_size(10 * 1024 * 1024 + 1, 10 * 1024 * 1024)


def test_decode_valid_base64():
    assert decode_base64(base64.b64encode(b"hello photo").decode()) == b"hello photo"


@pytest.mark.parametrize("encoded", ["abcde", "abc", "ab$=", "!!!!", ""])
def test_malformed_base64(encoded):
    with pytest.raises(MalformedEncoding):
        decode_base64(encoded)


def test_line_wrapped_base64_is_normalized():
    raw = bytes(range(256)) * 2
    wrapped = base64.encodebytes(raw).decode()
    assert "\n" in wrapped
    assert decode_base64(normalize_base64(wrapped)) == raw


def test_estimated_size_matches_decoded_length():
    for n in (0, 1, 2, 3, 100, 1001):
        encoded = base64.b64encode(b"x" * n).decode()
        assert estimated_decoded_size(encoded) == n


def test_storage_key_ignores_declared_name():
    key = generate_storage_key(12, ".jpg")
    assert re.fullmatch(r"12/[0-9a-f]{32}\.jpg", key)
    assert generate_storage_key(12, ".jpg") != key


def test_signature_check():
    validate_signature(b"\x89PNG\r\n\x1a\n" + b"\x00" * 8, ".png")
    validate_signature(b"GIF89a....", ".gif")
    with pytest.raises(UnsupportedMediaType):
        validate_signature(b"\xff\xd8\xff\xe0", ".png")
    with pytest.raises(UnsupportedMediaType):
        validate_signature(b"MZ\x90\x00", ".jpg")


def test_media_type():
    assert media_type_for("1/abc.jpeg") == "image/jpeg"
    assert media_type_for("1/abc.png") == "image/png"
    assert media_type_for("1/abc.bin") == "application/octet-stream"
