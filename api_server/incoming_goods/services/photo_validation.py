"""
사진 업로드 검증 / 저장 키 생성
"""
import binascii
import os
import re
import uuid
from typing import Iterable

import pybase64

from incoming_goods.core.exceptions import MalformedEncoding, PayloadTooLarge, UnsupportedMediaType

_WHITESPACE = re.compile(r"\s+")

# 확장자별 파일 헤더
_SIGNATURES = {
    ".jpg": (b"\xff\xd8\xff",),
    ".jpeg": (b"\xff\xd8\xff",),
    ".png": (b"\x89PNG\r\n\x1a\n",),
    ".gif": (b"GIF87a", b"GIF89a"),
    ".bmp": (b"BM",),
}


def validate_extension(file_name: str, allowed: Iterable[str]) -> str:
    """선언된 파일명의 확장자(소문자) 반환. 허용 목록에 없으면 UnsupportedMediaType"""
    ext = os.path.splitext(file_name or "")[1].lower()
    allowed = {a.lower() for a in allowed}
    if ext not in allowed:
        raise UnsupportedMediaType(
            f"Unsupported file type '{ext or file_name}'. Allowed: {', '.join(sorted(allowed))}"
        )
    return ext


def validate_size(size: int, max_bytes: int) -> None:
    if size > max_bytes:
        raise PayloadTooLarge(f"Photo is {size} bytes, limit is {max_bytes} bytes")


def validate_signature(data: bytes, ext: str) -> None:
    """파일 헤더가 확장자와 일치하는지 확인"""
    signatures = _SIGNATURES.get(ext, ())
    if not any(data.startswith(sig) for sig in signatures):
        raise UnsupportedMediaType(f"File content is not a valid {ext} image")


def normalize_base64(data: str) -> str:
    # 모바일 클라이언트는 76자마다 줄바꿈을 넣는다
    return _WHITESPACE.sub("", data or "")


def estimated_decoded_size(encoded: str) -> int:
    """디코딩 전 크기 추정 (패딩 제외)"""
    padding = len(encoded) - len(encoded.rstrip("="))
    return max(len(encoded) * 3 // 4 - padding, 0)


def decode_base64(encoded: str) -> bytes:
    if not encoded:
        raise MalformedEncoding("Photo data is empty")
    if len(encoded) % 4 != 0:
        raise MalformedEncoding("Photo data length is not a multiple of 4")
    try:
        return pybase64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedEncoding(f"Photo data is not valid base64: {e}") from e


def generate_storage_key(order_id: int, ext: str) -> str:
    """주문 ID 네임스페이스 + 무작위 토큰 + 확장자. 선언된 파일명은 사용하지 않는다"""
    return f"{order_id}/{uuid.uuid4().hex}{ext}"


def media_type_for(key: str) -> str:
    ext = os.path.splitext(key)[1].lower()
    return {
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".png": "image/png",
        ".gif": "image/gif",
        ".bmp": "image/bmp",
    }.get(ext, "application/octet-stream")
