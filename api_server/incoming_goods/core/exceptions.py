"""
입고 주문 서비스 예외 계층

각 예외는 API 계층에서 사용할 HTTP 상태 코드를 가진다.
"""
from typing import Optional


class IncomingGoodsError(Exception):
    """서비스 기본 예외"""

    status_code = 500
    message = "Unexpected error"

    def __init__(self, detail: Optional[str] = None, order_id: Optional[int] = None):
        self.detail = detail or self.message
        self.order_id = order_id
        super().__init__(self.detail)


class NotFound(IncomingGoodsError):
    """주문 또는 사진이 존재하지 않음"""

    status_code = 404
    message = "Order not found"


class InvalidTransition(IncomingGoodsError):
    """라이프사이클 가드 위반 (closed / not arrived / already closed)"""

    status_code = 400
    message = "Invalid order transition"

    def __init__(self, reason: str, detail: Optional[str] = None, order_id: Optional[int] = None):
        self.reason = reason
        super().__init__(detail or reason, order_id=order_id)


class UnsupportedMediaType(IncomingGoodsError):
    """허용되지 않은 사진 형식"""

    status_code = 400
    message = "Unsupported photo type"


class PayloadTooLarge(IncomingGoodsError):
    """사진 크기 제한 초과"""

    status_code = 400
    message = "Photo exceeds the size limit"


class MalformedEncoding(IncomingGoodsError):
    """base64 인코딩 오류"""

    status_code = 400
    message = "Photo data is not valid base64"


class Conflict(IncomingGoodsError):
    """동시 쓰기 충돌 또는 중복 바코드. 호출자가 재시도할 수 있다."""

    status_code = 409
    message = "Order was modified concurrently"


class StorageError(IncomingGoodsError):
    """저장소(DB / blob) 실패. 내부 정보는 응답에 노출하지 않는다."""

    status_code = 500
    message = "Storage failure"
