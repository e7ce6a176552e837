"""
주문 사진 업로드 서비스
"""
from datetime import datetime
from typing import Callable, Iterable, Optional, Tuple

import structlog

from incoming_goods.core.exceptions import InvalidTransition, NotFound, StorageError
from incoming_goods.domain import Order, Photo
from incoming_goods.services.order_service import OrderLifecycleService
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
from incoming_goods.storage.blob_store import BlobStore

logger = structlog.get_logger()

DEFAULT_MAX_PHOTO_BYTES = 10 * 1024 * 1024
DEFAULT_PHOTO_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp")


class PhotoIngestionService:
    """검증 → blob 저장 → 메타데이터 기록 순서로 사진을 저장한다.

    메타데이터는 blob 저장이 성공한 뒤에만 기록된다. 메타데이터 기록이 실패하면
    blob 을 지우려 시도하고, 그마저 실패하면 로그만 남긴다 (고아 blob 은 별도 정리 대상).
    """

    def __init__(
        self,
        orders: OrderLifecycleService,
        blob_store: BlobStore,
        max_bytes: int = DEFAULT_MAX_PHOTO_BYTES,
        allowed_extensions: Iterable[str] = DEFAULT_PHOTO_EXTENSIONS,
        verify_signature: bool = False,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.orders = orders
        self.blob_store = blob_store
        self.max_bytes = max_bytes
        self.allowed_extensions = tuple(allowed_extensions)
        self.verify_signature = verify_signature
        self._clock = clock

    def ingest(self, order_id: int, file_name: str, raw_bytes: bytes) -> Photo:
        """바이트 그대로 받은 사진 저장"""
        with self.orders.order_lock(order_id):
            order = self._open_order(order_id)
            ext = validate_extension(file_name, self.allowed_extensions)
            validate_size(len(raw_bytes), self.max_bytes)
            return self._store(order, file_name, ext, raw_bytes)

    def ingest_base64(self, order_id: int, file_name: str, data: str) -> Photo:
        """base64 문자열로 받은 사진 저장 (모바일 앱 업로드 형식)"""
        with self.orders.order_lock(order_id):
            order = self._open_order(order_id)
            ext = validate_extension(file_name, self.allowed_extensions)
            encoded = normalize_base64(data)
            validate_size(estimated_decoded_size(encoded), self.max_bytes)
            raw_bytes = decode_base64(encoded)
            validate_size(len(raw_bytes), self.max_bytes)
            return self._store(order, file_name, ext, raw_bytes)

    def get_photo_content(self, order_id: int, photo_id: int) -> Tuple[bytes, str]:
        """저장된 사진 바이트와 media type 반환"""
        self.orders.get_by_id(order_id)
        photo = self.orders.repository.get_photo(order_id, photo_id)
        if photo is None:
            raise NotFound(f"Photo {photo_id} not found for order {order_id}", order_id=order_id)

        try:
            content = self.blob_store.get(photo.storage_key)
        except FileNotFoundError as e:
            logger.error("Photo blob missing", order_id=order_id, photo_id=photo_id, key=photo.storage_key)
            raise NotFound(f"Photo {photo_id} content not found", order_id=order_id) from e
        except OSError as e:
            logger.error("Photo blob read failed", order_id=order_id, key=photo.storage_key, error=str(e))
            raise StorageError(order_id=order_id) from e

        return content, media_type_for(photo.storage_key)

    def _open_order(self, order_id: int) -> Order:
        order = self.orders.get_by_id(order_id)
        if order.is_closed:
            logger.warning("Photo upload rejected", order_id=order_id, reason="closed")
            raise InvalidTransition("closed", "Cannot add photos to a closed order", order_id=order_id)
        return order

    def _store(self, order: Order, file_name: str, ext: str, raw_bytes: bytes) -> Photo:
        if self.verify_signature:
            validate_signature(raw_bytes, ext)

        key = generate_storage_key(order.id, ext)
        try:
            self.blob_store.put(key, raw_bytes)
        except OSError as e:
            logger.error("Photo blob write failed", order_id=order.id, key=key, error=str(e))
            raise StorageError(order_id=order.id) from e

        photo = Photo(order_id=order.id, file_name=file_name, storage_key=key, upload_date=self._clock())
        try:
            created = self.orders.repository.add_photo(order, photo)
        except Exception:
            self._discard_blob(key, order.id)
            raise

        logger.info("Photo uploaded", order_id=order.id, photo_id=created.id, key=key, size=len(raw_bytes))
        return created

    def _discard_blob(self, key: str, order_id: Optional[int]) -> None:
        try:
            self.blob_store.delete(key)
            logger.info("Orphaned photo blob removed", order_id=order_id, key=key)
        except OSError as e:
            logger.error("Orphaned photo blob cleanup failed", order_id=order_id, key=key, error=str(e))
