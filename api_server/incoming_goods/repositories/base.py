"""
주문 저장소 인터페이스
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from incoming_goods.domain import Order, Photo


class OrderRepository(ABC):
    """주문 / 사진 레코드 저장소 계약

    조회 메서드는 없으면 None을 반환한다. 쓰기 메서드는 Order.version 을 기준으로
    조건부 갱신하며, 버전이 어긋나면 Conflict 를 발생시킨다.
    """

    @abstractmethod
    def get_by_id(self, order_id: int) -> Optional[Order]: ...

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> Optional[Order]: ...

    @abstractmethod
    def list_all(self) -> List[Order]: ...

    @abstractmethod
    def insert(self, order: Order) -> Order: ...

    @abstractmethod
    def update(self, order: Order) -> Order: ...

    @abstractmethod
    def add_photo(self, order: Order, photo: Photo) -> Photo: ...

    @abstractmethod
    def get_photo(self, order_id: int, photo_id: int) -> Optional[Photo]: ...
