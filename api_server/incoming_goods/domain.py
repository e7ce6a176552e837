"""
입고 주문 도메인 모델

저장소와 서비스 사이에서 주고받는 값 객체. ORM 엔티티(models)와 분리되어 있다.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional


class OrderStatus(str, Enum):
    PENDING = "Pending"
    ARRIVED = "Arrived"
    COMPLETED = "Completed"
    CLOSED = "Closed"


def derive_status(arrival_date: Optional[datetime], completion_date: Optional[datetime], is_closed: bool) -> OrderStatus:
    """날짜/종료 플래그로부터 상태 계산 (Closed > Completed > Arrived > Pending)"""
    if is_closed:
        return OrderStatus.CLOSED
    if completion_date is not None:
        return OrderStatus.COMPLETED
    if arrival_date is not None:
        return OrderStatus.ARRIVED
    return OrderStatus.PENDING


@dataclass(frozen=True)
class Photo:
    order_id: int
    file_name: str
    storage_key: str
    upload_date: datetime
    id: Optional[int] = None


@dataclass(frozen=True)
class Order:
    barcode: str
    description: str
    order_date: datetime
    supplier_name: Optional[str] = None
    arrival_date: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    is_closed: bool = False
    photos: List[Photo] = field(default_factory=list)
    id: Optional[int] = None
    version: int = 0

    @property
    def status(self) -> OrderStatus:
        return derive_status(self.arrival_date, self.completion_date, self.is_closed)

    def evolve(self, **changes) -> "Order":
        return replace(self, **changes)
