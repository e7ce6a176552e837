"""
입고 주문 라이프사이클 서비스

Pending → Arrived → Completed, 어느 상태에서든 Closed (종료 후 변경 불가).
"""
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, List, Optional

import structlog

from incoming_goods.core.exceptions import Conflict, InvalidTransition, NotFound
from incoming_goods.core.locks import KeyedLock
from incoming_goods.domain import Order
from incoming_goods.repositories.base import OrderRepository

logger = structlog.get_logger()


class OrderLifecycleService:
    def __init__(
        self,
        repository: OrderRepository,
        locks: Optional[KeyedLock] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.repository = repository
        self.locks = locks if locks is not None else KeyedLock()
        self._clock = clock

    @contextmanager
    def order_lock(self, order_id: int) -> Iterator[None]:
        """같은 주문에 대한 쓰기 직렬화"""
        with self.locks.hold(order_id):
            yield

    def get_by_id(self, order_id: int) -> Order:
        """주문 ID로 주문 조회"""
        order = self.repository.get_by_id(order_id)
        if order is None:
            raise NotFound(f"Order {order_id} not found", order_id=order_id)
        return order

    def get_by_barcode(self, barcode: str) -> Order:
        """바코드로 주문 조회"""
        order = self.repository.get_by_barcode(barcode)
        if order is None:
            raise NotFound(f"Order with barcode {barcode} not found")
        return order

    def list_all(self) -> List[Order]:
        """모든 주문 조회"""
        return self.repository.list_all()

    def create_order(self, barcode: str, description: str, supplier_name: Optional[str] = None) -> Order:
        """새 주문 생성 (Pending)"""
        if self.repository.get_by_barcode(barcode) is not None:
            raise Conflict(f"Order with barcode {barcode} already exists")

        order = self.repository.insert(Order(
            barcode=barcode,
            description=description,
            supplier_name=supplier_name,
            order_date=self._clock(),
        ))
        logger.info("Order created", order_id=order.id, barcode=barcode)
        return order

    def report_arrival(self, order_id: int) -> Order:
        """입고 도착 보고. 이미 도착한 주문도 다시 보고하면 도착 시각을 덮어쓴다"""
        with self.order_lock(order_id):
            order = self.get_by_id(order_id)
            self._ensure_open(order, "arrival")
            updated = self.repository.update(order.evolve(arrival_date=self._clock()))

        logger.info("Order arrival reported", order_id=order_id, arrival_date=updated.arrival_date.isoformat())
        return updated

    def report_completion(self, order_id: int) -> Order:
        """처리 완료 보고. 도착 보고가 선행되어야 한다"""
        with self.order_lock(order_id):
            order = self.get_by_id(order_id)
            self._ensure_open(order, "completion")
            if order.arrival_date is None:
                self._reject(
                    order_id, "completion", "not arrived",
                    "Cannot complete an order that hasn't arrived yet",
                )
            updated = self.repository.update(order.evolve(completion_date=self._clock()))

        logger.info(
            "Order completion reported",
            order_id=order_id,
            completion_date=updated.completion_date.isoformat(),
        )
        return updated

    def close_order(self, order_id: int) -> Order:
        """주문 종료. 도착/완료 없이도 종료 가능 (취소)"""
        with self.order_lock(order_id):
            order = self.get_by_id(order_id)
            if order.is_closed:
                self._reject(order_id, "close", "already closed", "Order is already closed")
            updated = self.repository.update(order.evolve(is_closed=True))

        logger.info("Order closed", order_id=order_id, previous_status=order.status.value)
        return updated

    def _ensure_open(self, order: Order, transition: str) -> None:
        if order.is_closed:
            self._reject(order.id, transition, "closed", "Cannot modify a closed order")

    @staticmethod
    def _reject(order_id: int, transition: str, reason: str, detail: str) -> None:
        logger.warning("Order transition rejected", order_id=order_id, transition=transition, reason=reason)
        raise InvalidTransition(reason, detail, order_id=order_id)
