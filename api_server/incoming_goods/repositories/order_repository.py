"""
SQLAlchemy 기반 주문 저장소
"""
from contextlib import contextmanager
from typing import Iterator, List, Optional

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, sessionmaker

from incoming_goods.core.exceptions import Conflict, IncomingGoodsError, InvalidTransition, NotFound, StorageError
from incoming_goods.domain import Order, Photo
from incoming_goods.models import OrderEntity, PhotoEntity
from incoming_goods.repositories.base import OrderRepository

logger = structlog.get_logger()


class SqlAlchemyOrderRepository(OrderRepository):
    """한 메서드 호출 = 한 트랜잭션"""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except IncomingGoodsError:
            session.rollback()
            raise
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Repository operation failed", error=str(e))
            raise StorageError() from e
        finally:
            session.close()

    def get_by_id(self, order_id: int) -> Optional[Order]:
        with self._transaction() as session:
            entity = session.scalars(
                select(OrderEntity)
                .options(selectinload(OrderEntity.photos))
                .where(OrderEntity.id == order_id)
            ).first()
            return self._to_model(entity) if entity else None

    def get_by_barcode(self, barcode: str) -> Optional[Order]:
        with self._transaction() as session:
            entity = session.scalars(
                select(OrderEntity)
                .options(selectinload(OrderEntity.photos))
                .where(OrderEntity.barcode == barcode)
            ).first()
            return self._to_model(entity) if entity else None

    def list_all(self) -> List[Order]:
        with self._transaction() as session:
            entities = session.scalars(
                select(OrderEntity)
                .options(selectinload(OrderEntity.photos))
                .order_by(OrderEntity.id)
            ).all()
            return [self._to_model(e) for e in entities]

    def insert(self, order: Order) -> Order:
        with self._transaction() as session:
            entity = OrderEntity(
                barcode=order.barcode,
                description=order.description,
                supplier_name=order.supplier_name,
                order_date=order.order_date,
                arrival_date=order.arrival_date,
                completion_date=order.completion_date,
                is_closed=order.is_closed,
                version=0,
            )
            session.add(entity)
            try:
                session.flush()
            except IntegrityError as e:
                raise Conflict(f"Order with barcode {order.barcode} already exists") from e
            return self._to_model(entity, photos=[])

    def update(self, order: Order) -> Order:
        with self._transaction() as session:
            result = session.execute(
                update(OrderEntity)
                .where(
                    OrderEntity.id == order.id,
                    OrderEntity.version == order.version,
                    OrderEntity.is_closed == False,  # noqa: E712
                )
                .values(
                    description=order.description,
                    supplier_name=order.supplier_name,
                    arrival_date=order.arrival_date,
                    completion_date=order.completion_date,
                    is_closed=order.is_closed,
                    version=order.version + 1,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self._raise_write_miss(session, order)
            return order.evolve(version=order.version + 1)

    def add_photo(self, order: Order, photo: Photo) -> Photo:
        with self._transaction() as session:
            # 주문 버전을 올려 종료/변경과의 경합을 감지
            result = session.execute(
                update(OrderEntity)
                .where(
                    OrderEntity.id == photo.order_id,
                    OrderEntity.version == order.version,
                    OrderEntity.is_closed == False,  # noqa: E712
                )
                .values(version=order.version + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                self._raise_write_miss(session, order)

            entity = PhotoEntity(
                order_id=photo.order_id,
                file_name=photo.file_name,
                storage_key=photo.storage_key,
                upload_date=photo.upload_date,
            )
            session.add(entity)
            session.flush()
            return self._photo_to_model(entity)

    def get_photo(self, order_id: int, photo_id: int) -> Optional[Photo]:
        with self._transaction() as session:
            entity = session.scalars(
                select(PhotoEntity).where(PhotoEntity.id == photo_id, PhotoEntity.order_id == order_id)
            ).first()
            return self._photo_to_model(entity) if entity else None

    @staticmethod
    def _raise_write_miss(session: Session, order: Order) -> None:
        current = session.scalars(select(OrderEntity).where(OrderEntity.id == order.id)).first()
        if current is None:
            raise NotFound(order_id=order.id)
        if current.is_closed:
            raise InvalidTransition("closed", "Cannot modify a closed order", order_id=order.id)
        raise Conflict(order_id=order.id)

    @classmethod
    def _to_model(cls, entity: OrderEntity, photos: Optional[list] = None) -> Order:
        """Entity → Model."""
        if photos is None:
            photos = [cls._photo_to_model(p) for p in entity.photos]
        return Order(
            id=entity.id,
            barcode=entity.barcode,
            description=entity.description,
            supplier_name=entity.supplier_name,
            order_date=entity.order_date,
            arrival_date=entity.arrival_date,
            completion_date=entity.completion_date,
            is_closed=bool(entity.is_closed),
            photos=photos,
            version=entity.version,
        )

    @staticmethod
    def _photo_to_model(entity: PhotoEntity) -> Photo:
        return Photo(
            id=entity.id,
            order_id=entity.order_id,
            file_name=entity.file_name,
            storage_key=entity.storage_key,
            upload_date=entity.upload_date,
        )
