"""
데이터베이스 엔진 / 세션 / 초기 데이터
"""
from datetime import datetime, timedelta

import structlog
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from incoming_goods.models import Base, OrderEntity

logger = structlog.get_logger()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """SQLAlchemy 엔진 생성 (SQLite는 스레드 공유 허용)"""
    kwargs = {"echo": echo, "future": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


def create_tables(engine: Engine) -> None:
    """테이블 생성"""
    Base.metadata.create_all(bind=engine)


def seed_sample_orders(session_factory: sessionmaker) -> int:
    """빈 데이터베이스에 샘플 주문 생성. 생성한 건수 반환"""
    with session_factory() as session:  # type: Session
        if session.scalars(select(OrderEntity.id).limit(1)).first() is not None:
            return 0

        now = datetime.now()
        samples = [
            OrderEntity(
                barcode="123456789",
                description="Office Supplies - Box of Pens",
                supplier_name="Office Depot",
                order_date=now - timedelta(days=5),
            ),
            OrderEntity(
                barcode="987654321",
                description="Computer Equipment - Laptop",
                supplier_name="Tech Solutions Inc",
                order_date=now - timedelta(days=3),
            ),
            OrderEntity(
                barcode="555666777",
                description="Furniture - Office Chairs (Set of 5)",
                supplier_name="Furniture Plus",
                order_date=now - timedelta(days=7),
                arrival_date=now - timedelta(days=2),
            ),
        ]
        session.add_all(samples)
        session.commit()

    logger.info("Sample orders seeded", count=len(samples))
    return len(samples)
