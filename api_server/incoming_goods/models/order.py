"""
입고 주문 모델
"""
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from .base import Base

class OrderEntity(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    barcode = Column(String, unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False)
    supplier_name = Column(String)
    order_date = Column(DateTime, nullable=False)
    arrival_date = Column(DateTime)
    completion_date = Column(DateTime)
    is_closed = Column(Boolean, nullable=False, default=False)
    # 낙관적 동시성 제어용 버전
    version = Column(Integer, nullable=False, default=0)

    photos = relationship(
        "PhotoEntity",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="PhotoEntity.id",
    )

    def __repr__(self):
        return f"<OrderEntity(id={self.id}, barcode='{self.barcode}', is_closed={self.is_closed})>"
