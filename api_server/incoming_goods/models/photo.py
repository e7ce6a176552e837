"""
주문 사진 모델
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from .base import Base

class PhotoEntity(Base):
    __tablename__ = "order_photos"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    file_name = Column(String, nullable=False)
    storage_key = Column(String, unique=True, nullable=False)
    upload_date = Column(DateTime, nullable=False)

    order = relationship("OrderEntity", back_populates="photos")

    def __repr__(self):
        return f"<PhotoEntity(id={self.id}, order_id={self.order_id}, key='{self.storage_key}')>"
