# SQLAlchemy 모델 패키지
from .base import Base
from .order import OrderEntity
from .photo import PhotoEntity

__all__ = ["Base", "OrderEntity", "PhotoEntity"]
