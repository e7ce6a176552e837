"""
주문 관련 스키마
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from incoming_goods.domain import OrderStatus
from .common import CamelModel

class OrderCreate(BaseModel):
    """주문 생성 스키마"""
    model_config = ConfigDict(populate_by_name=True)

    barcode: str = Field(..., min_length=1, description="주문 바코드 (고유)")
    description: str = Field(..., min_length=1, description="주문 설명")
    supplier_name: Optional[str] = Field(None, alias="supplierName", description="공급업체명")

class PhotoResponse(CamelModel):
    """주문에 포함된 사진 정보"""
    id: int
    file_name: str
    upload_date: datetime

class OrderResponse(CamelModel):
    """주문 응답 스키마"""
    id: int = Field(..., description="주문 DB ID")
    barcode: str
    description: str
    supplier_name: Optional[str] = None
    order_date: datetime
    arrival_date: Optional[datetime] = None
    completion_date: Optional[datetime] = None
    is_closed: bool
    status: OrderStatus
    photos: List[PhotoResponse] = []

class ArrivalResponse(CamelModel):
    message: str = "Arrival reported successfully"
    arrival_date: datetime

class CompletionResponse(CamelModel):
    message: str = "Completion reported successfully"
    completion_date: datetime
