"""
API 라우터 메인
"""
from fastapi import APIRouter

from incoming_goods.api.endpoints import orders

api_router = APIRouter()

# 각 엔드포인트 라우터 등록
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
