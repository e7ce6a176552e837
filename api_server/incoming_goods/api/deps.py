"""
FastAPI 의존성: app.state 에 등록된 서비스 제공
"""
from fastapi import Request

from incoming_goods.services.order_service import OrderLifecycleService
from incoming_goods.services.photo_service import PhotoIngestionService


def get_order_service(request: Request) -> OrderLifecycleService:
    return request.app.state.order_service


def get_photo_service(request: Request) -> PhotoIngestionService:
    return request.app.state.photo_service
