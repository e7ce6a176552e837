"""
입고 주문 관련 API 엔드포인트
"""
from typing import List
from fastapi import APIRouter, Depends, Response
import structlog

from incoming_goods.api.deps import get_order_service, get_photo_service
from incoming_goods.schemas.common import ErrorResponse, SuccessResponse
from incoming_goods.schemas.order import ArrivalResponse, CompletionResponse, OrderCreate, OrderResponse
from incoming_goods.schemas.photo import PhotoUpload, PhotoUploadResponse
from incoming_goods.services.order_service import OrderLifecycleService
from incoming_goods.services.photo_service import PhotoIngestionService

logger = structlog.get_logger()

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}
REJECTED = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}}


@router.get("/barcode/{barcode}", response_model=OrderResponse, responses=NOT_FOUND)
def get_order_by_barcode(barcode: str, service: OrderLifecycleService = Depends(get_order_service)):
    """바코드로 주문 조회 (스캐너)"""
    logger.info("Get order by barcode", barcode=barcode)
    return OrderResponse.model_validate(service.get_by_barcode(barcode))


@router.get("", response_model=List[OrderResponse])
def get_orders(service: OrderLifecycleService = Depends(get_order_service)):
    """주문 목록 조회"""
    logger.info("Get orders request")
    return [OrderResponse.model_validate(o) for o in service.list_all()]


@router.post("", response_model=OrderResponse, status_code=201, responses={409: {"model": ErrorResponse}})
def create_order(order: OrderCreate, service: OrderLifecycleService = Depends(get_order_service)):
    """새 주문 등록"""
    logger.info("Create order request", barcode=order.barcode)
    created = service.create_order(order.barcode, order.description, order.supplier_name)
    return OrderResponse.model_validate(created)


@router.get("/{order_id}", response_model=OrderResponse, responses=NOT_FOUND)
def get_order(order_id: int, service: OrderLifecycleService = Depends(get_order_service)):
    """특정 주문 상세 조회"""
    logger.info("Get order detail", order_id=order_id)
    return OrderResponse.model_validate(service.get_by_id(order_id))


@router.post("/{order_id}/arrival", response_model=ArrivalResponse, responses=REJECTED)
def report_arrival(order_id: int, service: OrderLifecycleService = Depends(get_order_service)):
    """도착 보고"""
    logger.info("Report arrival request", order_id=order_id)
    order = service.report_arrival(order_id)
    return ArrivalResponse(arrival_date=order.arrival_date)


@router.post("/{order_id}/completion", response_model=CompletionResponse, responses=REJECTED)
def report_completion(order_id: int, service: OrderLifecycleService = Depends(get_order_service)):
    """완료 보고"""
    logger.info("Report completion request", order_id=order_id)
    order = service.report_completion(order_id)
    return CompletionResponse(completion_date=order.completion_date)


@router.post("/{order_id}/close", response_model=SuccessResponse, responses=REJECTED)
def close_order(order_id: int, service: OrderLifecycleService = Depends(get_order_service)):
    """주문 종료"""
    logger.info("Close order request", order_id=order_id)
    service.close_order(order_id)
    return SuccessResponse(message="Order closed successfully")


@router.post(
    "/{order_id}/photos",
    response_model=PhotoUploadResponse,
    responses={**REJECTED, 500: {"model": ErrorResponse}},
)
def upload_photo(order_id: int, photo: PhotoUpload, service: PhotoIngestionService = Depends(get_photo_service)):
    """사진 업로드 (base64)"""
    logger.info("Upload photo request", order_id=order_id, file_name=photo.file_name, encoded_size=len(photo.data))
    created = service.ingest_base64(order_id, photo.file_name, photo.data)
    return PhotoUploadResponse(photo_id=created.id, file_name=created.file_name, upload_date=created.upload_date)


@router.get("/{order_id}/photos/{photo_id}/content", responses=NOT_FOUND)
def get_photo_content(order_id: int, photo_id: int, service: PhotoIngestionService = Depends(get_photo_service)):
    """저장된 사진 파일 제공"""
    content, media_type = service.get_photo_content(order_id, photo_id)
    return Response(content=content, media_type=media_type, headers={"Cache-Control": "public, max-age=31536000"})
