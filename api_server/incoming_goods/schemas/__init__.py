# Pydantic 스키마 패키지
from .order import OrderCreate, OrderResponse, PhotoResponse, ArrivalResponse, CompletionResponse
from .photo import PhotoUpload, PhotoUploadResponse
from .common import CamelModel, SuccessResponse, ErrorResponse

__all__ = [
    "OrderCreate", "OrderResponse", "PhotoResponse", "ArrivalResponse", "CompletionResponse",
    "PhotoUpload", "PhotoUploadResponse",
    "CamelModel", "SuccessResponse", "ErrorResponse",
]
