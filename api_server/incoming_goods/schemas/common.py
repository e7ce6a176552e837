"""
공통 스키마 정의
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """JSON 키를 camelCase 로 주고받는 기본 스키마"""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

class SuccessResponse(BaseModel):
    """성공 응답 스키마"""
    success: bool = True
    message: str = "Operation completed successfully"

class ErrorResponse(BaseModel):
    """오류 응답 스키마"""
    success: bool = False
    message: str
    detail: Optional[str] = None
