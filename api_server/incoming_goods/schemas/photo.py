"""
사진 업로드 스키마
"""
from datetime import datetime
from pydantic import AliasChoices, BaseModel, Field

from .common import CamelModel

class PhotoUpload(BaseModel):
    """사진 업로드 요청 (base64 인코딩된 이미지)"""
    file_name: str = Field(..., validation_alias=AliasChoices("fileName", "file_name"), description="원본 파일명")
    data: str = Field(..., validation_alias=AliasChoices("data", "base64Data"), description="base64 이미지 데이터")

class PhotoUploadResponse(CamelModel):
    message: str = "Photo uploaded successfully"
    photo_id: int
    file_name: str
    upload_date: datetime
