"""
애플리케이션 설정 관리
"""
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # 애플리케이션 정보
    APP_NAME: str = "Incoming Goods Tracker API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 서버 설정
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    API_PREFIX: str = "/api"

    # 데이터베이스 설정
    DATABASE_URL: str = Field(
        default="sqlite:///./incoming_goods.db",
        description="SQLAlchemy database URL"
    )
    SEED_SAMPLE_DATA: bool = Field(default=True, description="빈 데이터베이스에 샘플 주문 3건 생성")

    # 사진 저장소 설정
    UPLOAD_DIR: str = Field(default="./uploads", description="사진 파일 저장 디렉터리")
    MAX_PHOTO_BYTES: int = Field(default=10 * 1024 * 1024, description="디코딩된 사진 최대 크기 (bytes)")
    ALLOWED_PHOTO_EXTENSIONS: List[str] = [".jpg", ".jpeg", ".png", ".gif", ".bmp"]
    VERIFY_IMAGE_SIGNATURE: bool = Field(default=False, description="파일 헤더가 이미지 형식인지 확인")

    # CORS 설정
    CORS_ORIGINS: List[str] = ["*"]

    # 로그 설정
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    LOG_FILE: Optional[str] = None


# 전역 설정 인스턴스
settings = Settings()
