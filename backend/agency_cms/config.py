"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./agency_cms.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # 공개 사이트 주소 (미리보기 링크 URL 생성용)
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # Preview links
    PREVIEW_TOKEN_BYTES: int = 32
    PREVIEW_LINK_MAX_DAYS: int = 30
    PREVIEW_PASSWORD_MIN_LENGTH: int = 4
    PREVIEW_PASSWORD_MAX_LENGTH: int = 50
    BCRYPT_ROUNDS: int = 12

    # Cache
    CACHE_ENABLED: bool = True
    CACHE_TTL_SECONDS: int = 1800  # 30 min
    CACHE_MAX_ENTRIES: int = 512

    # Versioning
    # 버전 번호 충돌(동시 저장) 시 재시도 횟수
    VERSION_WRITE_RETRIES: int = 3

    class Config:
        # 실행 cwd와 무관하게 backend/.env를 로드한다.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()
