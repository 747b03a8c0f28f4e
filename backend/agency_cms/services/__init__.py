"""서비스 레이어 패키지 초기화 모듈입니다."""

from agency_cms.services import (
    auth_service,
    cache_service,
    content_registry,
    content_store,
    diff_service,
    version_service,
    content_service,
    preview_service,
    user_service,
)
