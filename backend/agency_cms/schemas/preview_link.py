"""미리보기 링크 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from agency_cms.config import settings


class PreviewLinkCreate(BaseModel):
    # 기존 관리자 화면은 일 단위(expires_in)로, API 연동은 시각(expires_at)으로 보낸다.
    expires_in: Optional[int] = Field(None, ge=1, le=settings.PREVIEW_LINK_MAX_DAYS)
    expires_at: Optional[datetime] = None
    require_password: bool = False
    password: Optional[str] = None
    message: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def check_expiry_and_password(self):
        if self.expires_in is None and self.expires_at is None:
            raise ValueError("expires_in 또는 expires_at 중 하나는 필요합니다.")
        if self.require_password and not self.password:
            raise ValueError("비밀번호 보호를 선택한 경우 비밀번호가 필요합니다.")
        return self


class PreviewLinkOut(BaseModel):
    link_id: int
    url: str
    token: str
    content_type: str
    content_id: int
    expires_at: datetime
    password: Optional[str] = None  # 마스킹된 값
    message: Optional[str] = None
    is_active: bool
    is_expired: bool
    view_count: int
    created_by: int
    created_at: Optional[datetime] = None


class PreviewLinkListOut(BaseModel):
    links: List[PreviewLinkOut]


class PreviewLinkCreateResult(BaseModel):
    message: str
    link: PreviewLinkOut


class PreviewContentOut(BaseModel):
    content_type: str
    content_id: int
    content: Dict[str, Any]
    message: Optional[str] = None
    expires_at: datetime
    view_count: int
