"""콘텐츠 버전 이력 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class VersionAuthor(BaseModel):
    user_id: int
    name: str
    email: str


class ContentVersionOut(BaseModel):
    version_id: int
    subject_type: str
    subject_id: int
    version_number: int
    author: Optional[VersionAuthor] = None
    change_summary: str
    change_notes: Optional[str] = None
    is_current: bool
    is_published: bool
    created_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


class ContentVersionDetail(ContentVersionOut):
    content_data: Dict[str, Any]


class VersionHistoryOut(BaseModel):
    versions: List[ContentVersionOut]
    total: int


class VersionRestoreRequest(BaseModel):
    version_number: int = Field(..., ge=1)
    notes: Optional[str] = Field(None, max_length=1000)


class VersionPublishRequest(BaseModel):
    version_number: int = Field(..., ge=1)


class VersionDraftRequest(BaseModel):
    data: Dict[str, Any]
    change_notes: Optional[str] = Field(None, max_length=1000)


class VersionRestoreResult(BaseModel):
    message: str
    current_version: Optional[ContentVersionOut] = None


class VersionPublishResult(BaseModel):
    message: str
    published_version: Optional[ContentVersionOut] = None


class VersionDraftResult(BaseModel):
    message: str
    draft: ContentVersionDetail


class VersionCompareSide(BaseModel):
    version_number: int
    author: Optional[VersionAuthor] = None
    created_at: Optional[datetime] = None
    change_summary: str


class FieldDifference(BaseModel):
    field: str
    old_value: Any = None
    new_value: Any = None
    type: str  # added/modified/removed


class VersionCompareOut(BaseModel):
    version1: VersionCompareSide
    version2: VersionCompareSide
    differences: List[FieldDifference]
