"""미리보기 링크 관리 API 라우터입니다. 링크 발급/조회/비활성화/삭제를 제공합니다."""

from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from agency_cms.config import settings
from agency_cms.database import get_db
from agency_cms.errors import ValidationError
from agency_cms.middleware.auth_middleware import require_roles
from agency_cms.models.user import User
from agency_cms.models.versioning import VersionedContent
from agency_cms.schemas.preview_link import (
    PreviewLinkCreate,
    PreviewLinkCreateResult,
    PreviewLinkListOut,
    PreviewLinkOut,
)
from agency_cms.services import content_registry, preview_service
from agency_cms.utils.helpers import to_naive_utc, utcnow
from agency_cms.utils.permissions import ADMIN_EDITOR

router = APIRouter(prefix="/api/admin/preview-links", tags=["preview-links"])


def _load_subject(db: Session, content_type: str, content_id: int) -> VersionedContent:
    model = content_registry.model_for_alias(content_type)
    if model is None:
        raise HTTPException(status_code=404, detail="지원하지 않는 콘텐츠 타입입니다.")
    entity = content_registry.load(db, model, content_id)
    if entity is None:
        raise HTTPException(status_code=404, detail="콘텐츠를 찾을 수 없습니다.")
    return entity


def _requested_expiry(expires_in: Optional[int], expires_at: Optional[datetime]) -> datetime:
    now = utcnow()
    if expires_at is None:
        return now + timedelta(days=expires_in)
    expires_at = to_naive_utc(expires_at)
    if expires_at > now + timedelta(days=settings.PREVIEW_LINK_MAX_DAYS):
        raise ValidationError(f"미리보기 링크는 최대 {settings.PREVIEW_LINK_MAX_DAYS}일까지 유효합니다.")
    return expires_at


# link_id 경로는 "/{content_type}/{content_id}" 보다 먼저 등록해야 한다.
@router.post("/{link_id}/deactivate", response_model=PreviewLinkOut)
def deactivate_link(
    link_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    link = preview_service.deactivate(db, link_id, current_user)
    return preview_service.to_response(link)


@router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
def revoke_link(
    link_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    preview_service.revoke(db, link_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{content_type}/{content_id}", response_model=PreviewLinkListOut)
def list_links(
    content_type: str,
    content_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    entity = _load_subject(db, content_type, content_id)
    return {"links": [preview_service.to_response(link) for link in preview_service.list_links(db, entity)]}


@router.post(
    "/{content_type}/{content_id}",
    response_model=PreviewLinkCreateResult,
    status_code=status.HTTP_201_CREATED,
)
def issue_link(
    content_type: str,
    content_id: int,
    data: PreviewLinkCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    entity = _load_subject(db, content_type, content_id)
    link = preview_service.issue(
        db,
        entity,
        expires_at=_requested_expiry(data.expires_in, data.expires_at),
        issuer_id=current_user.user_id,
        password=data.password if data.require_password else None,
        message=data.message,
    )
    return {"message": "미리보기 링크가 생성되었습니다.", "link": preview_service.to_response(link)}
