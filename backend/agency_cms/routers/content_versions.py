"""콘텐츠 버전 이력 API 라우터입니다. 이력 조회, 비교, 복원, 게시, 초안 저장을 제공합니다."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from agency_cms.database import get_db
from agency_cms.middleware.auth_middleware import require_roles
from agency_cms.models.content_version import ContentVersion
from agency_cms.models.user import User
from agency_cms.models.versioning import VersionedContent
from agency_cms.schemas.version import (
    ContentVersionDetail,
    VersionCompareOut,
    VersionDraftRequest,
    VersionDraftResult,
    VersionHistoryOut,
    VersionPublishRequest,
    VersionPublishResult,
    VersionRestoreRequest,
    VersionRestoreResult,
)
from agency_cms.services import content_registry, diff_service, version_service
from agency_cms.utils.permissions import ADMIN_EDITOR, ALL_ROLES

router = APIRouter(prefix="/api/admin/content-versions", tags=["content-versions"])


def _load_subject(db: Session, content_type: str, content_id: int) -> VersionedContent:
    model = content_registry.model_for_alias(content_type)
    if model is None:
        raise HTTPException(status_code=404, detail="지원하지 않는 콘텐츠 타입입니다.")
    entity = content_registry.load(db, model, content_id)
    if entity is None:
        raise HTTPException(status_code=404, detail="콘텐츠를 찾을 수 없습니다.")
    return entity


def _get_version_or_404(db: Session, entity: VersionedContent, version_number: int) -> ContentVersion:
    row = version_service.get_version_by_number(db, *entity.version_identity, version_number)
    if not row:
        raise HTTPException(status_code=404, detail="버전을 찾을 수 없습니다.")
    return row


def _compare_side(db: Session, row: ContentVersion) -> dict:
    payload = version_service.to_response(db, row)
    return {
        "version_number": payload["version_number"],
        "author": payload["author"],
        "created_at": payload["created_at"],
        "change_summary": payload["change_summary"],
    }


@router.get("/{content_type}/{content_id}", response_model=VersionHistoryOut)
def list_versions(
    content_type: str,
    content_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ALL_ROLES)),
):
    entity = _load_subject(db, content_type, content_id)
    versions = version_service.version_history(db, entity)
    return {"versions": versions, "total": len(versions)}


@router.get("/{content_type}/{content_id}/compare", response_model=VersionCompareOut)
def compare_versions(
    content_type: str,
    content_id: int,
    v1: int = Query(..., ge=1),
    v2: int = Query(..., ge=1),
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ALL_ROLES)),
):
    entity = _load_subject(db, content_type, content_id)
    row1 = _get_version_or_404(db, entity, v1)
    row2 = _get_version_or_404(db, entity, v2)
    return {
        "version1": _compare_side(db, row1),
        "version2": _compare_side(db, row2),
        "differences": diff_service.compare_fields(row1.content_data, row2.content_data),
    }


@router.get("/{content_type}/{content_id}/{version_number}", response_model=ContentVersionDetail)
def get_version(
    content_type: str,
    content_id: int,
    version_number: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ALL_ROLES)),
):
    entity = _load_subject(db, content_type, content_id)
    row = _get_version_or_404(db, entity, version_number)
    return version_service.to_response(db, row, include_data=True)


@router.post("/{content_type}/{content_id}/restore", response_model=VersionRestoreResult)
def restore_version(
    content_type: str,
    content_id: int,
    data: VersionRestoreRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    entity = _load_subject(db, content_type, content_id)
    row = _get_version_or_404(db, entity, data.version_number)
    if not version_service.restore(db, row):
        raise HTTPException(status_code=404, detail="복원할 콘텐츠를 찾을 수 없습니다.")

    if data.notes:
        # 복원 사유를 남기면 복원된 상태를 새 버전으로 기록한다.
        version_service.create_snapshot(
            db,
            entity,
            current_user.user_id,
            change_summary=f"Restored to version {data.version_number}",
            change_notes=data.notes,
        )

    current = version_service.current_version(db, entity)
    return {
        "message": f"버전 {data.version_number}(으)로 복원되었습니다.",
        "current_version": version_service.to_response(db, current) if current else None,
    }


@router.post("/{content_type}/{content_id}/publish", response_model=VersionPublishResult)
def publish_version(
    content_type: str,
    content_id: int,
    data: VersionPublishRequest,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    entity = _load_subject(db, content_type, content_id)
    if not version_service.publish_version(db, entity, data.version_number):
        raise HTTPException(status_code=404, detail="버전을 찾을 수 없습니다.")
    row = _get_version_or_404(db, entity, data.version_number)
    return {
        "message": f"버전 {data.version_number}이(가) 게시되었습니다.",
        "published_version": version_service.to_response(db, row),
    }


@router.post(
    "/{content_type}/{content_id}/draft",
    response_model=VersionDraftResult,
    status_code=status.HTTP_201_CREATED,
)
def create_draft(
    content_type: str,
    content_id: int,
    data: VersionDraftRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    entity = _load_subject(db, content_type, content_id)
    row = version_service.create_draft(
        db, entity, data.data, current_user.user_id, change_notes=data.change_notes
    )
    return {
        "message": "초안이 저장되었습니다.",
        "draft": version_service.to_response(db, row, include_data=True),
    }
