"""Content Service 도메인 서비스 레이어입니다. 인사이트/서비스/포트폴리오 CRUD와 자동 버전 기록을 담당합니다."""

import logging
from typing import Any, Dict, List, Type

from fastapi import HTTPException
from sqlalchemy.orm import Session

from agency_cms.errors import CMSError
from agency_cms.models.insight import Insight
from agency_cms.models.user import User
from agency_cms.models.versioning import VersionedContent
from agency_cms.services import cache_service, content_store, diff_service, version_service
from agency_cms.services.diff_service import INITIAL_VERSION_SUMMARY

logger = logging.getLogger(__name__)


def get_content(db: Session, model: Type[VersionedContent], content_id: int) -> VersionedContent:
    entity = db.get(model, content_id)
    if not entity:
        raise HTTPException(status_code=404, detail="콘텐츠를 찾을 수 없습니다.")
    return entity


def list_content(db: Session, model: Type[VersionedContent], published_only: bool = False) -> List[VersionedContent]:
    q = db.query(model)
    if published_only:
        q = q.filter(model.is_published == True)
    if hasattr(model, "sort_order"):
        return q.order_by(model.sort_order, model.created_at.desc()).all()
    return q.order_by(model.created_at.desc()).all()


def create_content(
    db: Session, model: Type[VersionedContent], payload: Dict[str, Any], current_user: User
) -> VersionedContent:
    version_service.resolve_author(db, current_user.user_id)
    entity = model(**payload)
    if model is Insight and entity.author_id is None:
        entity.author_id = current_user.user_id
    content_store.save_content(db, entity)
    try:
        version_service.create_snapshot(db, entity, current_user.user_id, change_summary=INITIAL_VERSION_SUMMARY)
    except CMSError:
        # 버전 1을 남기지 못한 생성은 취소한다.
        logger.warning("[content] snapshot failed, removing new %s#%s", entity.__version_type__, entity.content_id)
        delete_content(db, entity)
        raise
    return entity


def update_content(
    db: Session, entity: VersionedContent, payload: Dict[str, Any], current_user: User
) -> VersionedContent:
    version_service.resolve_author(db, current_user.user_id)
    before = entity.to_content_data()
    for key, value in payload.items():
        setattr(entity, key, value)
    content_store.save_content(db, entity)

    changed = diff_service.diff_data(entity.to_content_data(), before).keys()
    if type(entity).significant_fields(changed):
        try:
            version_service.create_snapshot(db, entity, current_user.user_id)
        except CMSError:
            # 이력에 남지 않은 수정은 라이브 콘텐츠에도 남기지 않는다.
            logger.warning("[content] snapshot failed, reverting %s#%s", entity.__version_type__, entity.content_id)
            entity.fill_content_data(before)
            content_store.save_content(db, entity)
            raise
    return entity


def delete_content(db: Session, entity: VersionedContent) -> None:
    # 스냅샷은 남겨 둔다. 복원 시 대상이 없으면 실패로 처리된다.
    version_type = entity.__version_type__
    db.delete(entity)
    db.commit()
    cache_service.invalidate_content(version_type)
