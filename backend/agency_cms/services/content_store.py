"""콘텐츠 엔티티의 공통 저장 경로입니다.

수동 편집, 버전 복원, 게시 처리 모두 이 함수를 거쳐 저장되므로
슬러그 정규화와 캐시 무효화가 항상 같은 방식으로 실행됩니다.
"""

import logging

from sqlalchemy.orm import Session

from agency_cms.models.versioning import VersionedContent
from agency_cms.services import cache_service
from agency_cms.utils.helpers import slugify, utcnow

logger = logging.getLogger(__name__)


def _unique_slug(db: Session, entity: VersionedContent, base: str) -> str:
    model = type(entity)
    id_column = getattr(model, model.id_field())
    candidate = base
    suffix = 2
    while True:
        q = db.query(model).filter(model.slug == candidate)
        if entity.content_id is not None:
            q = q.filter(id_column != entity.content_id)
        if q.first() is None:
            return candidate
        candidate = f"{base}-{suffix}"
        suffix += 1


def save_content(db: Session, entity: VersionedContent, commit: bool = True) -> VersionedContent:
    base = slugify(entity.slug) or slugify(entity.title) or entity.__version_type__
    entity.slug = _unique_slug(db, entity, base)
    if entity.is_published and entity.published_at is None:
        entity.published_at = utcnow()

    db.add(entity)
    db.flush()
    if commit:
        db.commit()
        db.refresh(entity)

    cache_service.invalidate_content(entity.__version_type__)
    logger.debug("content saved type=%s id=%s slug=%s", entity.__version_type__, entity.content_id, entity.slug)
    return entity
