"""콘텐츠 버전 저장/조회/복원/게시/초안 기능을 제공하는 도메인 서비스입니다.

- 버전 번호는 콘텐츠별로 1부터 빈틈없이 증가하며, (subject_type, subject_id,
  version_number) 유니크 제약이 중복 번호를 막는다. 충돌 시 번호를 다시 계산해
  재시도한다.
- 콘텐츠별 is_current 스냅샷은 최대 1개다. 해제와 지정은 항상 한 트랜잭션 안에서
  처리한다.
- 복원은 새 버전을 만들지 않고 과거 스냅샷을 current로 되돌린다.
"""

import copy
import logging
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agency_cms.config import settings
from agency_cms.errors import AuthorshipError, ValidationError, VersionConflictError
from agency_cms.models.content_version import ContentVersion
from agency_cms.models.user import User
from agency_cms.models.versioning import VersionedContent
from agency_cms.services import content_registry, content_store, diff_service
from agency_cms.utils.helpers import utcnow

logger = logging.getLogger(__name__)

DRAFT_SUMMARY = "Draft version"


def _subject_query(db: Session, subject_type: str, subject_id: int):
    return db.query(ContentVersion).filter(
        ContentVersion.subject_type == subject_type,
        ContentVersion.subject_id == subject_id,
    )


def resolve_author(db: Session, author_id: Optional[int]) -> User:
    if author_id is None:
        raise AuthorshipError("버전 작성자를 확인할 수 없습니다.")
    user = db.query(User).filter(User.user_id == author_id, User.is_active == True).first()
    if not user:
        raise AuthorshipError("버전 작성자를 확인할 수 없습니다.")
    return user


def next_version_number(db: Session, subject_type: str, subject_id: int) -> int:
    # 최신 행을 잠그고 읽는다. SQLite에서는 FOR UPDATE가 생략된다.
    latest = (
        _subject_query(db, subject_type, subject_id)
        .order_by(ContentVersion.version_number.desc())
        .with_for_update()
        .first()
    )
    return (latest.version_number if latest else 0) + 1


def mark_all_non_current(db: Session, subject_type: str, subject_id: int) -> None:
    _subject_query(db, subject_type, subject_id).update({ContentVersion.is_current: False})


def mark_current(db: Session, snapshot: ContentVersion) -> None:
    mark_all_non_current(db, snapshot.subject_type, snapshot.subject_id)
    snapshot.is_current = True
    db.flush()


def _insert_with_retry(
    db: Session,
    subject_type: str,
    subject_id: int,
    build: Callable[[int], ContentVersion],
    make_current: bool,
) -> ContentVersion:
    # 호출 전에 엔티티 변경은 이미 커밋되어 있어야 한다. 충돌 시 rollback하기 때문이다.
    attempts = max(1, settings.VERSION_WRITE_RETRIES)
    for attempt in range(1, attempts + 1):
        version_number = next_version_number(db, subject_type, subject_id)
        if make_current:
            mark_all_non_current(db, subject_type, subject_id)
        row = build(version_number)
        db.add(row)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "[version] number collision %s#%s v%s (attempt %s/%s)",
                subject_type, subject_id, version_number, attempt, attempts,
            )
            continue
        db.refresh(row)
        return row
    raise VersionConflictError("동시에 저장된 버전이 있어 버전 번호를 할당하지 못했습니다. 다시 시도해 주세요.")


def create_snapshot(
    db: Session,
    entity: VersionedContent,
    author_id: Optional[int],
    change_summary: Optional[str] = None,
    change_notes: Optional[str] = None,
) -> ContentVersion:
    resolve_author(db, author_id)
    subject_type, subject_id = entity.version_identity
    content_data = entity.to_content_data()
    is_published = bool(entity.is_published)
    published_at = entity.published_at or (utcnow() if is_published else None)

    def build(version_number: int) -> ContentVersion:
        return ContentVersion(
            subject_type=subject_type,
            subject_id=subject_id,
            version_number=version_number,
            content_data=content_data,
            author_id=author_id,
            change_summary=change_summary,
            change_notes=change_notes,
            is_current=True,
            is_published=is_published,
            published_at=published_at,
        )

    row = _insert_with_retry(db, subject_type, subject_id, build, make_current=True)
    logger.info("[version] snapshot %s#%s v%s by user %s", subject_type, subject_id, row.version_number, author_id)
    return row


def create_draft(
    db: Session,
    entity: VersionedContent,
    patch: Dict[str, Any],
    author_id: Optional[int],
    change_notes: Optional[str] = None,
) -> ContentVersion:
    if not isinstance(patch, dict) or not patch:
        raise ValidationError("초안 데이터(data)는 비어 있지 않은 객체여야 합니다.")
    unknown = type(entity).unknown_fields(patch.keys())
    if unknown:
        raise ValidationError(f"버전 관리 대상이 아닌 필드입니다: {', '.join(unknown)}")
    invalid = type(entity).invalid_values(patch)
    if invalid:
        detail = ", ".join(f"{field}({reason})" for field, reason in sorted(invalid.items()))
        raise ValidationError(f"저장할 수 없는 값이 있습니다: {detail}")
    resolve_author(db, author_id)

    subject_type, subject_id = entity.version_identity
    merged = entity.to_content_data()
    merged.update(copy.deepcopy(patch))

    def build(version_number: int) -> ContentVersion:
        return ContentVersion(
            subject_type=subject_type,
            subject_id=subject_id,
            version_number=version_number,
            content_data=merged,
            author_id=author_id,
            change_summary=DRAFT_SUMMARY,
            change_notes=change_notes,
            is_current=False,
            is_published=False,
            published_at=None,
        )

    row = _insert_with_retry(db, subject_type, subject_id, build, make_current=False)
    logger.info("[version] draft %s#%s v%s by user %s", subject_type, subject_id, row.version_number, author_id)
    return row


def restore(db: Session, snapshot: ContentVersion) -> bool:
    entity = content_registry.load_snapshot_subject(db, snapshot.subject_type, snapshot.subject_id)
    if entity is None:
        logger.info("[version] restore skipped, %s#%s no longer exists", snapshot.subject_type, snapshot.subject_id)
        return False

    try:
        entity.fill_content_data(snapshot.content_data)
        content_store.save_content(db, entity, commit=False)
        mark_current(db, snapshot)
        db.commit()
    except (ValueError, IntegrityError) as exc:
        # 엔티티와 current 플래그 모두 복원 전 상태로 되돌린다.
        db.rollback()
        logger.warning(
            "[version] restore failed %s#%s v%s: %s",
            snapshot.subject_type, snapshot.subject_id, snapshot.version_number, exc,
        )
        raise ValidationError(f"버전 {snapshot.version_number}의 데이터로 복원할 수 없습니다.") from exc
    db.refresh(entity)
    db.refresh(snapshot)
    logger.info("[version] restored %s#%s to v%s", snapshot.subject_type, snapshot.subject_id, snapshot.version_number)
    return True


def restore_to_version(db: Session, entity: VersionedContent, version_number: int) -> bool:
    row = get_version_by_number(db, *entity.version_identity, version_number)
    if not row:
        return False
    return restore(db, row)


def publish_version(db: Session, entity: VersionedContent, version_number: int) -> bool:
    subject_type, subject_id = entity.version_identity
    row = get_version_by_number(db, subject_type, subject_id, version_number)
    if not row:
        return False

    now = utcnow()
    _subject_query(db, subject_type, subject_id).update({ContentVersion.is_published: False})
    row.is_published = True
    row.published_at = now
    entity.is_published = True
    entity.published_at = now
    content_store.save_content(db, entity, commit=False)
    db.commit()
    db.refresh(row)
    logger.info("[version] published %s#%s v%s", subject_type, subject_id, version_number)
    return True


def list_versions(db: Session, subject_type: str, subject_id: int) -> List[ContentVersion]:
    return (
        _subject_query(db, subject_type, subject_id)
        .order_by(ContentVersion.version_number.desc())
        .all()
    )


def get_version_by_number(
    db: Session, subject_type: str, subject_id: int, version_number: int
) -> Optional[ContentVersion]:
    return (
        _subject_query(db, subject_type, subject_id)
        .filter(ContentVersion.version_number == version_number)
        .first()
    )


def current_version(db: Session, entity: VersionedContent) -> Optional[ContentVersion]:
    return _subject_query(db, *entity.version_identity).filter(ContentVersion.is_current == True).first()


def latest_published_version(db: Session, entity: VersionedContent) -> Optional[ContentVersion]:
    return (
        _subject_query(db, *entity.version_identity)
        .filter(ContentVersion.is_published == True)
        .order_by(ContentVersion.version_number.desc())
        .first()
    )


def version_count(db: Session, entity: VersionedContent) -> int:
    return _subject_query(db, *entity.version_identity).count()


def to_response(db: Session, row: ContentVersion, include_data: bool = False) -> Dict[str, Any]:
    author = row.author
    payload = {
        "version_id": row.version_id,
        "subject_type": row.subject_type,
        "subject_id": row.subject_id,
        "version_number": row.version_number,
        "author": {"user_id": author.user_id, "name": author.name, "email": author.email} if author else None,
        "change_summary": diff_service.summarize(db, row),
        "change_notes": row.change_notes,
        "is_current": bool(row.is_current),
        "is_published": bool(row.is_published),
        "created_at": row.created_at,
        "published_at": row.published_at,
    }
    if include_data:
        payload["content_data"] = row.content_data
    return payload


def version_history(db: Session, entity: VersionedContent) -> List[Dict[str, Any]]:
    return [to_response(db, row) for row in list_versions(db, *entity.version_identity)]
