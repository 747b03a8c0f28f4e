"""콘텐츠 미리보기 링크 발급/조회/비활성화를 담당하는 도메인 서비스입니다.

링크 상태는 Active → Expired(시간 경과) 또는 Active → Deactivated(수동) 로만
전이하며, 두 종료 상태 모두 접근을 거부합니다. resolve()는 예외 대신
PreviewResolution 결과로 분기합니다.
"""

import enum
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import bcrypt
from fastapi import HTTPException
from sqlalchemy.orm import Session

from agency_cms.config import settings
from agency_cms.errors import NotFoundError, ValidationError
from agency_cms.models.preview_link import PreviewLink
from agency_cms.models.user import User
from agency_cms.models.versioning import VersionedContent
from agency_cms.services import content_registry
from agency_cms.utils.helpers import to_naive_utc, utcnow
from agency_cms.utils.permissions import can_revoke_preview_link

logger = logging.getLogger(__name__)

PASSWORD_MASK = "••••••••"


class PreviewStatus(str, enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    PASSWORD_REQUIRED = "password_required"


@dataclass
class PreviewResolution:
    status: PreviewStatus
    link: Optional[PreviewLink] = None
    content: Optional[VersionedContent] = None


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: Optional[str], hashed: str) -> bool:
    if not password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # 72바이트 초과 입력 등 bcrypt가 거부하는 값은 불일치로 처리한다.
        return False


def validate_password(password: str) -> None:
    if not (settings.PREVIEW_PASSWORD_MIN_LENGTH <= len(password) <= settings.PREVIEW_PASSWORD_MAX_LENGTH):
        raise ValidationError(
            f"비밀번호는 {settings.PREVIEW_PASSWORD_MIN_LENGTH}~{settings.PREVIEW_PASSWORD_MAX_LENGTH}자여야 합니다."
        )
    if len(password.encode("utf-8")) > 72:
        raise ValidationError("비밀번호가 너무 깁니다.")


def is_expired(link: PreviewLink, now: Optional[datetime] = None) -> bool:
    return link.expires_at <= (now or utcnow())


def is_usable(link: PreviewLink, now: Optional[datetime] = None) -> bool:
    return bool(link.is_active) and not is_expired(link, now)


def full_url(link: PreviewLink) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/preview/{link.token}"


def _generate_token(db: Session) -> str:
    while True:
        token = secrets.token_urlsafe(settings.PREVIEW_TOKEN_BYTES)
        if not db.query(PreviewLink.link_id).filter(PreviewLink.token == token).first():
            return token


def issue(
    db: Session,
    content: VersionedContent,
    expires_at: datetime,
    issuer_id: int,
    password: Optional[str] = None,
    message: Optional[str] = None,
) -> PreviewLink:
    expires_at = to_naive_utc(expires_at)
    if expires_at <= utcnow():
        raise ValidationError("만료 시각은 현재 이후여야 합니다.")
    if password is not None:
        validate_password(password)
    if content is None or content.content_id is None:
        raise NotFoundError("콘텐츠를 찾을 수 없습니다.")

    link = PreviewLink(
        content_type=type(content).__name__,
        content_id=content.content_id,
        token=_generate_token(db),
        password=hash_password(password) if password else None,
        expires_at=expires_at,
        message=message,
        created_by=issuer_id,
        is_active=True,
        view_count=0,
    )
    db.add(link)
    db.commit()
    db.refresh(link)
    logger.info(
        "[preview] issued link %s for %s#%s by user %s (expires %s)",
        link.link_id, link.content_type, link.content_id, issuer_id, link.expires_at,
    )
    return link


def resolve(db: Session, token: str, password: Optional[str] = None) -> PreviewResolution:
    link = db.query(PreviewLink).filter(PreviewLink.token == token).first()
    if not link:
        return PreviewResolution(PreviewStatus.NOT_FOUND)
    if not is_usable(link):
        return PreviewResolution(PreviewStatus.EXPIRED, link=link)
    if link.requires_password and not verify_password(password, link.password):
        return PreviewResolution(PreviewStatus.PASSWORD_REQUIRED, link=link)

    content = content_registry.load_preview_subject(db, link.content_type, link.content_id)
    if content is None:
        return PreviewResolution(PreviewStatus.NOT_FOUND, link=link)

    # 원자적 증가. 읽고-쓰기 방식은 동시 접근 시 누락이 생긴다.
    db.query(PreviewLink).filter(PreviewLink.link_id == link.link_id).update(
        {PreviewLink.view_count: PreviewLink.view_count + 1},
        synchronize_session=False,
    )
    db.commit()
    db.refresh(link)
    return PreviewResolution(PreviewStatus.OK, link=link, content=content)


def list_links(db: Session, content: VersionedContent) -> List[PreviewLink]:
    return (
        db.query(PreviewLink)
        .filter(
            PreviewLink.content_type == type(content).__name__,
            PreviewLink.content_id == content.content_id,
            PreviewLink.expires_at > utcnow(),
        )
        .order_by(PreviewLink.created_at.desc(), PreviewLink.link_id.desc())
        .all()
    )


def get_link(db: Session, link_id: int) -> PreviewLink:
    link = db.query(PreviewLink).filter(PreviewLink.link_id == link_id).first()
    if not link:
        raise HTTPException(status_code=404, detail="미리보기 링크를 찾을 수 없습니다.")
    return link


def _ensure_can_manage(link: PreviewLink, current_user: User) -> None:
    if not can_revoke_preview_link(current_user, link.created_by):
        raise HTTPException(status_code=403, detail="링크 생성자 또는 관리자만 변경할 수 있습니다.")


def deactivate(db: Session, link_id: int, current_user: User) -> PreviewLink:
    link = get_link(db, link_id)
    _ensure_can_manage(link, current_user)
    if link.is_active:
        link.is_active = False
        db.commit()
        db.refresh(link)
        logger.info("[preview] deactivated link %s by user %s", link.link_id, current_user.user_id)
    return link


def revoke(db: Session, link_id: int, current_user: User) -> None:
    link = get_link(db, link_id)
    _ensure_can_manage(link, current_user)
    db.delete(link)
    db.commit()
    logger.info("[preview] revoked link %s by user %s", link_id, current_user.user_id)


def to_response(link: PreviewLink) -> dict:
    return {
        "link_id": link.link_id,
        "url": full_url(link),
        "token": link.token,
        "content_type": link.content_type,
        "content_id": link.content_id,
        "expires_at": link.expires_at,
        "password": PASSWORD_MASK if link.password else None,
        "message": link.message,
        "is_active": bool(link.is_active),
        "is_expired": is_expired(link),
        "view_count": link.view_count,
        "created_by": link.created_by,
        "created_at": link.created_at,
    }
