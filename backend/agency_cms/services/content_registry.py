"""버전/미리보기 대상 콘텐츠 타입을 모델 클래스로 해석하는 레지스트리입니다.

스냅샷은 ``__version_type__`` 태그(insight 등)로, 미리보기 링크는 모델
클래스명(Insight 등)으로 대상을 가리킵니다. 관리자 URL 경로는 기존 화면에서
쓰던 별칭(insights, portfolio-item 등)을 그대로 받습니다.
"""

from typing import Dict, List, Optional, Type

from sqlalchemy.orm import Session

from agency_cms.models.insight import Insight
from agency_cms.models.portfolio import PortfolioItem
from agency_cms.models.service import Service
from agency_cms.models.versioning import VersionedContent

CONTENT_MODELS: List[Type[VersionedContent]] = [Insight, Service, PortfolioItem]

_BY_VERSION_TYPE: Dict[str, Type[VersionedContent]] = {m.__version_type__: m for m in CONTENT_MODELS}
_BY_CLASS_NAME: Dict[str, Type[VersionedContent]] = {m.__name__: m for m in CONTENT_MODELS}

URL_ALIASES: Dict[str, Type[VersionedContent]] = {
    "insight": Insight,
    "insights": Insight,
    "service": Service,
    "services": Service,
    "portfolio": PortfolioItem,
    "portfolio-item": PortfolioItem,
}


def model_for_alias(alias: str) -> Optional[Type[VersionedContent]]:
    return URL_ALIASES.get(str(alias or "").strip().lower())


def model_for_version_type(subject_type: str) -> Optional[Type[VersionedContent]]:
    return _BY_VERSION_TYPE.get(subject_type)


def model_for_class_name(content_type: str) -> Optional[Type[VersionedContent]]:
    return _BY_CLASS_NAME.get(content_type)


def load(db: Session, model: Optional[Type[VersionedContent]], content_id: int) -> Optional[VersionedContent]:
    if model is None:
        return None
    return db.get(model, content_id)


def load_by_alias(db: Session, alias: str, content_id: int) -> Optional[VersionedContent]:
    return load(db, model_for_alias(alias), content_id)


def load_snapshot_subject(db: Session, subject_type: str, subject_id: int) -> Optional[VersionedContent]:
    return load(db, model_for_version_type(subject_type), subject_id)


def load_preview_subject(db: Session, content_type: str, content_id: int) -> Optional[VersionedContent]:
    return load(db, model_for_class_name(content_type), content_id)
