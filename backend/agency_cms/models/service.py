"""서비스 소개 콘텐츠의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON
from sqlalchemy.sql import func

from agency_cms.database import Base
from agency_cms.models.versioning import DEFAULT_IGNORED_FIELDS, VersionedContent


class Service(VersionedContent, Base):
    __tablename__ = "services"
    __version_type__ = "service"
    __versioned_fields__ = (
        "title",
        "slug",
        "description",
        "content",
        "icon",
        "featured_image",
        "price_range",
        "is_featured",
        "is_published",
        "published_at",
        "sort_order",
    )
    # 정렬 순서 변경은 이력으로 남기지 않는다.
    __version_ignored_fields__ = DEFAULT_IGNORED_FIELDS + ("sort_order",)

    service_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    slug = Column(String(220), unique=True, nullable=False)
    description = Column(Text)
    content = Column(JSON)
    icon = Column(String(100))
    featured_image = Column(String(500))
    price_range = Column(String(100))
    is_featured = Column(Boolean, default=False)
    is_published = Column(Boolean, default=False)
    published_at = Column(DateTime)
    sort_order = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())
