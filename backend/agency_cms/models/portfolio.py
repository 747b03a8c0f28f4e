"""포트폴리오 항목 콘텐츠의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, JSON
from sqlalchemy.sql import func

from agency_cms.database import Base
from agency_cms.models.versioning import DEFAULT_IGNORED_FIELDS, VersionedContent


class PortfolioItem(VersionedContent, Base):
    __tablename__ = "portfolio_items"
    __version_type__ = "portfolio_item"
    __versioned_fields__ = (
        "title",
        "slug",
        "description",
        "content",
        "featured_image",
        "gallery",
        "client",
        "project_date",
        "project_url",
        "technologies",
        "is_featured",
        "is_published",
        "published_at",
        "sort_order",
    )
    __version_ignored_fields__ = DEFAULT_IGNORED_FIELDS + ("sort_order",)

    portfolio_item_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    slug = Column(String(220), unique=True, nullable=False)
    description = Column(Text)
    content = Column(JSON)
    featured_image = Column(String(500))
    gallery = Column(JSON)  # [image url, ...]
    client = Column(String(150))
    project_date = Column(Date)
    project_url = Column(String(500))
    technologies = Column(JSON)
    is_featured = Column(Boolean, default=False)
    is_published = Column(Boolean, default=False)
    published_at = Column(DateTime)
    sort_order = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())
