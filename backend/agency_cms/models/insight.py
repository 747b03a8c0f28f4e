"""인사이트(블로그 글) 콘텐츠의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from agency_cms.database import Base
from agency_cms.models.versioning import VersionedContent


class Insight(VersionedContent, Base):
    __tablename__ = "insights"
    __version_type__ = "insight"
    __versioned_fields__ = (
        "title",
        "slug",
        "excerpt",
        "content",
        "featured_image",
        "featured_image_alt",
        "author_id",
        "category",
        "tags",
        "reading_time",
        "is_featured",
        "is_published",
        "published_at",
    )

    insight_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    slug = Column(String(220), unique=True, nullable=False)
    excerpt = Column(Text)
    content = Column(JSON)  # {"body": "..."}
    featured_image = Column(String(500))
    featured_image_alt = Column(String(200))
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    category = Column(String(100))
    tags = Column(JSON)  # ["seo", "branding"]
    reading_time = Column(Integer)
    is_featured = Column(Boolean, default=False)
    is_published = Column(Boolean, default=False)
    published_at = Column(DateTime)
    views_count = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    author = relationship("User", back_populates="insights")

    __table_args__ = (
        Index("idx_insight_published", "is_published", "published_at"),
    )
