"""콘텐츠(인사이트/서비스/포트폴리오)의 변경 이력 스냅샷을 저장하는 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Boolean, ForeignKey, JSON, Index, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from agency_cms.database import Base


class ContentVersion(Base):
    __tablename__ = "content_versions"

    version_id = Column(Integer, primary_key=True, autoincrement=True)
    subject_type = Column(String(30), nullable=False)  # insight/service/portfolio_item
    subject_id = Column(Integer, nullable=False)
    version_number = Column(Integer, nullable=False)
    content_data = Column(JSON, nullable=False)
    author_id = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    change_summary = Column(String(255))
    change_notes = Column(Text)
    is_published = Column(Boolean, nullable=False, default=False)
    is_current = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    author = relationship("User", back_populates="content_versions")

    __table_args__ = (
        UniqueConstraint("subject_type", "subject_id", "version_number", name="uq_content_version_number"),
        Index("idx_content_version_subject", "subject_type", "subject_id"),
        Index("idx_content_version_current", "is_current"),
        Index("idx_content_version_published", "is_published"),
    )
