"""콘텐츠 미리보기 공유 링크의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from agency_cms.database import Base


class PreviewLink(Base):
    __tablename__ = "preview_links"

    link_id = Column(Integer, primary_key=True, autoincrement=True)
    content_type = Column(String(50), nullable=False)  # 모델 클래스명: Insight/Service/PortfolioItem
    content_id = Column(Integer, nullable=False)
    token = Column(String(64), unique=True, nullable=False)
    password = Column(String(100))  # bcrypt hash
    expires_at = Column(DateTime, nullable=False)
    message = Column(Text)
    created_by = Column(Integer, ForeignKey("users.user_id"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    view_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    creator = relationship("User", back_populates="preview_links")

    __table_args__ = (
        Index("idx_preview_link_content", "content_type", "content_id"),
        Index("idx_preview_link_lookup", "token", "expires_at", "is_active"),
    )

    @property
    def requires_password(self) -> bool:
        return bool(self.password)
