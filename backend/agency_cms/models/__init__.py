"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from agency_cms.models.user import User
from agency_cms.models.insight import Insight
from agency_cms.models.service import Service
from agency_cms.models.portfolio import PortfolioItem
from agency_cms.models.content_version import ContentVersion
from agency_cms.models.preview_link import PreviewLink

__all__ = [
    "User",
    "Insight",
    "Service",
    "PortfolioItem",
    "ContentVersion",
    "PreviewLink",
]
