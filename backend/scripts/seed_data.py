"""Seed the database with sample users and content."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date
from agency_cms.database import SessionLocal, engine, Base
import agency_cms.models  # noqa: F401

from agency_cms.models.insight import Insight
from agency_cms.models.portfolio import PortfolioItem
from agency_cms.models.service import Service
from agency_cms.models.user import User
from agency_cms.services import content_service


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        # Users
        users = [
            User(email="admin@agency.test", name="관리자 김철수", role="admin"),
            User(email="editor@agency.test", name="에디터 이영희", role="editor"),
            User(email="viewer@agency.test", name="뷰어 박민준", role="viewer"),
        ]
        db.add_all(users)
        db.commit()
        for u in users:
            db.refresh(u)
        editor = users[1]

        # Content (버전 1이 함께 기록된다)
        services = [
            {"title": "웹사이트 구축", "description": "기업 홈페이지와 캠페인 사이트 구축",
             "icon": "globe", "price_range": "₩10M~", "is_featured": True, "is_published": True, "sort_order": 1},
            {"title": "브랜드 디자인", "description": "로고, 가이드라인, 브랜드 경험 설계",
             "icon": "palette", "is_featured": True, "is_published": True, "sort_order": 2},
            {"title": "유지보수", "description": "운영 중인 사이트의 월간 유지보수", "sort_order": 3},
        ]
        for payload in services:
            content_service.create_content(db, Service, payload, editor)

        content_service.create_content(db, PortfolioItem, {
            "title": "커머스 리뉴얼",
            "description": "대형 쇼핑몰 프런트엔드 리뉴얼",
            "client": "A 리테일",
            "project_date": date(2026, 3, 31),
            "technologies": ["FastAPI", "Vue"],
            "gallery": ["/media/portfolio/commerce-1.png"],
            "is_featured": True,
            "is_published": True,
        }, editor)

        insight = content_service.create_content(db, Insight, {
            "title": "콘텐츠 버전 관리를 도입하며",
            "excerpt": "편집 이력과 미리보기 링크로 검수 흐름을 바꾼 이야기",
            "content": {"blocks": [{"type": "paragraph", "text": "초안"}]},
            "category": "engineering",
            "tags": ["cms", "workflow"],
            "reading_time": 4,
        }, editor)
        content_service.update_content(db, insight, {
            "content": {"blocks": [{"type": "paragraph", "text": "검수 완료본"}]},
            "is_published": True,
        }, editor)

        print("Seed data created successfully.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
