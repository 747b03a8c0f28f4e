"""공개 사이트용 읽기 API 라우터입니다. 게시된 콘텐츠만 캐시를 거쳐 제공합니다."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from agency_cms.database import get_db
from agency_cms.models.insight import Insight
from agency_cms.models.portfolio import PortfolioItem
from agency_cms.models.service import Service
from agency_cms.schemas.content import InsightOut, PortfolioItemOut, ServiceOut
from agency_cms.services import cache_service, content_service
from agency_cms.services.cache_service import TAGS

router = APIRouter(prefix="/api/public", tags=["public"])

HOME_FEATURED_LIMIT = 6
HOME_INSIGHT_LIMIT = 3


def _dump(schema, rows) -> list:
    return [schema.model_validate(row).model_dump(mode="json") for row in rows]


@router.get("/home")
def home(db: Session = Depends(get_db)):
    def load():
        services = [s for s in content_service.list_content(db, Service, published_only=True) if s.is_featured]
        portfolio = [p for p in content_service.list_content(db, PortfolioItem, published_only=True) if p.is_featured]
        insights = (
            db.query(Insight)
            .filter(Insight.is_published == True)
            .order_by(Insight.published_at.desc())
            .limit(HOME_INSIGHT_LIMIT)
            .all()
        )
        return {
            "featured_services": _dump(ServiceOut, services[:HOME_FEATURED_LIMIT]),
            "featured_portfolio": _dump(PortfolioItemOut, portfolio[:HOME_FEATURED_LIMIT]),
            "latest_insights": _dump(InsightOut, insights),
        }

    return cache_service.remember("public:home", load, tags=[TAGS["homepage"], TAGS["content"]])


@router.get("/services")
def list_services(db: Session = Depends(get_db)):
    return cache_service.remember(
        "public:services",
        lambda: _dump(ServiceOut, content_service.list_content(db, Service, published_only=True)),
        tags=[TAGS["service"], TAGS["content"]],
    )


@router.get("/portfolio")
def list_portfolio(db: Session = Depends(get_db)):
    return cache_service.remember(
        "public:portfolio",
        lambda: _dump(PortfolioItemOut, content_service.list_content(db, PortfolioItem, published_only=True)),
        tags=[TAGS["portfolio_item"], TAGS["content"]],
    )


@router.get("/insights")
def list_insights(category: str = None, db: Session = Depends(get_db)):
    def load():
        q = db.query(Insight).filter(Insight.is_published == True)
        if category:
            q = q.filter(Insight.category == category)
        return _dump(InsightOut, q.order_by(Insight.published_at.desc()).all())

    return cache_service.remember(
        f"public:insights:{category or 'all'}",
        load,
        tags=[TAGS["insight"], TAGS["content"]],
    )


@router.get("/insights/{slug}")
def get_insight(slug: str, db: Session = Depends(get_db)):
    def load():
        insight = db.query(Insight).filter(Insight.slug == slug, Insight.is_published == True).first()
        if not insight:
            raise HTTPException(status_code=404, detail="인사이트를 찾을 수 없습니다.")
        return InsightOut.model_validate(insight).model_dump(mode="json")

    return cache_service.remember(f"public:insight:{slug}", load, tags=[TAGS["insight"], TAGS["content"]])
