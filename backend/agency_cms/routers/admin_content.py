"""관리자 콘텐츠(인사이트/서비스/포트폴리오) CRUD API 라우터입니다.

생성/수정은 content_service를 거치며 자동으로 버전이 기록됩니다.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from agency_cms.database import get_db
from agency_cms.middleware.auth_middleware import require_roles
from agency_cms.models.insight import Insight
from agency_cms.models.portfolio import PortfolioItem
from agency_cms.models.service import Service
from agency_cms.models.user import User
from agency_cms.schemas.content import (
    InsightCreate, InsightOut, InsightUpdate,
    PortfolioItemCreate, PortfolioItemOut, PortfolioItemUpdate,
    ServiceCreate, ServiceOut, ServiceUpdate,
)
from agency_cms.services import content_service
from agency_cms.utils.permissions import ADMIN_EDITOR, ALL_ROLES

router = APIRouter(prefix="/api/admin", tags=["admin-content"])


# ── Insights ─────────────────────────────────────────────

@router.get("/insights", response_model=List[InsightOut])
def list_insights(
    published_only: bool = False,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ALL_ROLES)),
):
    return content_service.list_content(db, Insight, published_only=published_only)


@router.post("/insights", response_model=InsightOut, status_code=status.HTTP_201_CREATED)
def create_insight(
    data: InsightCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    return content_service.create_content(db, Insight, data.model_dump(), current_user)


@router.get("/insights/{insight_id}", response_model=InsightOut)
def get_insight(
    insight_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ALL_ROLES)),
):
    return content_service.get_content(db, Insight, insight_id)


@router.put("/insights/{insight_id}", response_model=InsightOut)
def update_insight(
    insight_id: int,
    data: InsightUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    entity = content_service.get_content(db, Insight, insight_id)
    return content_service.update_content(db, entity, data.model_dump(exclude_unset=True), current_user)


@router.delete("/insights/{insight_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_insight(
    insight_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    content_service.delete_content(db, content_service.get_content(db, Insight, insight_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Services ─────────────────────────────────────────────

@router.get("/services", response_model=List[ServiceOut])
def list_services(
    published_only: bool = False,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ALL_ROLES)),
):
    return content_service.list_content(db, Service, published_only=published_only)


@router.post("/services", response_model=ServiceOut, status_code=status.HTTP_201_CREATED)
def create_service(
    data: ServiceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    return content_service.create_content(db, Service, data.model_dump(), current_user)


@router.get("/services/{service_id}", response_model=ServiceOut)
def get_service(
    service_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ALL_ROLES)),
):
    return content_service.get_content(db, Service, service_id)


@router.put("/services/{service_id}", response_model=ServiceOut)
def update_service(
    service_id: int,
    data: ServiceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    entity = content_service.get_content(db, Service, service_id)
    return content_service.update_content(db, entity, data.model_dump(exclude_unset=True), current_user)


@router.delete("/services/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(
    service_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    content_service.delete_content(db, content_service.get_content(db, Service, service_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ── Portfolio ────────────────────────────────────────────

@router.get("/portfolio", response_model=List[PortfolioItemOut])
def list_portfolio(
    published_only: bool = False,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ALL_ROLES)),
):
    return content_service.list_content(db, PortfolioItem, published_only=published_only)


@router.post("/portfolio", response_model=PortfolioItemOut, status_code=status.HTTP_201_CREATED)
def create_portfolio_item(
    data: PortfolioItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    return content_service.create_content(db, PortfolioItem, data.model_dump(), current_user)


@router.get("/portfolio/{item_id}", response_model=PortfolioItemOut)
def get_portfolio_item(
    item_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ALL_ROLES)),
):
    return content_service.get_content(db, PortfolioItem, item_id)


@router.put("/portfolio/{item_id}", response_model=PortfolioItemOut)
def update_portfolio_item(
    item_id: int,
    data: PortfolioItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    entity = content_service.get_content(db, PortfolioItem, item_id)
    return content_service.update_content(db, entity, data.model_dump(exclude_unset=True), current_user)


@router.delete("/portfolio/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_portfolio_item(
    item_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ADMIN_EDITOR)),
):
    content_service.delete_content(db, content_service.get_content(db, PortfolioItem, item_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
