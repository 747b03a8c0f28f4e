"""인사이트/서비스/포트폴리오 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import date, datetime


class InsightBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    featured_image: Optional[str] = None
    featured_image_alt: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    reading_time: Optional[int] = None
    is_featured: bool = False
    is_published: bool = False
    published_at: Optional[datetime] = None


class InsightCreate(InsightBase):
    pass


class InsightUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    featured_image: Optional[str] = None
    featured_image_alt: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    reading_time: Optional[int] = None
    is_featured: Optional[bool] = None
    is_published: Optional[bool] = None
    published_at: Optional[datetime] = None


class InsightOut(InsightBase):
    insight_id: int
    slug: str
    author_id: Optional[int]
    views_count: Optional[int] = 0
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}


class ServiceBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = None
    description: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    icon: Optional[str] = None
    featured_image: Optional[str] = None
    price_range: Optional[str] = None
    is_featured: bool = False
    is_published: bool = False
    published_at: Optional[datetime] = None
    sort_order: int = 0


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = None
    description: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    icon: Optional[str] = None
    featured_image: Optional[str] = None
    price_range: Optional[str] = None
    is_featured: Optional[bool] = None
    is_published: Optional[bool] = None
    published_at: Optional[datetime] = None
    sort_order: Optional[int] = None


class ServiceOut(ServiceBase):
    service_id: int
    slug: str
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}


class PortfolioItemBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: Optional[str] = None
    description: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    featured_image: Optional[str] = None
    gallery: Optional[List[str]] = None
    client: Optional[str] = None
    project_date: Optional[date] = None
    project_url: Optional[str] = None
    technologies: Optional[List[str]] = None
    is_featured: bool = False
    is_published: bool = False
    published_at: Optional[datetime] = None
    sort_order: int = 0


class PortfolioItemCreate(PortfolioItemBase):
    pass


class PortfolioItemUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = None
    description: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    featured_image: Optional[str] = None
    gallery: Optional[List[str]] = None
    client: Optional[str] = None
    project_date: Optional[date] = None
    project_url: Optional[str] = None
    technologies: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    is_published: Optional[bool] = None
    published_at: Optional[datetime] = None
    sort_order: Optional[int] = None


class PortfolioItemOut(PortfolioItemBase):
    portfolio_item_id: int
    slug: str
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}
