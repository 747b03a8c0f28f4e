"""FastAPI 애플리케이션 진입점. 미들웨어, 예외 핸들러, API 라우터를 등록합니다."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from agency_cms.config import settings
from agency_cms.database import Base, engine
from agency_cms.errors import CMSError
import agency_cms.models  # noqa: F401 - 모델 import로 metadata 등록
from agency_cms.routers import (
    auth, users, admin_content, content_versions, preview_links, preview, public,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Agency CMS",
    description="에이전시 웹사이트 콘텐츠 버전 관리 및 미리보기 링크 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CMSError)
async def cms_error_handler(request: Request, exc: CMSError):
    if exc.status_code >= 409:
        logger.warning("[api] %s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Register all routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(admin_content.router)
app.include_router(content_versions.router)
app.include_router(preview_links.router)
app.include_router(preview.router)
app.include_router(public.router)


@app.on_event("startup")
def ensure_schema():
    # 신규 기능 배포 시 누락된 테이블을 자동 생성합니다.
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Agency CMS"}
