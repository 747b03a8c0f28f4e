"""공개 미리보기 라우터입니다. 토큰으로 미공개 콘텐츠를 조회합니다."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from agency_cms.database import get_db
from agency_cms.schemas.preview_link import PreviewContentOut
from agency_cms.services import preview_service
from agency_cms.services.preview_service import PreviewStatus

router = APIRouter(prefix="/preview", tags=["preview"])


@router.get("/{token}", response_model=PreviewContentOut)
def show_preview(token: str, password: Optional[str] = None, db: Session = Depends(get_db)):
    result = preview_service.resolve(db, token, password)

    if result.status == PreviewStatus.NOT_FOUND:
        raise HTTPException(status_code=404, detail="미리보기 링크를 찾을 수 없습니다.")
    if result.status == PreviewStatus.EXPIRED:
        raise HTTPException(status_code=410, detail="미리보기 링크가 만료되었습니다.")
    if result.status == PreviewStatus.PASSWORD_REQUIRED:
        return JSONResponse(
            status_code=401,
            content={"detail": "비밀번호가 필요합니다.", "requires_password": True},
        )

    return {
        "content_type": result.link.content_type,
        "content_id": result.link.content_id,
        "content": result.content.to_content_data(),
        "message": result.link.message,
        "expires_at": result.link.expires_at,
        "view_count": result.link.view_count,
    }
