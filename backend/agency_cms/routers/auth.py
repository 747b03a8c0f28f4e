"""CMS 관리자 로그인 API 라우터입니다. 편집자 이메일 로그인, 현재 사용자 조회, 로그아웃을 제공합니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agency_cms.database import get_db
from agency_cms.middleware.auth_middleware import get_current_user
from agency_cms.models.user import User
from agency_cms.schemas.user import LoginRequest, TokenResponse, UserOut
from agency_cms.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.login_by_email(db, request.email)
    return TokenResponse(
        access_token=auth_service.create_access_token(user),
        user=UserOut.model_validate(user),
    )


@router.post("/logout")
def logout(current_user: User = Depends(get_current_user)):
    # 토큰은 서버에 저장하지 않는다. 클라이언트가 폐기하면 된다.
    return {"message": "CMS 관리자 세션에서 로그아웃되었습니다."}


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
