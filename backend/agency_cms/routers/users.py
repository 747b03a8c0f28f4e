"""Users 기능 API 라우터입니다. 관리자 전용 사용자/역할 관리 엔드포인트를 제공합니다."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from agency_cms.database import get_db
from agency_cms.middleware.auth_middleware import require_roles
from agency_cms.models.user import User
from agency_cms.schemas.user import UserCreate, UserOut, UserUpdate
from agency_cms.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserOut])
def list_users(
    include_inactive: bool = False,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    return user_service.list_users(db, include_inactive=include_inactive)


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles("admin")),
):
    return user_service.create_user(db, data)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("admin")),
):
    return user_service.update_user(db, user_id, data, current_user)
