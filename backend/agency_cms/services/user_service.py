"""User Service 도메인 서비스 레이어입니다. 관리자 화면의 사용자/역할 관리를 담당합니다."""

from fastapi import HTTPException
from sqlalchemy.orm import Session

from agency_cms.models.user import User
from agency_cms.schemas.user import UserCreate, UserUpdate
from agency_cms.utils.permissions import ADMIN, ALL_ROLES


def _normalize_email(email: str) -> str:
    return str(email or "").strip().lower()


def _normalize_role_or_raise(role: str) -> str:
    normalized = str(role or "").strip().lower()
    if normalized not in ALL_ROLES:
        raise HTTPException(status_code=400, detail="유효하지 않은 역할입니다.")
    return normalized


def _ensure_not_last_admin_change(db: Session, user: User, next_role: str, next_active: bool):
    if user.role == ADMIN and user.is_active and (next_role != ADMIN or not next_active):
        active_admins = db.query(User).filter(User.role == ADMIN, User.is_active == True).count()
        if active_admins <= 1:
            raise HTTPException(status_code=400, detail="마지막 관리자 계정은 변경할 수 없습니다.")


def list_users(db: Session, include_inactive: bool = False):
    q = db.query(User)
    if not include_inactive:
        q = q.filter(User.is_active == True)
    return q.order_by(User.user_id).all()


def create_user(db: Session, data: UserCreate) -> User:
    normalized_role = _normalize_role_or_raise(data.role)
    email = _normalize_email(data.email)
    if not email:
        raise HTTPException(status_code=400, detail="이메일은 비워둘 수 없습니다.")

    existing = db.query(User).filter(User.email == email).first()
    if existing:
        raise HTTPException(status_code=409, detail="이미 존재하는 이메일입니다.")

    user = User(email=email, name=data.name, role=normalized_role, is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user_id: int, data: UserUpdate, current_user: User) -> User:
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="사용자를 찾을 수 없습니다.")

    payload = data.model_dump(exclude_unset=True)
    if "role" in payload:
        payload["role"] = _normalize_role_or_raise(payload["role"])

    if "email" in payload:
        next_email = _normalize_email(payload.get("email"))
        if not next_email:
            raise HTTPException(status_code=400, detail="이메일은 비워둘 수 없습니다.")
        existing = db.query(User).filter(User.email == next_email, User.user_id != user_id).first()
        if existing:
            raise HTTPException(status_code=409, detail="이미 사용 중인 이메일입니다.")
        payload["email"] = next_email

    next_role = payload.get("role", user.role)
    next_active = payload.get("is_active", user.is_active)
    if user.user_id == current_user.user_id and (next_role != ADMIN or next_active is False):
        raise HTTPException(status_code=400, detail="본인 관리자 계정의 권한/활성 상태는 변경할 수 없습니다.")
    _ensure_not_last_admin_change(db, user, next_role, next_active)

    for key, value in payload.items():
        setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user
