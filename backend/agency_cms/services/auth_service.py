"""관리자 인증 서비스입니다. CMS 편집자 이메일로 로그인하고 관리자 API용 JWT를 발급합니다.

사내 SSO 연동 전까지는 등록된 활성 사용자의 이메일만으로 로그인합니다.
"""

import logging
from datetime import datetime, timedelta, timezone

from fastapi import HTTPException, status
from jose import jwt
from sqlalchemy.orm import Session

from agency_cms.config import settings
from agency_cms.models.user import User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def create_access_token(user: User) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    # role은 표시용이다. 권한 검사는 매 요청마다 DB의 사용자 정보로 한다.
    payload = {"sub": str(user.user_id), "role": user.role, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def login_by_email(db: Session, email: str) -> User:
    normalized = (email or "").strip().lower()
    user = db.query(User).filter(User.email == normalized, User.is_active == True).first()
    if not user:
        logger.info("[auth] login rejected for %s", normalized or "<empty>")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="CMS에 등록된 활성 편집자 계정이 아닙니다.",
        )
    logger.info("[auth] user %s logged in as %s", user.user_id, user.role)
    return user
