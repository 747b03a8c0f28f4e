"""관리자 API 인증 의존성입니다. Bearer JWT를 검증하고 역할(admin/editor/viewer)을 확인합니다."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from agency_cms.database import get_db
from agency_cms.models.user import User
from agency_cms.config import settings
from agency_cms.services.auth_service import ALGORITHM

security = HTTPBearer()


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="관리자 토큰이 유효하지 않거나 만료되었습니다. 다시 로그인해 주세요.",
        )


def _load_active_user(db: Session, user_id) -> User:
    return db.query(User).filter(User.user_id == int(user_id), User.is_active == True).first()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    payload = decode_token(credentials.credentials)
    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(status_code=401, detail="관리자 토큰에 사용자 정보가 없습니다.")

    user = _load_active_user(db, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="비활성화되었거나 삭제된 CMS 계정입니다.")
    return user


def require_roles(*roles: str):
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"이 작업은 {', '.join(roles)} 권한이 필요합니다.",
            )
        return current_user
    return checker


def get_optional_user(
    credentials: HTTPAuthorizationCredentials = Depends(HTTPBearer(auto_error=False)),
    db: Session = Depends(get_db),
):
    if credentials is None:
        return None
    try:
        payload = decode_token(credentials.credentials)
    except HTTPException:
        return None
    user_id = payload.get("sub")
    if user_id is None:
        return None
    return _load_active_user(db, user_id)
