"""버전/미리보기 도메인에서 발생하는 예외 정의입니다.

라우터에서 잡지 않은 예외는 main.py의 핸들러가 HTTPException과 같은
``{"detail": ...}`` 형태로 응답합니다.
"""


class CMSError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthorshipError(CMSError):
    """스냅샷 작성자(acting user)를 확인할 수 없는 경우."""

    status_code = 401


class ValidationError(CMSError):
    status_code = 422


class NotFoundError(CMSError):
    status_code = 404


class VersionConflictError(CMSError):
    """재시도 후에도 버전 번호 할당이 충돌한 경우."""

    status_code = 409
