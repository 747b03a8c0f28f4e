"""Permissions 관련 공용 유틸리티 헬퍼입니다."""

from agency_cms.models.user import User


ADMIN = "admin"
EDITOR = "editor"
VIEWER = "viewer"

ADMIN_EDITOR = (ADMIN, EDITOR)
ALL_ROLES = (ADMIN, EDITOR, VIEWER)


def is_admin(user: User) -> bool:
    return user.role == ADMIN


def is_editor(user: User) -> bool:
    # 관리자는 편집자 권한을 포함한다.
    return user.role in ADMIN_EDITOR


def is_viewer(user: User) -> bool:
    return user.role in ALL_ROLES


def can_manage_content(user: User) -> bool:
    return is_editor(user)


def can_revoke_preview_link(user: User, created_by: int) -> bool:
    return is_admin(user) or user.user_id == created_by
