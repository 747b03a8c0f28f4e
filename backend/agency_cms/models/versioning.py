"""버전 관리 대상 콘텐츠 모델이 공통으로 구현하는 믹스인입니다.

스냅샷(content_data)은 모델의 버전 대상 필드만 담은 JSON 매핑이며,
날짜/시각 값은 ISO-8601 문자열로 저장했다가 복원 시 다시 파싱합니다.
"""

import copy
from datetime import date, datetime
from typing import Any, Dict, Iterable, Tuple

from sqlalchemy import Date, DateTime

DEFAULT_IGNORED_FIELDS = ("updated_at", "views_count", "last_viewed_at")


class VersionedContent:
    # 스냅샷 테이블에 기록되는 타입 태그 (insight/service/portfolio_item)
    __version_type__: str = ""
    __versioned_fields__: Tuple[str, ...] = ()
    # 이 필드만 바뀐 수정은 새 버전을 만들지 않는다.
    __version_ignored_fields__: Tuple[str, ...] = DEFAULT_IGNORED_FIELDS

    @classmethod
    def id_field(cls) -> str:
        return cls.__mapper__.primary_key[0].key

    @property
    def content_id(self) -> int:
        return getattr(self, self.id_field())

    @property
    def version_identity(self) -> Tuple[str, int]:
        return self.__version_type__, self.content_id

    def to_content_data(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for field in self.__versioned_fields__:
            value = getattr(self, field)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            data[field] = copy.deepcopy(value)
        return data

    @staticmethod
    def _parse_temporal(column_type, value: Any) -> Any:
        """Date/DateTime 컬럼 값을 파싱한다. 잘못된 값은 ValueError."""
        if value is None or isinstance(value, (datetime, date)):
            return value
        if not isinstance(value, str):
            raise ValueError(f"날짜 문자열이 아닙니다: {value!r}")
        if isinstance(column_type, DateTime):
            return datetime.fromisoformat(value)
        return date.fromisoformat(value)

    def fill_content_data(self, data: Dict[str, Any]) -> None:
        columns = self.__table__.columns
        for field in self.__versioned_fields__:
            if field not in data:
                continue
            value = data[field]
            column_type = columns[field].type
            if isinstance(column_type, (Date, DateTime)):
                value = self._parse_temporal(column_type, value)
            setattr(self, field, copy.deepcopy(value))

    @classmethod
    def invalid_values(cls, data: Dict[str, Any]) -> Dict[str, str]:
        """버전 대상 필드 값 중 컬럼에 저장할 수 없는 것을 {field: 사유}로 돌려준다."""
        columns = cls.__table__.columns
        problems: Dict[str, str] = {}
        for field, value in data.items():
            if field not in columns:
                continue
            column = columns[field]
            if value is None:
                if not column.nullable:
                    problems[field] = "null일 수 없습니다"
                continue
            if isinstance(column.type, (Date, DateTime)):
                try:
                    cls._parse_temporal(column.type, value)
                except ValueError:
                    problems[field] = "ISO-8601 날짜 형식이 아닙니다"
        return problems

    @classmethod
    def unknown_fields(cls, keys: Iterable[str]) -> list:
        allowed = set(cls.__versioned_fields__)
        return sorted(k for k in keys if k not in allowed)

    @classmethod
    def significant_fields(cls, changed: Iterable[str]) -> list:
        ignored = set(cls.__version_ignored_fields__)
        return [field for field in changed if field not in ignored]
