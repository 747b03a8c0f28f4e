"""스냅샷 간 필드 단위 차이 계산과 변경 요약 문구 생성을 담당합니다."""

import json
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from agency_cms.models.content_version import ContentVersion

INITIAL_VERSION_SUMMARY = "Initial version"
NO_CHANGES_SUMMARY = "No changes detected"


def _canonical(value: Any) -> str:
    # 직렬화 표현으로 비교해 dict/list는 구조적으로, True와 1은 다른 값으로 본다.
    return json.dumps(value, sort_keys=True, ensure_ascii=False, default=str)


def values_equal(left: Any, right: Any) -> bool:
    return _canonical(left) == _canonical(right)


def diff_data(this_data: Dict[str, Any], other_data: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """this_data를 new, other_data를 old로 보는 필드별 차이."""
    this_data = this_data or {}
    other_data = other_data or {}
    differences: Dict[str, Dict[str, Any]] = {}

    for key, value in this_data.items():
        if key not in other_data or not values_equal(other_data[key], value):
            differences[key] = {"old": other_data.get(key), "new": value}

    for key, value in other_data.items():
        if key not in this_data:
            differences[key] = {"old": value, "new": None}

    return differences


def diff(snapshot_a: ContentVersion, snapshot_b: ContentVersion) -> Dict[str, Dict[str, Any]]:
    return diff_data(snapshot_a.content_data, snapshot_b.content_data)


def _previous_snapshot(db: Session, snapshot: ContentVersion) -> Optional[ContentVersion]:
    return (
        db.query(ContentVersion)
        .filter(
            ContentVersion.subject_type == snapshot.subject_type,
            ContentVersion.subject_id == snapshot.subject_id,
            ContentVersion.version_number == snapshot.version_number - 1,
        )
        .first()
    )


def summarize(db: Session, snapshot: ContentVersion) -> str:
    if snapshot.change_summary:
        return snapshot.change_summary

    previous = _previous_snapshot(db, snapshot)
    if previous is None:
        return INITIAL_VERSION_SUMMARY

    clauses = []
    for field, change in diff(snapshot, previous).items():
        if change["old"] is None:
            clauses.append(f"Added {field}")
        elif change["new"] is None:
            clauses.append(f"Removed {field}")
        else:
            clauses.append(f"Updated {field}")
    return ", ".join(clauses) if clauses else NO_CHANGES_SUMMARY


def compare_fields(data1: Dict[str, Any], data2: Dict[str, Any]) -> List[Dict[str, Any]]:
    """관리자 비교 화면용 목록. data1 → data2 방향의 added/modified/removed."""
    data1 = data1 or {}
    data2 = data2 or {}
    differences: List[Dict[str, Any]] = []

    for key, value in data2.items():
        if key not in data1:
            differences.append({"field": key, "old_value": None, "new_value": value, "type": "added"})
        elif not values_equal(data1[key], value):
            differences.append({"field": key, "old_value": data1[key], "new_value": value, "type": "modified"})

    for key, value in data1.items():
        if key not in data2:
            differences.append({"field": key, "old_value": value, "new_value": None, "type": "removed"})

    return differences
