"""관리자 콘텐츠 CRUD의 자동 버전 기록과 버전 이력 API를 검증하는 테스트입니다."""

from agency_cms.models.content_version import ContentVersion
from agency_cms.models.insight import Insight
from tests.conftest import auth_headers


def _create_insight(client, headers, **overrides):
    payload = {
        "title": "Old Title",
        "excerpt": "요약",
        "content": {"blocks": [{"type": "paragraph", "text": "본문"}]},
        "tags": ["cms"],
    }
    payload.update(overrides)
    resp = client.post("/api/admin/insights", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_content_records_initial_version(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight = _create_insight(client, headers)
    assert insight["slug"] == "old-title"
    assert insight["author_id"] == seed_users["editor"].user_id

    resp = client.get(f"/api/admin/content-versions/insights/{insight['insight_id']}", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 1
    assert data["versions"][0]["version_number"] == 1
    assert data["versions"][0]["change_summary"] == "Initial version"
    assert data["versions"][0]["is_current"] is True


def test_update_records_version_only_for_significant_changes(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    resp = client.post(
        "/api/admin/services",
        json={"title": "웹사이트 구축", "description": "구축", "sort_order": 1},
        headers=headers,
    )
    assert resp.status_code == 201
    service_id = resp.json()["service_id"]

    # 정렬 순서만 바뀐 경우 버전이 늘지 않는다.
    resp = client.put(f"/api/admin/services/{service_id}", json={"sort_order": 5}, headers=headers)
    assert resp.status_code == 200
    resp = client.get(f"/api/admin/content-versions/service/{service_id}", headers=headers)
    assert resp.json()["total"] == 1

    resp = client.put(f"/api/admin/services/{service_id}", json={"description": "리뉴얼"}, headers=headers)
    assert resp.status_code == 200
    resp = client.get(f"/api/admin/content-versions/services/{service_id}", headers=headers)
    data = resp.json()
    assert data["total"] == 2
    assert "Updated description" in data["versions"][0]["change_summary"]


def test_show_and_compare_versions(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight_id = _create_insight(client, headers)["insight_id"]
    client.put(f"/api/admin/insights/{insight_id}", json={"title": "New Title", "category": "news"}, headers=headers)

    resp = client.get(f"/api/admin/content-versions/insight/{insight_id}/1", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["content_data"]["title"] == "Old Title"

    resp = client.get(
        f"/api/admin/content-versions/insight/{insight_id}/compare",
        params={"v1": 1, "v2": 2},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["version1"]["version_number"] == 1
    assert data["version2"]["version_number"] == 2
    changes = {item["field"]: item["type"] for item in data["differences"]}
    assert changes == {"title": "modified", "category": "modified"}

    resp = client.get(f"/api/admin/content-versions/insight/{insight_id}/9", headers=headers)
    assert resp.status_code == 404


def test_restore_via_api_without_notes(client, db, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight_id = _create_insight(client, headers)["insight_id"]
    client.put(f"/api/admin/insights/{insight_id}", json={"title": "New Title"}, headers=headers)

    resp = client.post(
        f"/api/admin/content-versions/insights/{insight_id}/restore",
        json={"version_number": 1},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["current_version"]["version_number"] == 1

    insight = db.get(Insight, insight_id)
    assert insight.title == "Old Title"
    assert insight.slug == "old-title"
    assert db.query(ContentVersion).count() == 2


def test_restore_via_api_with_notes_appends_version(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight_id = _create_insight(client, headers)["insight_id"]
    client.put(f"/api/admin/insights/{insight_id}", json={"title": "New Title"}, headers=headers)

    resp = client.post(
        f"/api/admin/content-versions/insights/{insight_id}/restore",
        json={"version_number": 1, "notes": "클라이언트 요청으로 되돌림"},
        headers=headers,
    )
    assert resp.status_code == 200
    current = resp.json()["current_version"]
    assert current["version_number"] == 3
    assert current["change_summary"] == "Restored to version 1"
    assert current["change_notes"] == "클라이언트 요청으로 되돌림"


def test_restore_unknown_version_404(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight_id = _create_insight(client, headers)["insight_id"]
    resp = client.post(
        f"/api/admin/content-versions/insights/{insight_id}/restore",
        json={"version_number": 4},
        headers=headers,
    )
    assert resp.status_code == 404


def test_publish_via_api(client, db, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight_id = _create_insight(client, headers)["insight_id"]

    resp = client.post(
        f"/api/admin/content-versions/insights/{insight_id}/publish",
        json={"version_number": 1},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["published_version"]["is_published"] is True

    insight = db.get(Insight, insight_id)
    assert insight.is_published is True
    assert insight.published_at is not None


def test_draft_via_api(client, db, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight_id = _create_insight(client, headers)["insight_id"]

    resp = client.post(
        f"/api/admin/content-versions/insights/{insight_id}/draft",
        json={"data": {"title": "Proposed"}, "change_notes": "제목 제안"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    draft = resp.json()["draft"]
    assert draft["version_number"] == 2
    assert draft["is_current"] is False
    assert draft["change_summary"] == "Draft version"
    assert draft["content_data"]["title"] == "Proposed"
    assert db.get(Insight, insight_id).title == "Old Title"


def test_draft_with_unknown_field_is_rejected(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight_id = _create_insight(client, headers)["insight_id"]
    resp = client.post(
        f"/api/admin/content-versions/insights/{insight_id}/draft",
        json={"data": {"views_count": 100}},
        headers=headers,
    )
    assert resp.status_code == 422
    assert "views_count" in resp.json()["detail"]


def test_unknown_type_or_content_404(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    assert client.get("/api/admin/content-versions/pages/1", headers=headers).status_code == 404
    assert client.get("/api/admin/content-versions/insights/999", headers=headers).status_code == 404


def test_viewer_can_read_but_not_write(client, seed_users):
    editor_headers = auth_headers(client, "editor@agency.test")
    viewer_headers = auth_headers(client, "viewer@agency.test")
    insight_id = _create_insight(client, editor_headers)["insight_id"]

    resp = client.get(f"/api/admin/content-versions/insights/{insight_id}", headers=viewer_headers)
    assert resp.status_code == 200
    resp = client.post(
        f"/api/admin/content-versions/insights/{insight_id}/restore",
        json={"version_number": 1},
        headers=viewer_headers,
    )
    assert resp.status_code == 403
    resp = client.post("/api/admin/insights", json={"title": "blocked"}, headers=viewer_headers)
    assert resp.status_code == 403


def test_delete_content_keeps_versions(client, db, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight_id = _create_insight(client, headers)["insight_id"]

    resp = client.delete(f"/api/admin/insights/{insight_id}", headers=headers)
    assert resp.status_code == 204
    assert db.query(ContentVersion).filter(ContentVersion.subject_id == insight_id).count() == 1
    assert client.get(f"/api/admin/content-versions/insights/{insight_id}", headers=headers).status_code == 404


def test_duplicate_titles_get_unique_slugs(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    first = _create_insight(client, headers, title="Same Title")
    second = _create_insight(client, headers, title="Same Title")
    assert first["slug"] == "same-title"
    assert second["slug"] == "same-title-2"


def test_draft_with_malformed_values_is_rejected(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    insight_id = _create_insight(client, headers)["insight_id"]
    url = f"/api/admin/content-versions/insights/{insight_id}/draft"

    resp = client.post(url, json={"data": {"published_at": "not-a-date"}}, headers=headers)
    assert resp.status_code == 422
    assert "published_at" in resp.json()["detail"]

    resp = client.post(url, json={"data": {"title": None}}, headers=headers)
    assert resp.status_code == 422
    assert "title" in resp.json()["detail"]

    resp = client.get(f"/api/admin/content-versions/insights/{insight_id}", headers=headers)
    assert resp.json()["total"] == 1
