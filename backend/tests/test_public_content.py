"""공개 콘텐츠 API와 저장 시 캐시 무효화를 검증하는 테스트입니다."""

from agency_cms.services import cache_service
from tests.conftest import auth_headers


def test_public_lists_only_published(client, seed_users, seed_service):
    headers = auth_headers(client, "editor@agency.test")
    client.post("/api/admin/services", json={"title": "비공개 서비스"}, headers=headers)

    resp = client.get("/api/public/services")
    assert resp.status_code == 200
    titles = [item["title"] for item in resp.json()]
    assert titles == ["웹사이트 구축"]


def test_public_cache_is_invalidated_on_save(client, seed_users, seed_service):
    headers = auth_headers(client, "editor@agency.test")
    assert [s["title"] for s in client.get("/api/public/services").json()] == ["웹사이트 구축"]

    resp = client.put(
        f"/api/admin/services/{seed_service.service_id}", json={"title": "웹 구축"}, headers=headers
    )
    assert resp.status_code == 200
    assert [s["title"] for s in client.get("/api/public/services").json()] == ["웹 구축"]


def test_public_cache_serves_stale_until_invalidated(client, db, seed_service):
    assert client.get("/api/public/services").json()[0]["title"] == "웹사이트 구축"

    # 저장 경로를 거치지 않은 변경은 캐시에 반영되지 않는다.
    seed_service.title = "직접 수정"
    db.commit()
    assert client.get("/api/public/services").json()[0]["title"] == "웹사이트 구축"

    cache_service.invalidate_content("service")
    assert client.get("/api/public/services").json()[0]["title"] == "직접 수정"


def test_restore_busts_public_cache(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    resp = client.post(
        "/api/admin/insights",
        json={"title": "First Take", "is_published": True},
        headers=headers,
    )
    insight = resp.json()
    client.put(f"/api/admin/insights/{insight['insight_id']}", json={"title": "Second Take"}, headers=headers)
    assert client.get("/api/public/insights/first-take").json()["title"] == "Second Take"

    client.post(
        f"/api/admin/content-versions/insights/{insight['insight_id']}/restore",
        json={"version_number": 1},
        headers=headers,
    )
    assert client.get("/api/public/insights/first-take").json()["title"] == "First Take"


def test_public_insight_404_for_unpublished(client, seed_insight):
    assert client.get(f"/api/public/insights/{seed_insight.slug}").status_code == 404


def test_home_groups_featured_content(client, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    client.post("/api/admin/services", json={"title": "추천", "is_featured": True, "is_published": True}, headers=headers)
    client.post("/api/admin/services", json={"title": "일반", "is_published": True}, headers=headers)
    client.post(
        "/api/admin/portfolio",
        json={"title": "대표 사례", "is_featured": True, "is_published": True, "project_date": "2026-03-31"},
        headers=headers,
    )
    client.post("/api/admin/insights", json={"title": "새 글", "is_published": True}, headers=headers)

    resp = client.get("/api/public/home")
    assert resp.status_code == 200
    data = resp.json()
    assert [s["title"] for s in data["featured_services"]] == ["추천"]
    assert data["featured_portfolio"][0]["project_date"] == "2026-03-31"
    assert [i["title"] for i in data["latest_insights"]] == ["새 글"]


def test_disabled_cache_reads_through(client, db, seed_service, monkeypatch):
    monkeypatch.setattr(cache_service.settings, "CACHE_ENABLED", False)
    client.get("/api/public/services")
    seed_service.title = "즉시 반영"
    db.commit()
    assert client.get("/api/public/services").json()[0]["title"] == "즉시 반영"
