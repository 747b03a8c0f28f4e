from tests.conftest import auth_headers


def test_login_success(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "admin@agency.test"})
    assert resp.status_code == 200
    data = resp.json()
    assert "access_token" in data
    assert data["user"]["role"] == "admin"


def test_login_email_is_case_insensitive(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": " Editor@Agency.test "})
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "editor@agency.test"


def test_login_unknown_email(client, seed_users):
    resp = client.post("/api/auth/login", json={"email": "nobody@agency.test"})
    assert resp.status_code == 401


def test_login_inactive_user(client, db, seed_users):
    seed_users["viewer"].is_active = False
    db.commit()
    resp = client.post("/api/auth/login", json={"email": "viewer@agency.test"})
    assert resp.status_code == 401


def test_me_authenticated(client, seed_users):
    headers = auth_headers(client, "admin@agency.test")
    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["email"] == "admin@agency.test"


def test_me_unauthenticated(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code in (401, 403)  # HTTPBearer raises 401 or 403 depending on version


def test_me_invalid_token(client):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_logout(client, seed_users):
    headers = auth_headers(client, "admin@agency.test")
    resp = client.post("/api/auth/logout", headers=headers)
    assert resp.status_code == 200


def test_token_carries_user_and_role(client, seed_users):
    from jose import jwt

    from agency_cms.config import settings
    from agency_cms.services.auth_service import ALGORITHM

    token = client.post("/api/auth/login", json={"email": "editor@agency.test"}).json()["access_token"]
    claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    assert claims["sub"] == str(seed_users["editor"].user_id)
    assert claims["role"] == "editor"


def test_token_of_deactivated_editor_is_rejected(client, db, seed_users):
    headers = auth_headers(client, "editor@agency.test")
    seed_users["editor"].is_active = False
    db.commit()

    resp = client.get("/api/auth/me", headers=headers)
    assert resp.status_code == 401
    assert "CMS 계정" in resp.json()["detail"]
