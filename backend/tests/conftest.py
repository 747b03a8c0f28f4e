import os

# bcrypt 기본 cost는 테스트에 너무 느리다. settings 로드 전에 지정해야 한다.
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from agency_cms.database import Base, get_db
from agency_cms.main import app
from agency_cms.models.insight import Insight
from agency_cms.models.portfolio import PortfolioItem
from agency_cms.models.service import Service
from agency_cms.models.user import User
from agency_cms.services import cache_service

TEST_DB_URL = "sqlite:///./test_agency_cms.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    cache_service.clear()
    yield
    cache_service.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(email="admin@agency.test", name="Admin", role="admin"),
        "editor": User(email="editor@agency.test", name="Editor", role="editor"),
        "editor2": User(email="editor2@agency.test", name="Editor Two", role="editor"),
        "viewer": User(email="viewer@agency.test", name="Viewer", role="viewer"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_insight(db, seed_users):
    insight = Insight(
        title="Old Title",
        slug="old-title",
        excerpt="요약",
        content={"blocks": [{"type": "paragraph", "text": "본문"}]},
        tags=["cms"],
        author_id=seed_users["editor"].user_id,
        is_published=False,
    )
    db.add(insight)
    db.commit()
    db.refresh(insight)
    return insight


@pytest.fixture
def seed_service(db):
    service = Service(title="웹사이트 구축", slug="web", description="구축", is_published=True, sort_order=1)
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def seed_portfolio(db):
    item = PortfolioItem(title="커머스 리뉴얼", slug="commerce", client="A 리테일", is_published=True)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def get_token(client, email: str) -> str:
    resp = client.post("/api/auth/login", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
