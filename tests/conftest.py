import os

# Must be set before calendlyx builds its settings and engine.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TIMEZONE"] = "UTC"
os.environ["ADMIN_EMAIL"] = "admin@activities.com"
os.environ["ADMIN_PASSWORD"] = "admin123"

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from calendlyx.db.session import Base, SessionLocal, engine, init_db  # noqa: E402
from calendlyx.main import app  # noqa: E402
from calendlyx.services.auth import admin_sessions  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_db():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)
    admin_sessions.clear()


@pytest.fixture
def db():
    with SessionLocal() as session:
        yield session


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    response = client.post("/api/auth/login", json={"email": "admin@activities.com", "password": "admin123"})
    assert response.status_code == 200
    client.headers["Authorization"] = f"Bearer {response.json()['token']}"
    return client


@pytest.fixture
def make_activity(admin_client):
    def _make(title: str, start_at: datetime, end_at: datetime, **extra) -> dict:
        payload = {
            "title": title,
            "start_at": start_at.isoformat(),
            "end_at": end_at.isoformat(),
            **extra,
        }
        response = admin_client.post("/api/admin/activities", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
