from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskhub.config import get_settings
from taskhub.main import create_app


@pytest.fixture
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[TestClient, None, None]:
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setenv("DB_CREATE_ALL", "true")
    get_settings.cache_clear()
    with TestClient(create_app()) as c:
        yield c
    get_settings.cache_clear()


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["service"] == "taskhub"
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed(client: TestClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_startup_creates_schema_and_commits(client: TestClient) -> None:
    payload = {"email": "life@example.com", "password": "password123"}
    assert client.post("/api/v1/auth/register", json=payload).status_code == 201

    login = client.post("/api/v1/auth/login", json=payload)
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

    created = client.post("/api/v1/tasks", headers=headers, json={"title": "persisted"})
    assert created.status_code == 201
    listed = client.get("/api/v1/tasks", headers=headers).json()
    assert listed["total"] == 1
    assert listed["tasks"][0]["title"] == "persisted"
