"""Shared fixtures: a fresh SQLite database and upload dir per test."""

import os
import sys
from pathlib import Path

# Must be set before jobhub.config is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from jobhub.config import settings  # noqa: E402
from jobhub.db.base import dispose_engine, get_session_factory, init_db  # noqa: E402


@pytest.fixture
def upload_dir(tmp_path, monkeypatch) -> Path:
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(path))
    return path


@pytest.fixture
def db_url(tmp_path, monkeypatch) -> str:
    url = f"sqlite:///{tmp_path / 'test.db'}"
    monkeypatch.setattr(settings, "database_url", url)
    dispose_engine()
    yield url
    dispose_engine()


@pytest.fixture
def db(db_url, upload_dir):
    init_db()
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_url, upload_dir):
    from jobhub.api.app import create_app

    # Built after the fixtures patch settings so /uploads serves upload_dir
    with TestClient(create_app()) as c:
        yield c


def register(client, name="Test User", email=None, role="jobseeker", password="secret123"):
    """Register a user and return (user_json, auth_headers)."""
    email = email or f"{name.lower().replace(' ', '.')}@example.com"
    response = client.post(
        "/auth/register",
        json={"name": name, "email": email, "password": password, "role": role},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


def post_job(client, headers, **overrides):
    payload = {
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Nairobi, Kenya",
        "type": "Full-Time",
        "description": "Build APIs",
        "requirements": "SQL, Git",
    }
    payload.update(overrides)
    response = client.post("/jobs", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def employer(client):
    return register(client, name="Employer A", role="employer")


@pytest.fixture
def seeker(client):
    return register(client, name="Seeker B", role="jobseeker")


@pytest.fixture
def job(client, employer):
    _, headers = employer
    return post_job(client, headers)
