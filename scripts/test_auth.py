"""Registration, login, bearer token guard and profile updates."""

import pytest
from conftest import register

from jobhub.config import settings
from jobhub.security import create_access_token, decode_access_token, hash_password, verify_password


def test_register_returns_user_and_token(client):
    response = client.post(
        "/auth/register",
        json={"name": "Jane Doe", "email": "Jane@Example.com", "password": "secret123", "role": "employer"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["user"]["email"] == "jane@example.com"
    assert body["user"]["role"] == "employer"
    assert "password_hash" not in body["user"]
    assert decode_access_token(body["token"]) == body["user"]["id"]


def test_register_defaults_to_jobseeker(client):
    response = client.post(
        "/auth/register",
        json={"name": "Sam", "email": "sam@example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "jobseeker"


def test_register_duplicate_email_conflicts(client):
    register(client, name="First", email="dup@example.com")
    response = client.post(
        "/auth/register",
        json={"name": "Second", "email": "DUP@example.com", "password": "secret123"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_register_validation_reports_each_field(client):
    response = client.post(
        "/auth/register",
        json={"name": "J", "email": "not-an-email", "password": "123"},
    )
    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["errors"]}
    assert fields == {"name", "email", "password"}


@pytest.mark.parametrize("email", ["a@b..com", "a@-.com", "a@.b.com", "plain@", "two@@example.com"])
def test_register_rejects_malformed_email(client, email):
    response = client.post(
        "/auth/register",
        json={"name": "Malformed", "email": email, "password": "secret123"},
    )
    assert response.status_code == 400
    assert [e["field"] for e in response.json()["errors"]] == ["email"]


def test_admin_self_registration_is_blocked(client):
    response = client.post(
        "/auth/register",
        json={"name": "Root", "email": "root@example.com", "password": "secret123", "role": "admin"},
    )
    assert response.status_code == 403


def test_admin_registration_when_enabled(client, monkeypatch):
    monkeypatch.setattr(settings, "allow_admin_registration", True)
    user, _ = register(client, name="Root", role="admin")
    assert user["role"] == "admin"


def test_login_and_me(client):
    user, _ = register(client, name="Login User", email="login@example.com")

    response = client.post("/auth/login", json={"email": "LOGIN@example.com", "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["id"] == user["id"]


def test_login_wrong_password(client):
    register(client, name="Login User", email="login@example.com")
    response = client.post("/auth/login", json={"email": "login@example.com", "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_login_unknown_email(client):
    response = client.post("/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
    assert response.status_code == 401


def test_missing_token_is_authentication_failure(client):
    response = client.get("/auth/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


def test_tampered_token_rejected(client):
    _, headers = register(client)
    headers = {"Authorization": headers["Authorization"] + "x"}
    response = client.get("/auth/me", headers=headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_expired_token_rejected(client):
    user, _ = register(client)
    token = create_access_token(user["id"], expires_minutes=-1)
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Token has expired"


def test_token_for_unknown_user_rejected(client):
    token = create_access_token("00000000-0000-0000-0000-000000000000")
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_profile_update_is_partial(client):
    user, headers = register(client, name="Old Name", email="old@example.com")

    response = client.put("/auth/profile", json={"bio": "Python developer"}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["bio"] == "Python developer"
    assert body["name"] == "Old Name"
    assert body["email"] == "old@example.com"


def test_profile_password_change(client):
    _, headers = register(client, name="Changer", email="changer@example.com")
    response = client.put("/auth/profile", json={"password": "newsecret"}, headers=headers)
    assert response.status_code == 200

    assert client.post("/auth/login", json={"email": "changer@example.com", "password": "secret123"}).status_code == 401
    assert client.post("/auth/login", json={"email": "changer@example.com", "password": "newsecret"}).status_code == 200


def test_profile_email_taken(client):
    register(client, name="Taken", email="taken@example.com")
    _, headers = register(client, name="Other", email="other@example.com")
    response = client.put("/auth/profile", json={"email": "taken@example.com"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already exists"


def test_profile_rejects_malformed_email(client):
    _, headers = register(client, name="Careful", email="careful@example.com")
    response = client.put("/auth/profile", json={"email": "careful@-.com"}, headers=headers)
    assert response.status_code == 400
    assert client.get("/auth/me", headers=headers).json()["email"] == "careful@example.com"


def test_password_hashing_roundtrip():
    hashed = hash_password("hunter22")
    assert hashed != "hunter22"
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)
    assert not verify_password("hunter22", "not-a-bcrypt-hash")
