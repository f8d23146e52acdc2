# tests/test_api_auth.py
"""Tests for the registration and login endpoints."""

from fastapi.testclient import TestClient
from jose import jwt

from linkhub.models import User
from linkhub.services import SessionManager


def test_register_returns_working_token(client: TestClient, session_manager: SessionManager) -> None:
    response = client.post("/api/register", json={"username": "carol", "password": "pw"})

    assert response.status_code == 200
    token = response.json()["token"]
    user = session_manager.check(f"Bearer {token}")
    assert user.username == "carol"
    assert len(user.id) == 24


def test_register_token_does_not_leak_password(client: TestClient) -> None:
    response = client.post("/api/register", json={"username": "carol", "password": "pw"})

    claims = jwt.get_unverified_claims(response.json()["token"])
    assert set(claims["user"]) == {"username", "id"}


def test_register_taken_username(client: TestClient, alice: User) -> None:
    response = client.post("/api/register", json={"username": "alice", "password": "x"})

    assert response.status_code == 422
    assert response.json() == {
        "errors": [
            {"location": "body", "param": "username", "value": "alice", "msg": "already exists"}
        ]
    }


def test_register_requires_fields(client: TestClient) -> None:
    response = client.post("/api/register", json={"username": "", "password": "pw"})

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert [(err["location"], err["param"]) for err in errors] == [("body", "username")]


def test_register_invalid_json(client: TestClient) -> None:
    response = client.post(
        "/api/register",
        content=b'{"username": ',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"message": "invalid json body"}


def test_login(client: TestClient, alice: User, session_manager: SessionManager) -> None:
    response = client.post(
        "/api/login", json={"username": "alice", "password": "alice-password"}
    )

    assert response.status_code == 200
    user = session_manager.check(f"Bearer {response.json()['token']}")
    assert (user.username, user.id) == (alice.username, alice.id)


def test_each_login_opens_new_session(client: TestClient, alice: User) -> None:
    body = {"username": "alice", "password": "alice-password"}

    first = client.post("/api/login", json=body).json()["token"]
    second = client.post("/api/login", json=body).json()["token"]

    first_id = jwt.get_unverified_claims(first)["session_id"]
    second_id = jwt.get_unverified_claims(second)["session_id"]
    assert first_id != second_id


def test_login_unknown_user(client: TestClient) -> None:
    response = client.post("/api/login", json={"username": "ghost", "password": "pw"})

    assert response.status_code == 401
    assert response.json() == {"message": "user not found"}


def test_login_wrong_password(client: TestClient, alice: User) -> None:
    response = client.post("/api/login", json={"username": "alice", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"message": "invalid password"}
