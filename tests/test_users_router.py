# tests/test_users_router.py
import pytest
from fastapi.testclient import TestClient

from roombooking.main import app
from roombooking.models import UserRole

client = TestClient(app)


@pytest.fixture
def headers(db, make_user, auth_headers):
    make_user("alice", role=UserRole.ADMIN)
    make_user("bob")
    make_user("carol")
    return {
        "admin": auth_headers(client, "alice"),
        "bob": auth_headers(client, "bob"),
        "carol": auth_headers(client, "carol"),
    }


def _new_user(**overrides):
    payload = {
        "username": "dave.smith",
        "email": "dave@example.com",
        "password": "Str0ng!Pass",
        "first_name": "Dave",
        "last_name": "Smith",
    }
    payload.update(overrides)
    return payload


def test_admin_creates_user_who_can_log_in(headers):
    resp = client.post("/api/users", json=_new_user(), headers=headers["admin"])
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["id"].startswith("emp-")
    assert data["role"] == "Employee"
    assert data["full_name"] == "Dave Smith"
    assert "password" not in data and "password_hash" not in data

    resp = client.post("/api/auth/login", json={"username": "dave.smith", "password": "Str0ng!Pass"})
    assert resp.status_code == 200


@pytest.mark.parametrize(
    "overrides",
    [
        {"password": "weakpass"},
        {"password": "NoDigits!!"},
        {"email": "not-an-email"},
        {"username": "has space"},
        {"first_name": "R2D2"},
    ],
)
def test_invalid_user_payloads(headers, overrides):
    resp = client.post("/api/users", json=_new_user(**overrides), headers=headers["admin"])
    assert resp.status_code == 422


def test_duplicate_username_and_email(headers):
    resp = client.post("/api/users", json=_new_user(username="bob"), headers=headers["admin"])
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username already exists"

    resp = client.post("/api/users", json=_new_user(email="bob@example.com"), headers=headers["admin"])
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already exists"


def test_only_admins_create_or_list_users(headers):
    assert client.post("/api/users", json=_new_user(), headers=headers["bob"]).status_code == 403
    assert client.get("/api/users", headers=headers["bob"]).status_code == 403

    resp = client.get("/api/users", headers=headers["admin"])
    assert sorted(u["username"] for u in resp.json()) == ["alice", "bob", "carol"]


def test_profile_access_is_self_or_admin(headers):
    assert client.get("/api/users/emp-bob", headers=headers["bob"]).status_code == 200
    assert client.get("/api/users/emp-bob", headers=headers["admin"]).status_code == 200

    resp = client.get("/api/users/emp-bob", headers=headers["carol"])
    assert resp.status_code == 403
    assert resp.json()["code"] == "forbidden"

    resp = client.get("/api/users/emp-nobody", headers=headers["admin"])
    assert resp.status_code == 404


def test_update_own_profile(headers):
    resp = client.put(
        "/api/users/emp-bob",
        json={"middle_name": "James", "phone": "+15550100"},
        headers=headers["bob"],
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["full_name"] == "Bob James Tester"
    assert data["phone"] == "+15550100"

    resp = client.put(
        "/api/users/emp-bob",
        json={"email": "carol@example.com"},
        headers=headers["bob"],
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "duplicate_user"


def test_change_password(headers):
    resp = client.post(
        "/api/users/emp-bob/change-password",
        json={"current_password": "Wrong@1234", "new_password": "N3w!Password"},
        headers=headers["bob"],
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_password"

    resp = client.post(
        "/api/users/emp-carol/change-password",
        json={"current_password": "Secret@123", "new_password": "N3w!Password"},
        headers=headers["bob"],
    )
    assert resp.status_code == 403

    resp = client.post(
        "/api/users/emp-bob/change-password",
        json={"current_password": "Secret@123", "new_password": "N3w!Password"},
        headers=headers["bob"],
    )
    assert resp.status_code == 200
    assert resp.json() == {"message": "Password changed successfully"}

    resp = client.post("/api/auth/login", json={"username": "bob", "password": "N3w!Password"})
    assert resp.status_code == 200
