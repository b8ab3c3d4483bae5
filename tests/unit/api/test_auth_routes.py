"""
Name: Auth Route Tests

Responsibilities:
  - Signup / login / me over HTTP
  - Error envelope shape {success, error, code, status}
  - Gate failures mapped to 401 / 403
"""

import pytest

from storefront.identity.users import UserRole

pytestmark = pytest.mark.unit


def test_signup_then_duplicate(client):
    payload = {"email": "new@example.com", "password": "pw-123456"}

    first = client.post("/api/auth/signup", json=payload)
    second = client.post("/api/auth/signup", json=payload)

    assert first.status_code == 201
    body = first.json()
    assert body["success"] is True
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["role"] == "customer"
    assert "passwordHash" not in body["user"]

    assert second.status_code == 409
    assert second.json()["error"] == "User already exists"
    assert second.json()["code"] == "CONFLICT"


def test_signup_missing_fields(client):
    response = client.post("/api/auth/signup", json={"email": "x@example.com"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Email and password are required"


def test_signup_cannot_choose_role(client):
    response = client.post(
        "/api/auth/signup",
        json={"email": "sneaky@example.com", "password": "pw", "role": "admin"},
    )

    assert response.status_code == 201
    assert response.json()["user"]["role"] == "customer"


def test_login_ok(client, make_user):
    user = make_user(email="buyer@example.com", password="secret-pw")

    response = client.post(
        "/api/auth/login", json={"email": "BUYER@example.com", "password": "secret-pw"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["token"].count(".") == 2
    assert body["expiresIn"] == 24 * 60 * 60
    assert body["user"] == {"id": str(user.id), "email": user.email, "role": "customer"}


def test_login_wrong_password(client, make_user):
    make_user(email="buyer@example.com", password="secret-pw")

    response = client.post(
        "/api/auth/login", json={"email": "buyer@example.com", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


def test_login_token_opens_me(client, make_user):
    make_user(email="me@example.com", password="pw")
    token = client.post(
        "/api/auth/login", json={"email": "me@example.com", "password": "pw"}
    ).json()["token"]

    response = client.get("/api/auth/me", headers={"x-auth-token": token})

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "me@example.com"


def test_me_requires_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    body = response.json()
    assert body["code"] == "MISSING_CREDENTIAL"
    assert body["error"] == "Access denied. No token provided."


def test_me_with_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer abc"})

    assert response.status_code == 401
    assert response.json()["code"] == "MALFORMED_TOKEN"


def test_users_listing_is_admin_only(client, make_user, auth_headers):
    customer = make_user()
    admin = make_user(role=UserRole.ADMIN)

    forbidden = client.get("/api/users", headers=auth_headers(customer))
    allowed = client.get("/api/users", headers=auth_headers(admin))

    assert forbidden.status_code == 403
    assert forbidden.json()["error"] == "Forbidden: You do not have admin privileges."
    assert allowed.status_code == 200
    emails = {u["email"] for u in allowed.json()["data"]}
    assert emails == {customer.email, admin.email}
    assert "createdAt" in allowed.json()["data"][0]
