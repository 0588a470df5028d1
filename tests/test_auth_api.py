import re

import pytest

from conftest import API, PASSWORD, auth


def test_admin_registration_mints_admin_code(api):
    admin = api.admin("boss")

    assert admin["role"] == "admin"
    assert re.fullmatch(r"[0-9A-F]{8}", admin["adminCode"])
    assert admin["tenant_id"] == admin["id"]
    assert admin["token"]
    assert admin["token_type"] == "bearer"


def test_admin_codes_are_distinct(api):
    first = api.admin("boss")
    second = api.admin("rival")
    assert first["adminCode"] != second["adminCode"]


def test_employee_registration_binds_to_code_owner(api):
    admin = api.admin("boss")
    user = api.employee("worker", admin)

    assert user["role"] == "employee"
    assert user["adminCode"] is None
    assert user["tenant_id"] == admin["id"]


def test_admin_code_is_case_insensitive(api):
    admin = api.admin("boss")
    response = api.register("worker", admin_code=f" {admin['adminCode'].lower()} ")

    assert response.status_code == 201
    assert response.json()["tenant_id"] == admin["id"]


def test_registration_sets_session_cookie(client):
    body = {"username": "boss", "email": "boss@example.com", "password": PASSWORD, "role": "admin"}
    response = client.post(f"{API}/auth/register", json=body)

    assert response.status_code == 201
    assert response.cookies.get("token") == response.json()["token"]
    assert "httponly" in response.headers["set-cookie"].lower()

    # the cookie alone authenticates follow-up requests
    me = client.get(f"{API}/auth/me")
    assert me.status_code == 200
    assert me.json()["username"] == "boss"


@pytest.mark.parametrize("username, email", [
    ("boss", "other@example.com"),
    ("other", "boss@example.com"),
    ("other", "BOSS@example.com"),
])
def test_duplicate_identity_is_rejected(api, username, email):
    api.admin("boss")
    response = api.register(username, role="admin", email=email)

    assert response.status_code == 400
    assert response.json()["detail"] == "Username or email already exists"


def test_employee_without_code_is_rejected(api):
    response = api.register("worker")

    assert response.status_code == 400
    assert response.json()["detail"] == "Admin code is required for employee registration"


def test_employee_with_unknown_code_is_rejected(api):
    api.admin("boss")
    response = api.register("worker", admin_code="00000000")

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid admin code"


def test_short_password_is_rejected(api):
    response = api.register("boss", role="admin", password="abc")
    assert response.status_code == 400


def test_overlong_password_is_rejected(api):
    response = api.register("boss", role="admin", password="x" * 73)
    assert response.status_code == 400


@pytest.mark.parametrize("body", [
    {"username": "boss", "email": "not-an-email", "password": PASSWORD, "role": "admin"},
    {"username": "boss", "email": "boss@example.com", "password": PASSWORD, "role": "owner"},
    {"email": "boss@example.com", "password": PASSWORD},
])
def test_malformed_registration_is_a_bad_request(client, body):
    response = client.post(f"{API}/auth/register", json=body)
    assert response.status_code == 400


def test_login_returns_fresh_token(api, client):
    admin = api.admin("boss")
    response = client.post(f"{API}/auth/login", json={"username": "boss", "password": PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == admin["id"]
    assert body["adminCode"] == admin["adminCode"]
    assert client.get(f"{API}/auth/me", headers=auth(body)).status_code == 200


@pytest.mark.parametrize("username, password", [
    ("boss", "wrong-password"),
    ("nobody", PASSWORD),
])
def test_login_failure_does_not_reveal_which_part_was_wrong(api, client, username, password):
    api.admin("boss")
    response = client.post(f"{API}/auth/login", json={"username": username, "password": password})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_me_for_admin(api, client):
    admin = api.admin("boss")
    body = client.get(f"{API}/auth/me", headers=auth(admin)).json()

    assert body["role"] == "admin"
    assert body["admin_code"] == admin["adminCode"]
    assert body["admin_id"] is None
    assert body["employee"] is None


def test_me_for_employee_before_onboarding(api, client):
    admin = api.admin("boss")
    user = api.employee("worker", admin)
    body = client.get(f"{API}/auth/me", headers=auth(user)).json()

    assert body["admin_id"] == admin["id"]
    assert body["employee"] is None


def test_me_for_onboarded_employee(tenant, client):
    body = client.get(f"{API}/auth/me", headers=auth(tenant["user"])).json()

    assert body["employee"]["id"] == tenant["employee"]["id"]
    assert body["employee"]["department"] == "Engineering"


@pytest.mark.parametrize("headers", [
    {},
    {"Authorization": "Bearer not-a-token"},
])
def test_me_requires_valid_token(client, headers):
    response = client.get(f"{API}/auth/me", headers=headers)
    assert response.status_code == 401


def test_logout_clears_cookie(client):
    response = client.post(f"{API}/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}
    cookie = response.headers["set-cookie"]
    assert cookie.startswith("token=")
    assert "Max-Age=0" in cookie
