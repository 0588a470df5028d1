"""
Pytest fixtures: an isolated in-memory database per test and an API client bound to it.
"""

import os

# Settings are read at import time, so these go in before anything from teamtasks
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from main import app
from teamtasks.database import Base, create_db_engine, create_session_factory, get_db, init_db

API = "/api"
PASSWORD = "password123"


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth(account):
    """Authorization header for a register/login response"""
    return {"Authorization": f"Bearer {account['token']}"}


class Api:
    """Shortcuts for the multi-step setups most tests need"""

    def __init__(self, client):
        self.client = client

    def register(self, username, role="employee", admin_code=None, password=PASSWORD, email=None):
        body = {
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
            "role": role,
        }
        if admin_code is not None:
            body["adminCode"] = admin_code
        response = self.client.post(f"{API}/auth/register", json=body)
        # keep requests explicit: every call below carries its own bearer token
        self.client.cookies.clear()
        return response

    def admin(self, username):
        response = self.register(username, role="admin")
        assert response.status_code == 201, response.text
        return response.json()

    def employee(self, username, admin):
        response = self.register(username, admin_code=admin["adminCode"])
        assert response.status_code == 201, response.text
        return response.json()

    def onboard(self, admin, user, department="Engineering", position="Developer"):
        response = self.client.post(
            f"{API}/employees",
            json={"email": user["email"], "department": department, "position": position},
            headers=auth(admin),
        )
        assert response.status_code == 201, response.text
        return response.json()

    def task(self, admin, employee, title="Write report", status="pending", priority="medium", **extra):
        body = {"title": title, "employee_id": employee["id"], "status": status, "priority": priority, **extra}
        response = self.client.post(f"{API}/tasks", json=body, headers=auth(admin))
        assert response.status_code == 201, response.text
        return response.json()


@pytest.fixture
def api(client):
    return Api(client)


@pytest.fixture
def tenant(api):
    """One admin with an onboarded employee"""
    admin = api.admin("boss")
    user = api.employee("worker", admin)
    employee = api.onboard(admin, user)
    return {"admin": admin, "user": user, "employee": employee}
