from __future__ import annotations

from datetime import date, datetime

import pytest

from fakes import InMemoryDB, build_fake_container
from halaqat.core.enums import Role
from halaqat.staff.model import Actor

PASSWORDS = {
    Role.DIRECTOR: "director123",
    Role.SUPERVISOR: "supervisor123",
    Role.TEACHER: "teacher123",
    Role.STUDENT_AFFAIRS: "affairs123",
}

EMAILS = {
    Role.DIRECTOR: "director@halaqat.local",
    Role.SUPERVISOR: "supervisor@halaqat.local",
    Role.TEACHER: "teacher@halaqat.local",
    Role.STUDENT_AFFAIRS: "affairs@halaqat.local",
}


@pytest.fixture
def today() -> date:
    # A Saturday.
    return date(2026, 10, 17)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 10, 20, 17, 30, 0)


@pytest.fixture
def db() -> InMemoryDB:
    return InMemoryDB()


@pytest.fixture
def container(db):
    return build_fake_container(db)


@pytest.fixture
def staff(container):
    """One active account per role, the director first."""
    users = {}
    for role in (Role.DIRECTOR, Role.SUPERVISOR, Role.TEACHER, Role.STUDENT_AFFAIRS):
        users[role] = container.staff_repo.add(
            name=f"{role.value.replace('_', ' ').title()} Demo",
            email=EMAILS[role],
            password=PASSWORDS[role],
            role=role,
        )
    return users


@pytest.fixture
def director(staff) -> Actor:
    user = staff[Role.DIRECTOR]
    return Actor(user_id=user.user_id, role=user.role, name=user.name)


@pytest.fixture
def affairs(staff) -> Actor:
    user = staff[Role.STUDENT_AFFAIRS]
    return Actor(user_id=user.user_id, role=user.role, name=user.name)


@pytest.fixture
def teacher(staff) -> Actor:
    user = staff[Role.TEACHER]
    return Actor(user_id=user.user_id, role=user.role, name=user.name)


@pytest.fixture
def guardian_payload() -> dict:
    return {"name": "Ahmed Hassan", "phone": "+20 100 123 4567", "relationship": "father"}


@pytest.fixture
def halqa(container):
    return container.halqat_repo.add(name="Halqa Al-Fajr", max_students=2)


@pytest.fixture
def app(monkeypatch, container, staff):
    monkeypatch.setenv("APP_ENV", "testing")
    from halaqat.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(role: Role):
        resp = client.post("/auth/login", json={"email": EMAILS[role], "password": PASSWORDS[role]})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
