from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import generate_password_hash

from attendance_tracker.container import build_container
from attendance_tracker.core.enums import Role
from attendance_tracker.employees.model import Employee
from attendance_tracker.storage.store import MemoryKeyValueStore
from attendance_tracker.users.model import User, UserPermissions


@pytest.fixture
def fixed_today() -> date:
    return date(2026, 2, 10)


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def container(store):
    return build_container(store=store)


@pytest.fixture
def make_user(container):
    def _make(
        username: str = "clerk",
        *,
        password: str = "secret123",
        role: Role = Role.USER,
        can_edit: bool = True,
        companies: tuple[str, ...] = ("Acme",),
    ) -> User:
        user = User(
            id=f"user-{username}",
            username=username,
            display_name=username.title(),
            role=role,
            permissions=UserPermissions(can_edit=can_edit, allowed_companies=companies),
            password=generate_password_hash(password),
        )
        return container.users_repo.save(user)

    return _make


@pytest.fixture
def login_admin(container):
    def _login() -> User:
        return container.auth_service.login("admin", "admin123")

    return _login


@pytest.fixture
def login_as(container, make_user):
    def _login(username: str = "clerk", **kwargs) -> User:
        make_user(username, password="secret123", **kwargs)
        return container.auth_service.login(username, "secret123")

    return _login


@pytest.fixture
def add_employee(container):
    def _add(employee_id: str, *, company: str = "Acme", name: str | None = None, **kwargs) -> Employee:
        employee = Employee(
            id=employee_id,
            name=name or f"Employee {employee_id}",
            ref_id=kwargs.pop("ref_id", employee_id.upper()),
            phone=kwargs.pop("phone", ""),
            company=company,
            **kwargs,
        )
        return container.employees_repo.save(employee)

    return _add
