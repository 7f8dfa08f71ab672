from __future__ import annotations

import pytest

from attendance_tracker.main import create_app
from attendance_tracker.storage.store import MemoryKeyValueStore


@pytest.fixture
def app():
    return create_app(store=MemoryKeyValueStore(), settings_module="attendance_tracker.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, username="admin", password="admin123"):
    return client.post("/login", json={"username": username, "password": password})


def test_requires_login(client):
    assert client.get("/employees").status_code == 401


def test_bad_credentials(client):
    assert _login(client, password="wrong").status_code == 401


def test_login_and_me(client):
    resp = _login(client)
    assert resp.status_code == 200
    assert "password" not in resp.get_json()["user"]

    me = client.get("/me").get_json()
    assert me["isAdmin"] is True
    assert me["canEdit"] is True


def test_employee_attendance_and_report_flow(client):
    _login(client)
    resp = client.post("/employees", json={"name": "Sara Ali", "refId": "1001", "company": "Acme"})
    assert resp.status_code == 201
    employee_id = resp.get_json()["employee"]["id"]

    resp = client.post(f"/attendance/{employee_id}/2026-02-10", json={"status": "absent"})
    assert resp.get_json() == {"applied": True, "previous": None, "status": "absent"}

    resp = client.post(f"/attendance/{employee_id}/2026-02-10", json={"status": "absent"})
    assert resp.get_json()["status"] is None

    feed = client.get("/notifications").get_json()
    assert any(n["type"] == "alert" for n in feed["notifications"])

    sheet = client.get("/attendance?year=2026&month=2").get_json()
    assert len(sheet["days"]) == 28
    assert sheet["rows"][0]["employee"]["id"] == employee_id

    html = client.get("/reports")
    assert html.status_code == 200
    assert b"Sara Ali" in html.data


def test_validation_error_maps_to_400(client):
    _login(client)
    resp = client.post("/employees", json={"name": "", "refId": "1", "company": "Acme"})
    assert resp.status_code == 400
    assert resp.get_json()["error"]


def test_users_admin_only(client):
    _login(client)
    resp = client.post(
        "/users",
        json={
            "username": "clerk",
            "displayName": "Clerk",
            "password": "secret123",
            "role": "user",
            "permissions": {"canEdit": False, "allowedCompanies": ["Acme"]},
        },
    )
    assert resp.status_code == 201

    client.post("/logout")
    _login(client, "clerk", "secret123")

    assert client.get("/users").status_code == 403
    resp = client.post("/employees", json={"name": "X", "refId": "1", "company": "Acme"})
    assert resp.status_code == 403


def test_notifications_endpoints(client):
    _login(client)
    client.post("/employees", json={"name": "Sara", "refId": "1", "company": "Acme"})
    # The next request triggers today's reminder.
    feed = client.get("/notifications").get_json()
    assert feed["unreadCount"] >= 1

    assert client.post("/notifications/read-all").status_code == 200
    assert client.get("/notifications").get_json()["unreadCount"] == 0

    assert client.delete("/notifications").status_code == 200
    assert client.get("/notifications").get_json()["notifications"] == []


@pytest.mark.parametrize(
    "permissions",
    [
        {"canEdit": "false", "allowedCompanies": ["Acme"]},
        {"canEdit": False, "allowedCompanies": "Acme"},
        {"canEdit": False, "allowedCompanies": ["Acme", 3]},
        "everything",
    ],
)
def test_add_user_rejects_malformed_permissions(client, permissions):
    _login(client)
    resp = client.post(
        "/users",
        json={
            "username": "clerk",
            "displayName": "Clerk",
            "password": "secret123",
            "permissions": permissions,
        },
    )

    assert resp.status_code == 400
    usernames = [u["username"] for u in client.get("/users").get_json()["users"]]
    assert usernames == ["admin"]


def test_edit_user_rejects_string_can_edit(client):
    _login(client)
    created = client.post(
        "/users",
        json={
            "username": "clerk",
            "displayName": "Clerk",
            "password": "secret123",
            "permissions": {"canEdit": False, "allowedCompanies": ["Acme"]},
        },
    ).get_json()["user"]

    resp = client.put(
        f"/users/{created['id']}",
        json={"username": "clerk", "displayName": "Clerk", "permissions": {"canEdit": "false"}},
    )

    assert resp.status_code == 400
    users = {u["username"]: u for u in client.get("/users").get_json()["users"]}
    assert users["clerk"]["permissions"]["canEdit"] is False
