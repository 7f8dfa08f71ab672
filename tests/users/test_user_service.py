import json

import pytest
from werkzeug.security import check_password_hash

from attendance_tracker.core.constants import KEY_USERS
from attendance_tracker.core.enums import Role
from attendance_tracker.core.exceptions import AuthorizationError, ValidationError
from attendance_tracker.users.service import is_password_hash, normalize_companies


def test_user_management_requires_admin(container, login_as):
    login_as("clerk")
    with pytest.raises(AuthorizationError):
        container.user_service.list_users()
    with pytest.raises(AuthorizationError):
        container.user_service.save_user(username="x", display_name="X", password="secret123")


def test_create_user_hashes_password(container, login_admin):
    login_admin()
    user = container.user_service.save_user(
        username="clerk",
        display_name="Clerk",
        password="secret123",
        can_edit=True,
        allowed_companies=["Acme", "Beta", "Acme"],
    )

    stored = container.users_repo.get_by_id(user.id)
    assert stored.password != "secret123"
    assert check_password_hash(stored.password, "secret123")
    assert stored.permissions.allowed_companies == ("Acme", "Beta")


def test_new_user_requires_password(container, login_admin):
    login_admin()
    with pytest.raises(ValidationError):
        container.user_service.save_user(username="clerk", display_name="Clerk")


@pytest.mark.parametrize("field", ["username", "display_name"])
def test_required_fields(container, login_admin, field):
    login_admin()
    kwargs = dict(username="clerk", display_name="Clerk", password="secret123")
    kwargs[field] = "  "
    with pytest.raises(ValidationError):
        container.user_service.save_user(**kwargs)


def test_duplicate_username_rejected_without_partial_write(container, login_admin):
    login_admin()
    container.user_service.save_user(username="clerk", display_name="Clerk", password="secret123")
    before = container.store.get(KEY_USERS)

    with pytest.raises(ValidationError):
        container.user_service.save_user(username="clerk", display_name="Other", password="secret123")

    assert container.store.get(KEY_USERS) == before


def test_edit_without_password_keeps_login_working(container, login_admin):
    login_admin()
    user = container.user_service.save_user(username="clerk", display_name="Clerk", password="secret123")

    container.user_service.save_user(user_id=user.id, username="clerk", display_name="Clerk Renamed")

    container.auth_service.logout()
    assert container.auth_service.login("clerk", "secret123").display_name == "Clerk Renamed"


def test_edit_with_new_password_overwrites(container, login_admin):
    login_admin()
    user = container.user_service.save_user(username="clerk", display_name="Clerk", password="secret123")
    container.user_service.save_user(user_id=user.id, username="clerk", display_name="Clerk", password="another456")

    container.auth_service.logout()
    assert container.auth_service.login("clerk", "another456").id == user.id


def test_admin_role_forces_full_permissions(container, login_admin):
    login_admin()
    user = container.user_service.save_user(
        username="boss",
        display_name="Boss",
        password="secret123",
        role=Role.ADMIN,
        can_edit=False,
        allowed_companies=["Acme"],
    )

    assert user.permissions.can_edit is True
    assert user.permissions.allowed_companies == ("*",)


def test_wildcard_selection_collapses():
    assert normalize_companies(["Acme", "*", "Beta"]) == ("*",)
    assert normalize_companies(["Acme", " ", "Beta"]) == ("Acme", "Beta")


def test_legacy_plaintext_password_is_rehashed_on_login(container, store):
    legacy = [
        {
            "id": "u1",
            "username": "old",
            "displayName": "Old",
            "role": "user",
            "password": "plain-pass",
            "permissions": {"canEdit": True, "allowedCompanies": ["Acme"]},
        }
    ]
    store.set(KEY_USERS, json.dumps(legacy))

    container.auth_service.login("old", "plain-pass")

    stored = json.loads(store.get(KEY_USERS))[0]["password"]
    assert is_password_hash(stored)
    assert check_password_hash(stored, "plain-pass")


def test_known_companies_merges_employees_and_grants(container, login_admin, make_user, add_employee):
    login_admin()
    add_employee("e1", company="Beta")
    make_user("clerk", companies=("Acme", "Zeta"))

    assert container.user_service.known_companies() == ["Acme", "Beta", "Zeta"]


def test_delete_unknown_user_is_validation_error(container, login_admin):
    login_admin()
    with pytest.raises(ValidationError):
        container.user_service.delete_user("missing")


@pytest.mark.parametrize("value", ["Acme", None, 5, ["Acme", 1]])
def test_company_selection_must_be_list_of_names(value):
    with pytest.raises(ValidationError):
        normalize_companies(value)


def test_non_bool_edit_permission_rejected(container, login_admin):
    login_admin()
    with pytest.raises(ValidationError):
        container.user_service.save_user(
            username="clerk", display_name="Clerk", password="secret123", can_edit="false"
        )
    assert container.users_repo.get_by_username("clerk") is None
