import json

from werkzeug.security import check_password_hash

from attendance_tracker.core.constants import KEY_USERS
from attendance_tracker.core.enums import Role
from attendance_tracker.storage.store import MemoryKeyValueStore
from attendance_tracker.users.model import User, UserPermissions
from attendance_tracker.users.store_user_repository import StoreUserRepository


def test_first_listing_seeds_single_admin_and_is_idempotent():
    repo = StoreUserRepository(MemoryKeyValueStore())

    first = repo.list_all()
    second = repo.list_all()

    assert len(first) == 1
    assert len(second) == 1
    admin = first[0]
    assert admin.id == second[0].id == "admin-001"
    assert admin.role == Role.ADMIN
    assert admin.permissions.can_edit is True
    assert admin.permissions.allowed_companies == ("*",)
    assert check_password_hash(admin.password, "admin123")


def test_seeding_skipped_when_users_exist():
    existing = [{"id": "u1", "username": "x", "displayName": "X", "role": "user", "password": "pw"}]
    store = MemoryKeyValueStore({KEY_USERS: json.dumps(existing)})

    users = StoreUserRepository(store).list_all()

    assert [u.id for u in users] == ["u1"]


def test_legacy_user_without_permissions_normalizes_to_no_access():
    legacy = [{"id": "u1", "username": "x", "displayName": "X", "role": "user", "password": "pw"}]
    repo = StoreUserRepository(MemoryKeyValueStore({KEY_USERS: json.dumps(legacy)}))

    user = repo.get_by_id("u1")

    assert user.permissions == UserPermissions(can_edit=False, allowed_companies=())


def _user(password=None):
    return User(
        id="u1",
        username="clerk",
        display_name="Clerk",
        role=Role.USER,
        permissions=UserPermissions(can_edit=True, allowed_companies=("Acme",)),
        password=password,
    )


def test_update_without_password_preserves_stored_password():
    repo = StoreUserRepository(MemoryKeyValueStore())
    repo.save(_user(password="stored-hash"))

    repo.save(_user(password=None))
    repo.save(_user(password=""))

    assert repo.get_by_id("u1").password == "stored-hash"


def test_update_with_password_overwrites():
    repo = StoreUserRepository(MemoryKeyValueStore())
    repo.save(_user(password="old-hash"))

    repo.save(_user(password="new-hash"))

    assert repo.get_by_id("u1").password == "new-hash"


def test_delete_user():
    repo = StoreUserRepository(MemoryKeyValueStore())
    repo.save(_user(password="h"))

    assert repo.delete("u1") is True
    assert repo.delete("u1") is False
    assert repo.get_by_id("u1") is None


def test_row_without_id_is_skipped():
    rows = [
        {"username": "ghost"},
        {"id": "u1", "username": "x", "displayName": "X", "role": "user", "password": "pw"},
    ]
    repo = StoreUserRepository(MemoryKeyValueStore({KEY_USERS: json.dumps(rows)}))

    assert [u.id for u in repo.list_all()] == ["u1"]
    assert repo.get_by_username("ghost") is None


def test_only_malformed_rows_seeds_admin(container, store):
    store.set(KEY_USERS, '[{"username":"ghost"}]')

    users = container.users_repo.list_all()

    assert [u.id for u in users] == ["admin-001"]
    assert container.auth_service.login("admin", "admin123").id == "admin-001"


def test_non_object_permissions_normalize_to_no_access():
    rows = [
        {"id": "u1", "username": "x", "displayName": "X", "role": "user", "permissions": "all"},
        {"id": "u2", "username": "y", "displayName": "Y", "role": 7, "permissions": {"canEdit": "false", "allowedCompanies": 3}},
    ]
    repo = StoreUserRepository(MemoryKeyValueStore({KEY_USERS: json.dumps(rows)}))

    x, y = repo.get_by_id("u1"), repo.get_by_id("u2")

    assert x.permissions == UserPermissions(can_edit=False, allowed_companies=())
    assert y.permissions == UserPermissions(can_edit=False, allowed_companies=())
    assert y.role == Role.USER
