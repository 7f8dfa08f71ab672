from dataclasses import replace

import pytest

from attendance_tracker.core.constants import KEY_ACTIVE_USER
from attendance_tracker.core.exceptions import AuthenticationError
from attendance_tracker.users.model import UserPermissions


def test_login_persists_pointer_and_logout_clears_it(container, store, login_admin):
    user = login_admin()

    assert store.get(KEY_ACTIVE_USER) == user.id
    assert container.session.current_user.username == "admin"

    container.auth_service.logout()
    assert store.get(KEY_ACTIVE_USER) is None
    assert container.policy.is_authenticated is False


def test_wrong_password_raises_and_keeps_session_empty(container):
    with pytest.raises(AuthenticationError):
        container.auth_service.login("admin", "nope")
    assert container.session.current_user is None


def test_permissions_are_not_cached_across_edits(container, login_as):
    user = login_as("clerk", can_edit=True, companies=("Acme",))
    assert container.policy.can_edit is True

    container.users_repo.save(replace(user, permissions=UserPermissions(can_edit=False, allowed_companies=("Beta",))))

    assert container.policy.can_edit is False
    assert container.policy.can_view_company("Acme") is False
    assert container.policy.can_view_company("Beta") is True


def test_load_drops_pointer_to_deleted_user(container, store, login_as):
    user = login_as("clerk")
    container.users_repo.delete(user.id)

    assert container.session.load() is None
    assert store.get(KEY_ACTIVE_USER) is None
