from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import KEY_ACTIVE_USER
from ..storage.store import KeyValueStore
from ..users.model import User
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


class ActiveSession:
    """The single active user session.

    Only the user id is persisted (`active_user_id`); the user record itself
    is re-read on every access so permission edits take effect immediately.
    """

    def __init__(self, store: KeyValueStore, users: UserRepository):
        self._store = store
        self._users = users

    @property
    def user_id(self) -> Optional[str]:
        return self._store.get(KEY_ACTIVE_USER) or None

    @property
    def current_user(self) -> Optional[User]:
        user_id = self.user_id
        if not user_id:
            return None
        return self._users.get_by_id(user_id)

    def load(self) -> Optional[User]:
        """Restore the session from the persisted pointer, dropping a stale one."""

        user_id = self.user_id
        if not user_id:
            return None
        user = self._users.get_by_id(user_id)
        if user is None:
            logger.info("Dropping session pointer to missing user %r", user_id)
            self._store.remove(KEY_ACTIVE_USER)
        return user

    def begin(self, user: User) -> None:
        self._store.set(KEY_ACTIVE_USER, user.id)

    def end(self) -> None:
        self._store.remove(KEY_ACTIVE_USER)
