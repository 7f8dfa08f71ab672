from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from ..core.constants import (
    DEFAULT_ADMIN_DISPLAY_NAME,
    DEFAULT_ADMIN_ID,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    KEY_USERS,
    WILDCARD,
)
from ..core.enums import Role
from ..storage.collection import JsonCollection
from ..storage.store import KeyValueStore
from .model import User, UserPermissions
from .repository import UserRepository

logger = logging.getLogger(__name__)


class StoreUserRepository(UserRepository):
    def __init__(
        self,
        store: KeyValueStore,
        *,
        admin_username: str = DEFAULT_ADMIN_USERNAME,
        admin_password: str = DEFAULT_ADMIN_PASSWORD,
        admin_display_name: str = DEFAULT_ADMIN_DISPLAY_NAME,
    ):
        self._users = JsonCollection(store, KEY_USERS)
        self._admin_username = admin_username
        self._admin_password = admin_password
        self._admin_display_name = admin_display_name

    def _default_admin(self) -> User:
        return User(
            id=DEFAULT_ADMIN_ID,
            username=self._admin_username,
            display_name=self._admin_display_name,
            role=Role.ADMIN,
            permissions=UserPermissions(can_edit=True, allowed_companies=(WILDCARD,)),
            password=generate_password_hash(self._admin_password),
        )

    def _parse(self, row: dict) -> Optional[User]:
        try:
            return User.from_dict(row)
        except (KeyError, ValueError, TypeError, AttributeError):
            logger.warning("Skipping malformed user row: %r", row)
            return None

    def _load(self) -> list[dict]:
        # Malformed rows are dropped here and disappear on the next write.
        rows = [r for r in self._users.load() if self._parse(r) is not None]
        if not rows:
            # First run: seed exactly one administrator.
            rows = [self._default_admin().to_dict()]
            self._users.save(rows)
            logger.info("Seeded default administrator %r", self._admin_username)
        return rows

    def list_all(self) -> Sequence[User]:
        return [User.from_dict(r) for r in self._load()]

    def get_by_id(self, user_id: str) -> Optional[User]:
        for user in self.list_all():
            if user.id == user_id:
                return user
        return None

    def get_by_username(self, username: str) -> Optional[User]:
        for user in self.list_all():
            if user.username == username:
                return user
        return None

    def save(self, user: User) -> User:
        rows = self._load()
        for i, row in enumerate(rows):
            if str(row.get("id")) == user.id:
                if not user.password:
                    user = user.with_password(row.get("password") or None)
                rows[i] = user.to_dict()
                break
        else:
            rows.append(user.to_dict())
        self._users.save(rows)
        return user

    def delete(self, user_id: str) -> bool:
        rows = self._load()
        kept = [r for r in rows if str(r.get("id")) != user_id]
        if len(kept) == len(rows):
            return False
        self._users.save(kept)
        return True
