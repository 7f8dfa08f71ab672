from __future__ import annotations

import hmac
import logging
from typing import Iterable, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.permissions import AccessPolicy
from ..auth.session import ActiveSession
from ..common.ids import generate_id
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_PASSWORD_MIN_LENGTH, WILDCARD
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import User, UserPermissions
from .repository import UserRepository

logger = logging.getLogger(__name__)

_HASH_METHODS = ("scrypt", "pbkdf2")


def is_password_hash(value: str) -> bool:
    """True for werkzeug-style `method$salt$hash` values."""

    if value.count("$") < 2:
        return False
    return value.split("$", 1)[0].split(":", 1)[0] in _HASH_METHODS


def normalize_companies(companies: Iterable[str]) -> tuple[str, ...]:
    """Ordered, de-duplicated selection; picking the wildcard replaces everything else."""

    if not isinstance(companies, (list, tuple)) or not all(isinstance(c, str) for c in companies):
        raise ValidationError("Allowed companies must be a list of company names")
    cleaned = [c.strip() for c in companies if c and c.strip()]
    if WILDCARD in cleaned:
        return (WILDCARD,)
    return tuple(dict.fromkeys(cleaned))


class AuthService:
    """Use case: sign in / sign out of the single active session."""

    def __init__(self, users: UserRepository, session: ActiveSession):
        self._users = users
        self._session = session

    def _verify(self, user: User, password: str) -> bool:
        stored = user.password or ""
        if not stored:
            return False
        if is_password_hash(stored):
            try:
                return check_password_hash(stored, password)
            except ValueError:
                return False

        # Legacy plaintext record: accept once, then store a hash instead.
        if not hmac.compare_digest(stored.encode("utf-8"), (password or "").encode("utf-8")):
            return False
        self._users.save(user.with_password(generate_password_hash(password)))
        logger.info("Re-hashed legacy plaintext password for user %r", user.username)
        return True

    def login(self, username: str, password: str) -> User:
        user = self._users.get_by_username((username or "").strip())
        if not user or not self._verify(user, password):
            raise AuthenticationError("Invalid username or password")

        self._session.begin(user)
        logger.info("User %r signed in", user.username)
        return user

    def logout(self) -> None:
        self._session.end()


class UserService:
    """Use case: manage accounts and their permissions (admin only)."""

    def __init__(
        self,
        users: UserRepository,
        employees: EmployeeRepository,
        policy: AccessPolicy,
        *,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ):
        self._users = users
        self._employees = employees
        self._policy = policy
        self._password_min_length = int(password_min_length)

    def _require_admin(self) -> None:
        if not self._policy.is_admin:
            raise AuthorizationError("Only administrators can manage users")

    def list_users(self) -> Sequence[User]:
        self._require_admin()
        return self._users.list_all()

    def save_user(
        self,
        *,
        username: str,
        display_name: str,
        role: Role = Role.USER,
        can_edit: bool = False,
        allowed_companies: Iterable[str] = (),
        password: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> User:
        self._require_admin()

        username = require_non_empty(username, "Username")
        display_name = require_non_empty(display_name, "Display name")
        role = Role(role)
        if not isinstance(can_edit, bool):
            raise ValidationError("Edit permission must be true or false")
        allowed = normalize_companies(allowed_companies)

        existing = self._users.get_by_id(user_id) if user_id else None
        if user_id and existing is None:
            raise ValidationError("User does not exist")

        if password is not None and not isinstance(password, str):
            raise ValidationError("Password must be text")
        if password:
            require_min_length(password, "Password", self._password_min_length)
        elif existing is None:
            raise ValidationError("Password is required for new users")

        clash = self._users.get_by_username(username)
        if clash and clash.id != user_id:
            raise ValidationError("Username already exists, please choose another one")

        if role == Role.ADMIN:
            permissions = UserPermissions(can_edit=True, allowed_companies=(WILDCARD,))
        else:
            permissions = UserPermissions(
                can_edit=can_edit,
                allowed_companies=allowed,
            )

        user = User(
            id=user_id or generate_id(),
            username=username,
            display_name=display_name,
            role=role,
            permissions=permissions,
            # None keeps the stored password on update.
            password=generate_password_hash(password) if password else None,
        )
        return self._users.save(user)

    def delete_user(self, user_id: str) -> None:
        self._require_admin()
        if not self._users.delete(user_id):
            raise ValidationError("User does not exist")

    def known_companies(self) -> list[str]:
        """Companies from employees plus those already granted to users."""

        companies = {e.company for e in self._employees.list_all()}
        for user in self._users.list_all():
            companies.update(user.permissions.allowed_companies)
        return sorted(c for c in companies if c and c != WILDCARD)
