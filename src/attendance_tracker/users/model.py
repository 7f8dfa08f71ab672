from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ..core.constants import WILDCARD
from ..core.enums import Role


def _require_id(data: dict[str, Any]) -> str:
    value = data.get("id")
    if not value:
        raise KeyError("id")
    return str(value)


@dataclass(frozen=True)
class UserPermissions:
    can_edit: bool = False
    allowed_companies: tuple[str, ...] = ()

    @property
    def all_companies(self) -> bool:
        return WILDCARD in self.allowed_companies


@dataclass(frozen=True)
class User:
    """Domain entity: application account.

    Note: Plain data object (no store access). `password` holds a werkzeug
    hash; legacy records may still carry plaintext until their next login.
    """

    id: str
    username: str
    display_name: str
    role: Role
    permissions: UserPermissions = field(default_factory=UserPermissions)
    password: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def with_password(self, password: Optional[str]) -> "User":
        return replace(self, password=password)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        """Single normalization step for persisted users (legacy records included)."""

        perms = data.get("permissions")
        if not isinstance(perms, dict):
            perms = {}
        allowed = perms.get("allowedCompanies") or []
        if isinstance(allowed, str):
            allowed = [allowed]
        elif not isinstance(allowed, (list, tuple)):
            allowed = []
        try:
            role = Role(data.get("role", Role.USER.value))
        except (ValueError, TypeError):
            role = Role.USER

        password = data.get("password")

        return cls(
            id=_require_id(data),
            username=str(data.get("username", "")),
            display_name=str(data.get("displayName", "")),
            role=role,
            permissions=UserPermissions(
                can_edit=perms.get("canEdit") is True,
                allowed_companies=tuple(dict.fromkeys(str(c) for c in allowed)),
            ),
            password=password if isinstance(password, str) and password else None,
        )

    def to_dict(self, *, include_password: bool = True) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "username": self.username,
            "displayName": self.display_name,
            "role": self.role.value,
            "permissions": {
                "canEdit": self.permissions.can_edit,
                "allowedCompanies": list(self.permissions.allowed_companies),
            },
        }
        if include_password and self.password:
            out["password"] = self.password
        return out
