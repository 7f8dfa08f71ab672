"""Authorization rules.

Pure functions of (user, target); callers must evaluate them at check time
and never keep the result around, since a user's record may be edited
mid-session.
"""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar

from ..core.constants import WILDCARD
from ..users.model import User

T = TypeVar("T")


def is_admin(user: Optional[User]) -> bool:
    return user is not None and user.is_admin


def can_edit(user: Optional[User]) -> bool:
    if user is None:
        return False
    if user.is_admin:
        return True
    return bool(user.permissions.can_edit)


def can_view_company(user: Optional[User], company: str) -> bool:
    if user is None:
        return False
    if user.is_admin:
        return True
    allowed = user.permissions.allowed_companies
    # Exact, case-sensitive match. A company literally named "*" is only
    # visible through the stored wildcard, which is the same string.
    return WILDCARD in allowed or company in allowed


class AccessPolicy:
    """Evaluates the rules against whoever is signed in right now."""

    def __init__(self, session):
        self._session = session

    @property
    def user(self) -> Optional[User]:
        return self._session.current_user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return is_admin(self.user)

    @property
    def can_edit(self) -> bool:
        return can_edit(self.user)

    def can_view_company(self, company: str) -> bool:
        return can_view_company(self.user, company)

    def visible(self, items: Iterable[T], *, company_of=lambda item: item.company) -> list[T]:
        user = self.user
        return [item for item in items if can_view_company(user, company_of(item))]
