from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from ..core.enums import Role


@dataclass(frozen=True)
class PinIdentity:
    """Identity resolved by the `authenticate_employee_pin` RPC."""

    profile_id: str
    user_id: Optional[str]
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "profile_id": self.profile_id,
            "user_id": self.user_id,
            "display_name": self.display_name,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }


@dataclass(frozen=True)
class UserContext:
    """Explicit per-request identity handed to guards and services.

    `user_id` is None for anonymous requests. `company_id` is the tenant of the
    caller's own profile and bounds every administrative query.
    """

    user_id: Optional[str]
    roles: FrozenSet[Role] = field(default_factory=frozenset)
    company_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def has_role(self, role: Role) -> bool:
        return role in self.roles

    @property
    def is_foreman(self) -> bool:
        return self.has_role(Role.FOREMAN)

    @property
    def is_admin(self) -> bool:
        return self.has_role(Role.ADMIN)


ANONYMOUS = UserContext(user_id=None)
