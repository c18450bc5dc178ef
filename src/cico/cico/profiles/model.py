from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Profile:
    """Employee record, distinct from the authentication identity (`user_id`)."""

    profile_id: str
    company_id: str
    first_name: Optional[str]
    last_name: Optional[str]
    display_name: Optional[str]
    department_id: Optional[str]
    employee_id: Optional[str]
    status: str = "active"
    user_id: Optional[str] = None
    department_name: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def name(self) -> str:
        return display_name_for(self.display_name, self.first_name, self.last_name)


@dataclass(frozen=True)
class EmployeeMatch:
    """Result of a manual lookup; deliberately carries no PIN information."""

    profile_id: str
    user_id: Optional[str]
    display_name: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]


def display_name_for(display_name: Optional[str], first_name: Optional[str], last_name: Optional[str]) -> str:
    if display_name:
        return display_name
    full = f"{first_name or ''} {last_name or ''}".strip()
    return full or "Unknown"
