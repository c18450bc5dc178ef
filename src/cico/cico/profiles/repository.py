from __future__ import annotations

from typing import Optional, Protocol

from .model import EmployeeMatch, Profile


class ProfileRepository(Protocol):
    """Repository interface for `profiles` (and the company name lookup badges need)."""

    def get_in_company(self, profile_id: str, company_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def lookup_by_identifier(self, company_id: str, identifier: str) -> Optional[EmployeeMatch]:
        raise NotImplementedError

    def get_company_name(self, company_id: str) -> Optional[str]:
        raise NotImplementedError
