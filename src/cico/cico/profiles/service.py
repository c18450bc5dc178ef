from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import EmployeeMatch
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use cases: manual employee lookup at the kiosk and badge verification."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def lookup_employee(self, *, company_id: str, identifier: str) -> EmployeeMatch:
        identifier = require_non_empty(identifier, "identifier")
        match = self._profiles.lookup_by_identifier(company_id, identifier)
        if not match:
            logger.info("[lookup-employee] No employee found in company %s", company_id)
            raise NotFoundError("Employee not found")
        logger.info("[lookup-employee] Found employee %s", match.profile_id)
        return match

    def verify_badge(self, *, company_id: str, profile_id: str) -> dict:
        profile = self._profiles.get_in_company(profile_id, company_id)
        if not profile:
            return {"valid": False, "error": "Employee not found"}
        if not profile.is_active:
            return {"valid": False, "error": "Employee is not active"}

        company_name: Optional[str] = self._profiles.get_company_name(company_id)
        return {
            "valid": True,
            "employee": {
                "name": profile.name,
                "employee_id": profile.employee_id,
                "department": profile.department_name,
                "status": profile.status,
            },
            "company": company_name,
        }
