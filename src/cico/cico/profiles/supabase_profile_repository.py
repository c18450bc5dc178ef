from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchall, fetchone
from .model import EmployeeMatch, Profile
from .repository import ProfileRepository


def _to_profile(row: Dict[str, Any]) -> Profile:
    department = row.get("departments") or {}
    return Profile(
        profile_id=str(row["id"]),
        company_id=str(row["company_id"]),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        display_name=row.get("display_name"),
        department_id=row.get("department_id"),
        employee_id=row.get("employee_id"),
        status=row.get("status") or "active",
        user_id=row.get("user_id"),
        department_name=department.get("name"),
    )


class SupabaseProfileRepository(ProfileRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def get_in_company(self, profile_id: str, company_id: str) -> Optional[Profile]:
        query = (
            self._conn.client()
            .table("profiles")
            .select("*, departments(name)")
            .eq("id", profile_id)
            .eq("company_id", company_id)
            .limit(1)
        )
        row = fetchone(query, context="profiles.get_in_company")
        return _to_profile(row) if row else None

    def lookup_by_identifier(self, company_id: str, identifier: str) -> Optional[EmployeeMatch]:
        query = self._conn.client().rpc(
            "lookup_employee_by_identifier",
            {"_company_id": company_id, "_identifier": identifier},
        )
        rows = fetchall(query, context="rpc.lookup_employee_by_identifier")
        if not rows:
            return None
        row = rows[0]
        return EmployeeMatch(
            profile_id=str(row["profile_id"]),
            user_id=row.get("user_id"),
            display_name=row.get("display_name"),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
        )

    def get_company_name(self, company_id: str) -> Optional[str]:
        query = self._conn.client().table("companies").select("company_name").eq("id", company_id).limit(1)
        row = fetchone(query, context="companies.get_company_name")
        return row.get("company_name") if row else None
