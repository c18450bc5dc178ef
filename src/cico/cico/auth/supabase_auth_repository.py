from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..database.connection import SupabaseConnection
from ..database.supabase_base import fetchall, fetchone
from .model import PinIdentity
from .repository import AuthRepository

logger = logging.getLogger(__name__)


class SupabaseAuthRepository(AuthRepository):
    def __init__(self, conn: SupabaseConnection):
        self._conn = conn

    def authenticate_pin(self, company_id: str, pin: str) -> Sequence[PinIdentity]:
        query = self._conn.client().rpc(
            "authenticate_employee_pin",
            {"_company_id": company_id, "_pin": pin},
        )
        rows = fetchall(query, context="rpc.authenticate_employee_pin")
        return [
            PinIdentity(
                profile_id=str(r["profile_id"]),
                user_id=r.get("user_id"),
                display_name=r.get("display_name"),
                first_name=r.get("first_name"),
                last_name=r.get("last_name"),
            )
            for r in rows
        ]

    def get_user_id_for_token(self, token: str) -> Optional[str]:
        try:
            resp = self._conn.client().auth.get_user(token)
        except Exception as e:
            # gotrue raises on expired/invalid JWTs; treat as anonymous.
            logger.info("Bearer token rejected: %s", e)
            return None
        user = getattr(resp, "user", None)
        return str(user.id) if user else None

    def get_roles(self, user_id: str) -> Sequence[str]:
        query = self._conn.client().table("user_roles").select("role").eq("user_id", user_id)
        return [r["role"] for r in fetchall(query, context="user_roles.get_roles")]

    def get_company_id(self, user_id: str) -> Optional[str]:
        query = self._conn.client().table("profiles").select("company_id").eq("user_id", user_id).limit(1)
        row = fetchone(query, context="profiles.get_company_id")
        return str(row["company_id"]) if row and row.get("company_id") else None
